"""Duel: a deterministic two-player sword fighting simulation."""

__version__ = "0.1.0"
