"""Core simulation engine value types.

This package contains the immutable values that flow across the simulation
boundary:
- intent.py: Validated per-tick input for one combatant
- match_state.py: Match outcome and read-only snapshots for presentation
"""

from .intent import Intent, InvalidIntentError, validate_horizontal
from .match_state import Outcome, CombatantSnapshot, MatchSnapshot

__all__ = [
    "Intent",
    "InvalidIntentError",
    "validate_horizontal",
    "Outcome",
    "CombatantSnapshot",
    "MatchSnapshot",
]
