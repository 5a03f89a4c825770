"""Core data structures and definitions.

This package contains fundamental data types and game definitions:
- data_structures.py: Vector2 for positions and velocities
- game_enums.py: Centralized enums for slots, facing and attack state
- stage_config.py: Stage geometry and physics constants
"""

from .data_structures import Vector2
from .game_enums import (
    CombatantSlot,
    Facing,
    AttackState,
    MatchStatus,
    SLOT_NAMES,
)
from .stage_config import StageConfig, load_stage_config

__all__ = [
    "Vector2",
    "CombatantSlot",
    "Facing",
    "AttackState",
    "MatchStatus",
    "SLOT_NAMES",
    "StageConfig",
    "load_stage_config",
]
