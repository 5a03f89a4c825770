"""Match entities.

- combatant.py: Combatant kinematics, health and attack state machine
- weapon.py: Weapon swing animation and hit test
"""

from .combatant import Combatant
from .weapon import (
    Weapon,
    SWING_START_ANGLE,
    SWING_END_ANGLE,
    SWING_STEP,
    SWING_DURATION_TICKS,
)

__all__ = [
    "Combatant",
    "Weapon",
    "SWING_START_ANGLE",
    "SWING_END_ANGLE",
    "SWING_STEP",
    "SWING_DURATION_TICKS",
]
