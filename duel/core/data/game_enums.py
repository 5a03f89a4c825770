"""Centralized game enums and constants.

This module contains the enums shared by the simulation core, the input
layer and the renderers, providing a single source of truth.
"""

from enum import Enum, auto


class CombatantSlot(Enum):
    """Which side of the match a combatant occupies.

    The value doubles as the evaluation order inside a tick: player one's
    attack and health checks always run before player two's.
    """
    PLAYER_ONE = 0
    PLAYER_TWO = 1

    @property
    def opponent(self) -> "CombatantSlot":
        return CombatantSlot.PLAYER_TWO if self is CombatantSlot.PLAYER_ONE else CombatantSlot.PLAYER_ONE


class Facing(Enum):
    """Horizontal direction a combatant is looking."""
    LEFT = -1
    RIGHT = 1


class AttackState(Enum):
    """Weapon attack state machine."""
    IDLE = auto()
    SWINGING = auto()


class MatchStatus(Enum):
    """Whether the match is still being played."""
    IN_PROGRESS = auto()
    WON = auto()


SLOT_NAMES = {
    CombatantSlot.PLAYER_ONE: "Player 1",
    CombatantSlot.PLAYER_TWO: "Player 2",
}
