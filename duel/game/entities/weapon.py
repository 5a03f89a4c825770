"""Melee weapon attached to a combatant.

The weapon owns the swing animation and the geometry of a strike. Its swing
is driven purely by tick count: the angle after ``n`` advances is
``SWING_START_ANGLE + n * SWING_STEP`` and the swing ends on the first tick
the angle would reach ``SWING_END_ANGLE``.
"""

import math
from typing import TYPE_CHECKING

from ...core.data import AttackState, Facing, Vector2

if TYPE_CHECKING:
    from .combatant import Combatant


SWING_START_ANGLE = -math.pi / 4
SWING_END_ANGLE = math.pi / 2
SWING_STEP = math.pi / 36
SWING_DURATION_TICKS = round((SWING_END_ANGLE - SWING_START_ANGLE) / SWING_STEP)


class Weapon:
    """A sword: swing state plus a single-point hit test."""

    def __init__(self, name: str = "sword"):
        self.name = name
        self.attack_state = AttackState.IDLE
        self.swing_angle = 0.0
        self.swing_ticks = 0

    @property
    def is_swinging(self) -> bool:
        return self.attack_state is AttackState.SWINGING

    def begin_swing(self) -> bool:
        """Start a swing unless one is already running.

        Returns:
            True if a new swing started, False if the weapon was mid-swing
        """
        if self.is_swinging:
            return False
        self.attack_state = AttackState.SWINGING
        self.swing_ticks = 0
        self.swing_angle = SWING_START_ANGLE
        return True

    def advance(self) -> None:
        """Move the swing forward one tick, returning to idle at the end of the arc."""
        if not self.is_swinging:
            return
        self.swing_ticks += 1
        if self.swing_ticks >= SWING_DURATION_TICKS:
            self.cancel()
        else:
            self.swing_angle = SWING_START_ANGLE + self.swing_ticks * SWING_STEP

    def cancel(self) -> None:
        self.attack_state = AttackState.IDLE
        self.swing_angle = 0.0
        self.swing_ticks = 0

    @staticmethod
    def attack_point(wielder: "Combatant") -> Vector2:
        """Point of contact: the wielder's front edge at centre height."""
        offset = wielder.half_width if wielder.facing is Facing.RIGHT else -wielder.half_width
        return Vector2(wielder.position.x + offset, wielder.position.y)

    def hits(self, wielder: "Combatant", target: "Combatant") -> bool:
        """Whether a strike from ``wielder`` would connect with ``target``.

        The target is treated as a circle of radius ``target.half_width``
        around its centre; the boundary itself does not count.
        """
        return self.attack_point(wielder).distance_to(target.position) < target.half_width

    def __repr__(self) -> str:
        return f"Weapon({self.name!r}, state={self.attack_state.name}, angle={self.swing_angle:.3f})"
