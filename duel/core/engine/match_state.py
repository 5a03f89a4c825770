"""Match outcome and read-only snapshots.

Snapshots are the boundary between the simulation and presentation: they are
frozen and carry copies of every vector, so nothing a renderer does with them
can reach back into a live combatant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..data import AttackState, CombatantSlot, Facing, MatchStatus, Vector2


@dataclass(frozen=True)
class Outcome:
    """Terminal or non-terminal status of a match."""

    status: MatchStatus = MatchStatus.IN_PROGRESS
    winner: Optional[CombatantSlot] = None

    def __post_init__(self):
        if self.status is MatchStatus.WON and self.winner is None:
            raise ValueError("A won outcome needs a winner")
        if self.status is MatchStatus.IN_PROGRESS and self.winner is not None:
            raise ValueError("An in-progress outcome cannot have a winner")

    @classmethod
    def in_progress(cls) -> Outcome:
        return cls()

    @classmethod
    def won(cls, winner: CombatantSlot) -> Outcome:
        return cls(status=MatchStatus.WON, winner=winner)

    @property
    def is_over(self) -> bool:
        return self.status is not MatchStatus.IN_PROGRESS


@dataclass(frozen=True)
class CombatantSnapshot:
    """Everything a renderer needs to draw one combatant."""

    slot: CombatantSlot
    name: str
    position: Vector2
    velocity: Vector2
    facing: Facing
    health: int
    max_health: int
    attack_state: AttackState
    swing_angle: float
    width: float
    height: float

    @property
    def weapon_anchor(self) -> Vector2:
        """Point the weapon is drawn from: the front edge at centre height."""
        return Vector2(self.position.x + self.facing.value * self.width / 2, self.position.y)


@dataclass(frozen=True)
class MatchSnapshot:
    """Per-tick view of the entire match."""

    combatants: tuple[CombatantSnapshot, CombatantSnapshot]
    outcome: Outcome
    tick: int
    stage_width: float
    stage_height: float
    floor_y: float

    def combatant(self, slot: CombatantSlot) -> CombatantSnapshot:
        return self.combatants[slot.value]
