"""Combatant entity: kinematics, health and the attack state machine.

A combatant is a single plain class. There is exactly one shape of fighter,
so there is no component split and no inheritance hierarchy; the weapon is
the only attached object and its lifetime is the combatant's.

Property Access Patterns:
    combatant.position / combatant.velocity    mutable Vector2, physics owned
    combatant.health                           clamped to [0, max_health]
    combatant.attack_state / swing_angle       delegated to the weapon
"""

from typing import Optional

from ...core.data import AttackState, CombatantSlot, Facing, StageConfig, Vector2
from ...core.engine.intent import validate_horizontal
from .weapon import Weapon


class Combatant:
    """One of the two fighters in a match."""

    def __init__(
        self,
        name: str,
        position: Vector2,
        facing: Facing = Facing.RIGHT,
        stage: Optional[StageConfig] = None,
        slot: Optional[CombatantSlot] = None,
        weapon: Optional[Weapon] = None,
    ):
        """Create a combatant at rest.

        Args:
            name: Display name
            position: Centre point; copied so the caller keeps its own vector
            facing: Initial facing direction
            stage: Physics constants; defaults to the standard stage
            slot: Side of the match this combatant occupies, if any
            weapon: Attached weapon; a fresh sword if omitted
        """
        self.stage = stage or StageConfig()
        self.name = name
        self.slot = slot
        self.position = position.copy()
        self.velocity = Vector2(0.0, 0.0)
        self.facing = facing
        self.width = self.stage.combatant_width
        self.height = self.stage.combatant_height
        self.max_health = self.stage.max_health
        self._health = self.max_health
        self.weapon = weapon or Weapon()
        self.last_attack_hit = False

    # ============== Core Properties ==============

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def half_height(self) -> float:
        return self.height / 2

    @property
    def health(self) -> int:
        return self._health

    @health.setter
    def health(self, value: int) -> None:
        """Set health, clamped to [0, max_health]."""
        self._health = max(0, min(self.max_health, int(value)))

    @property
    def is_defeated(self) -> bool:
        return self._health <= 0

    @property
    def attack_state(self) -> AttackState:
        return self.weapon.attack_state

    @property
    def swing_angle(self) -> float:
        return self.weapon.swing_angle

    @property
    def is_attacking(self) -> bool:
        return self.weapon.is_swinging

    def is_grounded(self, floor_y: Optional[float] = None) -> bool:
        """Whether the lower edge is at or below the floor line."""
        floor = self.stage.floor_y if floor_y is None else floor_y
        return self.position.y + self.half_height >= floor

    # ============== Per-tick Operations ==============

    def apply_intent(
        self,
        horizontal: int,
        jump_requested: bool = False,
        fast_fall_requested: bool = False,
        floor_y: Optional[float] = None,
    ) -> None:
        """Turn this tick's intent into velocity changes.

        Horizontal velocity is replaced outright. Facing follows a non-zero
        direction and is otherwise left alone. A jump only takes effect from
        the ground; fast-fall adds to the downward velocity on top of gravity.

        Raises:
            InvalidIntentError: ``horizontal`` is not -1, 0 or 1
        """
        horizontal = validate_horizontal(horizontal)

        self.velocity.x = horizontal * self.stage.move_speed
        if horizontal > 0:
            self.facing = Facing.RIGHT
        elif horizontal < 0:
            self.facing = Facing.LEFT

        if jump_requested and self.is_grounded(floor_y):
            self.velocity.y = -self.stage.jump_speed

        if fast_fall_requested:
            self.velocity.y += self.stage.fast_fall_acceleration

    def integrate(
        self,
        gravity: Optional[float] = None,
        floor_y: Optional[float] = None,
        stage_width: Optional[float] = None,
    ) -> None:
        """Advance physics and the swing by one tick.

        Order: gravity, floor contact, position, landing, horizontal clamp,
        swing. Floor contact only stops a combatant that is not moving up, so
        a jump impulse applied this tick survives it.
        """
        gravity = self.stage.gravity if gravity is None else gravity
        floor = self.stage.floor_y if floor_y is None else floor_y
        width = self.stage.width if stage_width is None else stage_width

        self.velocity.y += gravity
        max_fall = self.stage.max_fall_speed
        if max_fall is not None and self.velocity.y > max_fall:
            self.velocity.y = max_fall

        if self.is_grounded(floor) and self.velocity.y >= 0:
            self.velocity.y = 0.0
            self.position.y = floor - self.half_height

        self.position.x += self.velocity.x
        self.position.y += self.velocity.y

        # Landing: never end a tick below the floor line
        if self.position.y + self.half_height > floor:
            self.position.y = floor - self.half_height
            self.velocity.y = 0.0

        self.position.x = max(self.half_width, min(width - self.half_width, self.position.x))

        self.advance_attack()

    def advance_attack(self) -> None:
        self.weapon.advance()

    def start_attack(self, target: "Combatant") -> bool:
        """Begin a swing at ``target`` and resolve its single hit test.

        Does nothing while a swing is already running, which is what limits
        attack rate. The hit test happens once, now, not during the animation.

        Returns:
            True if a swing started (hit or miss), False if mid-swing
        """
        if not self.weapon.begin_swing():
            return False

        self.last_attack_hit = self.landed_hit(target)
        if self.last_attack_hit:
            target.take_damage(self.stage.attack_damage)
        return True

    def landed_hit(self, target: "Combatant") -> bool:
        """Hit test from the current position and facing, without side effects."""
        return self.weapon.hits(self, target)

    def take_damage(self, amount: int) -> int:
        """Reduce health, never below zero.

        Returns:
            Health actually removed
        """
        before = self._health
        self.health = before - amount
        return before - self._health

    def __repr__(self) -> str:
        return (
            f"Combatant({self.name!r}, pos=({self.position.x:.1f}, {self.position.y:.1f}), "
            f"hp={self._health}, facing={self.facing.name})"
        )
