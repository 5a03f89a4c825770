"""
Match orchestration.

The Match owns both combatants and the stage, runs the fixed per-tick
simulation step and decides the outcome. It is the only thing that mutates
combatant state; presentation reads it through :meth:`Match.snapshot`.
"""

from typing import Optional

from ..core.data import CombatantSlot, Facing, SLOT_NAMES, StageConfig, Vector2
from ..core.engine import CombatantSnapshot, Intent, MatchSnapshot, Outcome
from ..core.events import (
    AttackStarted,
    CombatantDefeated,
    CombatantHit,
    DebugMessage,
    EventManager,
    GameEvent,
    LogMessage,
    MatchEnded,
    MatchReset,
    MatchStarted,
)
from .entities import Combatant


class Match:
    """Two combatants on one stage, ticked until one of them falls."""

    def __init__(
        self,
        stage: Optional[StageConfig] = None,
        event_manager: Optional[EventManager] = None,
        names: Optional[tuple[str, str]] = None,
    ):
        """Create a match in its starting state.

        Args:
            stage: Physics and stage constants shared by both combatants
            event_manager: Optional bus for match events
            names: Display names for player one and player two
        """
        self.stage = stage or StageConfig()
        self.event_manager = event_manager
        self.names = names or (SLOT_NAMES[CombatantSlot.PLAYER_ONE], SLOT_NAMES[CombatantSlot.PLAYER_TWO])

        self._combatants = self._create_combatants()
        self.outcome = Outcome.in_progress()
        self.tick_count = 0

        self._publish(MatchStarted(tick=0, player_one=self.names[0], player_two=self.names[1]))
        self._emit_log(f"{self.names[0]} vs {self.names[1]}: fight!")

    # ============== Stage Properties ==============

    @property
    def gravity(self) -> float:
        return self.stage.gravity

    @property
    def floor_y(self) -> float:
        return self.stage.floor_y

    @property
    def stage_width(self) -> float:
        return self.stage.width

    @property
    def combatants(self) -> tuple[Combatant, Combatant]:
        return self._combatants

    @property
    def is_over(self) -> bool:
        return self.outcome.is_over

    def combatant(self, slot: CombatantSlot) -> Combatant:
        return self._combatants[slot.value]

    def opponent_of(self, slot: CombatantSlot) -> Combatant:
        return self._combatants[slot.opponent.value]

    @property
    def winner(self) -> Optional[Combatant]:
        if self.outcome.winner is None:
            return None
        return self.combatant(self.outcome.winner)

    # ============== Lifecycle ==============

    def _create_combatants(self) -> tuple[Combatant, Combatant]:
        """Build both combatants at their canonical start positions."""
        facings = (Facing.RIGHT, Facing.LEFT)
        created = []
        for slot in CombatantSlot:
            x, y = self.stage.start_position(slot.value)
            created.append(
                Combatant(
                    name=self.names[slot.value],
                    position=Vector2(x, y),
                    facing=facings[slot.value],
                    stage=self.stage,
                    slot=slot,
                )
            )
        return (created[0], created[1])

    def reset(self) -> None:
        """Start over with brand new combatants.

        The combatants are replaced rather than repaired so no swing or
        velocity can survive a restart. All fields are reassigned together
        after the new pair is fully built.
        """
        previous_tick = self.tick_count
        previous_winner = self.outcome.winner

        fresh = self._create_combatants()
        self._combatants, self.outcome, self.tick_count = fresh, Outcome.in_progress(), 0

        self._publish(MatchReset(tick=previous_tick, previous_winner=previous_winner))
        self._emit_log("Match restarted")

    # ============== Simulation ==============

    def tick(self, p1_intent: Optional[Intent] = None, p2_intent: Optional[Intent] = None) -> Outcome:
        """Run one simulation step.

        Intents are applied, both combatants integrated, attacks resolved in
        slot order, then the outcome evaluated. Once the match is won the
        state is frozen and ticking does nothing until :meth:`reset`.

        Returns:
            The outcome after this tick
        """
        if self.outcome.is_over:
            return self.outcome

        intents = (self._require_intent(p1_intent), self._require_intent(p2_intent))
        self.tick_count += 1

        for combatant, intent in zip(self._combatants, intents):
            combatant.apply_intent(intent.horizontal, intent.jump, intent.fast_fall, floor_y=self.floor_y)

        for combatant in self._combatants:
            combatant.integrate(self.gravity, self.floor_y, self.stage_width)

        for slot, intent in zip(CombatantSlot, intents):
            if intent.attack:
                self._resolve_attack(slot)

        self._evaluate_outcome()
        return self.outcome

    @staticmethod
    def _require_intent(intent: Optional[Intent]) -> Intent:
        if intent is None:
            return Intent()
        if not isinstance(intent, Intent):
            raise TypeError(f"Expected Intent, got {type(intent).__name__}")
        return intent

    def _resolve_attack(self, slot: CombatantSlot) -> None:
        attacker = self.combatant(slot)
        target = self.opponent_of(slot)
        health_before = target.health

        if not attacker.start_attack(target):
            return

        self._publish(AttackStarted(tick=self.tick_count, attacker=slot, hit=attacker.last_attack_hit))

        damage = health_before - target.health
        if damage > 0:
            self._publish(
                CombatantHit(
                    tick=self.tick_count,
                    attacker=slot,
                    defender=slot.opponent,
                    damage=damage,
                    remaining_health=target.health,
                )
            )
            self._emit_log(f"{attacker.name} hits {target.name} for {damage} ({target.health} HP left)", "BATTLE")
            if target.is_defeated:
                self._publish(CombatantDefeated(tick=self.tick_count, slot=slot.opponent))
        else:
            self._emit_debug(f"{attacker.name} swings and misses")

    def _evaluate_outcome(self) -> None:
        """Declare a winner once a combatant is down.

        If both fall in the same tick, player one wins.
        """
        p1_down = self._combatants[0].is_defeated
        p2_down = self._combatants[1].is_defeated

        if not (p1_down or p2_down):
            return

        if p2_down:
            winner = CombatantSlot.PLAYER_ONE
        else:
            winner = CombatantSlot.PLAYER_TWO

        self.outcome = Outcome.won(winner)
        winner_name = self.combatant(winner).name
        self._publish(MatchEnded(tick=self.tick_count, winner=winner, winner_name=winner_name))
        if p1_down and p2_down:
            self._emit_log(f"Double knockout, {winner_name} takes it on priority", "BATTLE")
        self._emit_log(f"{winner_name} Wins!", "BATTLE")

    # ============== Presentation ==============

    def snapshot(self) -> MatchSnapshot:
        """Immutable view of the current tick for renderers."""
        return MatchSnapshot(
            combatants=(self._snapshot_of(self._combatants[0]), self._snapshot_of(self._combatants[1])),
            outcome=self.outcome,
            tick=self.tick_count,
            stage_width=self.stage.width,
            stage_height=self.stage.height,
            floor_y=self.floor_y,
        )

    @staticmethod
    def _snapshot_of(combatant: Combatant) -> CombatantSnapshot:
        return CombatantSnapshot(
            slot=combatant.slot,
            name=combatant.name,
            position=combatant.position.copy(),
            velocity=combatant.velocity.copy(),
            facing=combatant.facing,
            health=combatant.health,
            max_health=combatant.max_health,
            attack_state=combatant.attack_state,
            swing_angle=combatant.swing_angle,
            width=combatant.width,
            height=combatant.height,
        )

    # ============== Events ==============

    def _publish(self, event: GameEvent) -> None:
        if self.event_manager is not None:
            self.event_manager.publish(event, source="Match")

    def _emit_log(self, message: str, category: str = "SYSTEM") -> None:
        self._publish(LogMessage(tick=self.tick_count, message=message, category=category, source="Match"))

    def _emit_debug(self, message: str) -> None:
        self._publish(DebugMessage(tick=self.tick_count, message=message, source="Match"))
