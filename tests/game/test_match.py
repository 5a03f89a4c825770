"""
Unit tests for the Match orchestrator.
"""

from dataclasses import FrozenInstanceError

import pytest

from duel.core.data import AttackState, CombatantSlot, Facing, MatchStatus, Vector2
from duel.core.engine import Intent, Outcome
from duel.core.events import EventType
from duel.game.entities import SWING_DURATION_TICKS

P1 = CombatantSlot.PLAYER_ONE
P2 = CombatantSlot.PLAYER_TWO
ATTACK = Intent(attack=True)


def _collect(event_manager):
    received = []
    event_manager.subscribe_all(received.append)
    return received


class TestMatchCreation:

    def test_initial_state(self, match, stage):
        p1, p2 = match.combatants

        assert p1.position.x == pytest.approx(stage.width / 3)
        assert p2.position.x == pytest.approx(2 * stage.width / 3)
        assert p1.position.y == stage.height / 2
        assert p1.facing is Facing.RIGHT
        assert p2.facing is Facing.LEFT
        assert p1.health == p2.health == 100
        assert match.outcome == Outcome.in_progress()
        assert match.tick_count == 0
        assert match.winner is None

    def test_stage_properties(self, match):
        assert match.gravity == 0.5
        assert match.floor_y == 526
        assert match.stage_width == 1024

    def test_slots_and_names(self, match):
        assert match.combatant(P1).slot is P1
        assert match.combatant(P2).name == "Player 2"
        assert match.opponent_of(P1) is match.combatant(P2)

    def test_custom_names(self, stage):
        from duel.game.match import Match

        named = Match(stage=stage, names=("Ada", "Grace"))
        assert named.combatant(P1).name == "Ada"
        assert named.combatant(P2).name == "Grace"

    def test_combatants_share_stage(self, match):
        p1, p2 = match.combatants
        assert p1.stage is match.stage
        assert p2.stage is match.stage

    def test_started_event(self, evented_match, event_manager):
        received = _collect(event_manager)
        event_manager.process_events()

        started = [e for e in received if e.event_type is EventType.MATCH_STARTED]
        assert len(started) == 1
        assert started[0].player_one == "Player 1"


class TestTick:

    def test_first_tick_from_spawn(self, match):
        outcome = match.tick()

        p1 = match.combatant(P1)
        assert outcome.status is MatchStatus.IN_PROGRESS
        assert match.tick_count == 1
        assert p1.velocity.y == 0.5
        assert p1.position.y == 288.5

    def test_none_is_idle(self, match):
        match.tick(None, None)
        assert match.combatant(P1).velocity.x == 0

    def test_rejects_non_intent(self, match):
        with pytest.raises(TypeError):
            match.tick({"horizontal": 1}, None)
        assert match.tick_count == 0

    def test_intents_go_to_their_combatant(self, match):
        match.tick(Intent(horizontal=-1), Intent(horizontal=1))

        p1, p2 = match.combatants
        assert p1.velocity.x == -5
        assert p1.facing is Facing.LEFT
        assert p2.velocity.x == 5
        assert p2.facing is Facing.RIGHT

    def test_spawn_distance_is_out_of_range(self, match):
        match.tick(ATTACK, ATTACK)
        p1, p2 = match.combatants
        assert p1.health == p2.health == 100
        assert p1.is_attacking and p2.is_attacking

    def test_attack_hits_in_range(self, facing_pair):
        facing_pair.tick(ATTACK, None)
        assert facing_pair.combatant(P2).health == 90
        assert facing_pair.combatant(P1).health == 100

    def test_attack_resolves_after_movement(self, match, grounded_y):
        """Stepping into range and striking happen in the same tick."""
        p1, p2 = match.combatants
        p1.position = Vector2(400.0, grounded_y)
        p2.position = Vector2(466.0, grounded_y)

        match.tick(Intent(horizontal=1, attack=True), None)

        # Attack point moves from 432 to 437; the target centre at 466 is 34 then 29 away
        assert p2.health == 90

    def test_held_attack_repeats_once_per_swing(self, facing_pair):
        for _ in range(3 * SWING_DURATION_TICKS + 1):
            facing_pair.tick(ATTACK, None)
        assert facing_pair.combatant(P2).health == 60

    def test_hit_events(self, evented_match, event_manager, grounded_y):
        p1, p2 = evented_match.combatants
        p1.position = Vector2(400.0, grounded_y)
        p2.position = Vector2(440.0, grounded_y)
        event_manager.process_events()
        received = _collect(event_manager)

        evented_match.tick(ATTACK, None)
        event_manager.process_events()

        types = [e.event_type for e in received]
        assert EventType.ATTACK_STARTED in types
        hit = next(e for e in received if e.event_type is EventType.COMBATANT_HIT)
        assert hit.attacker is P1
        assert hit.defender is P2
        assert hit.damage == 10
        assert hit.remaining_health == 90
        assert hit.tick == 1

    def test_miss_publishes_attack_started(self, evented_match, event_manager):
        event_manager.process_events()
        received = _collect(event_manager)

        evented_match.tick(None, ATTACK)
        event_manager.process_events()

        started = [e for e in received if e.event_type is EventType.ATTACK_STARTED]
        assert len(started) == 1
        assert started[0].attacker is P2
        assert not started[0].hit
        assert not any(e.event_type is EventType.COMBATANT_HIT for e in received)


class TestOutcome:

    def test_win_when_health_reaches_zero(self, facing_pair):
        facing_pair.combatant(P2).health = 10

        outcome = facing_pair.tick(ATTACK, None)

        assert outcome == Outcome.won(P1)
        assert facing_pair.is_over
        assert facing_pair.winner is facing_pair.combatant(P1)

    def test_player_two_can_win(self, facing_pair):
        facing_pair.combatant(P1).health = 10
        assert facing_pair.tick(None, ATTACK) == Outcome.won(P2)

    def test_simultaneous_knockout_goes_to_player_one(self, facing_pair):
        facing_pair.combatant(P1).health = 10
        facing_pair.combatant(P2).health = 10

        outcome = facing_pair.tick(ATTACK, ATTACK)

        assert facing_pair.combatant(P1).health == 0
        assert facing_pair.combatant(P2).health == 0
        assert outcome.winner is P1

    def test_state_frozen_after_win(self, facing_pair):
        facing_pair.combatant(P2).health = 10
        facing_pair.tick(ATTACK, None)
        before = facing_pair.snapshot()

        for _ in range(5):
            assert facing_pair.tick(Intent(horizontal=1), Intent(jump=True)) == Outcome.won(P1)

        after = facing_pair.snapshot()
        assert after == before
        assert facing_pair.tick_count == before.tick

    def test_match_ended_event_once(self, evented_match, event_manager, grounded_y):
        p1, p2 = evented_match.combatants
        p1.position = Vector2(400.0, grounded_y)
        p2.position = Vector2(440.0, grounded_y)
        p2.health = 10
        received = _collect(event_manager)

        evented_match.tick(ATTACK, None)
        evented_match.tick(ATTACK, None)
        event_manager.process_events()

        ended = [e for e in received if e.event_type is EventType.MATCH_ENDED]
        defeated = [e for e in received if e.event_type is EventType.COMBATANT_DEFEATED]
        assert len(ended) == 1
        assert ended[0].winner is P1
        assert ended[0].winner_name == "Player 1"
        assert defeated[0].slot is P2


class TestReset:

    def test_reset_restores_start(self, facing_pair, stage):
        facing_pair.combatant(P1).health = 30
        facing_pair.tick(None, ATTACK)
        assert facing_pair.combatant(P2).is_attacking

        facing_pair.reset()

        p1, p2 = facing_pair.combatants
        assert p1.position.to_tuple() == pytest.approx(stage.start_position(0))
        assert p2.position.to_tuple() == pytest.approx(stage.start_position(1))
        assert p1.health == p2.health == 100
        assert p2.attack_state is AttackState.IDLE
        assert p2.swing_angle == 0.0
        assert p1.velocity == Vector2(0.0, 0.0)
        assert facing_pair.outcome == Outcome.in_progress()
        assert facing_pair.tick_count == 0

    def test_reset_replaces_combatants(self, match):
        old = match.combatants
        match.reset()
        assert match.combatant(P1) is not old[0]
        assert match.combatant(P2) is not old[1]

    def test_reset_after_win_resumes_play(self, facing_pair):
        facing_pair.combatant(P2).health = 10
        facing_pair.tick(ATTACK, None)
        facing_pair.reset()

        assert not facing_pair.is_over
        facing_pair.tick()
        assert facing_pair.tick_count == 1

    def test_reset_event(self, evented_match, event_manager):
        evented_match.tick()
        evented_match.tick()
        received = _collect(event_manager)

        evented_match.reset()
        event_manager.process_events()

        reset = next(e for e in received if e.event_type is EventType.MATCH_RESET)
        assert reset.tick == 2
        assert reset.previous_winner is None


class TestSnapshot:

    def test_snapshot_contents(self, match):
        match.tick(Intent(horizontal=1), None)
        snap = match.snapshot()

        assert snap.tick == 1
        assert snap.outcome == match.outcome
        assert snap.floor_y == 526
        assert snap.stage_width == 1024
        p1 = snap.combatant(P1)
        assert p1.name == "Player 1"
        assert p1.position == match.combatant(P1).position
        assert p1.facing is Facing.RIGHT
        assert p1.health == 100
        assert p1.attack_state is AttackState.IDLE

    def test_snapshot_is_detached(self, match):
        snap = match.snapshot()
        snap.combatant(P1).position.x = -1000
        assert match.combatant(P1).position.x > 0

    def test_snapshot_is_frozen(self, match):
        snap = match.snapshot()
        with pytest.raises(FrozenInstanceError):
            snap.tick = 99  # type: ignore[misc]

    def test_weapon_anchor(self, facing_pair):
        p2 = facing_pair.snapshot().combatant(P2)
        assert p2.weapon_anchor == Vector2(408.0, p2.position.y)
