"""
Unit tests for RenderBuilder.
"""

import pytest

from duel.core.data import CombatantSlot, Facing
from duel.core.engine import Intent
from duel.game.managers import LogManager
from duel.game.match import Match
from duel.game.render_builder import RESTART_HINT, RenderBuilder


class TestRenderBuilder:

    def test_stage_fields(self, match):
        context = RenderBuilder(match).build_render_context()

        assert context.stage_width == 1024
        assert context.stage_height == 576
        assert context.floor_y == 526
        assert context.tick == 0
        assert context.has_stage()

    def test_one_entry_per_combatant(self, match):
        context = RenderBuilder(match).build_render_context()

        assert [c.slot_index for c in context.combatants] == [0, 1]
        assert [w.slot_index for w in context.weapons] == [0, 1]
        assert [c.facing for c in context.combatants] == [Facing.RIGHT, Facing.LEFT]
        assert context.banner is None

    def test_health_labels(self, facing_pair):
        facing_pair.tick(Intent(attack=True), None)
        context = RenderBuilder(facing_pair).build_render_context()

        labels = [bar.label for bar in context.health_bars]
        assert labels == ["Player 1: 100 HP", "Player 2: 90 HP"]
        assert context.health_bars[1].fraction == pytest.approx(0.9)

    def test_weapon_follows_swing(self, facing_pair):
        facing_pair.tick(Intent(attack=True), None)
        context = RenderBuilder(facing_pair).build_render_context()

        p1 = facing_pair.combatant(CombatantSlot.PLAYER_ONE)
        assert context.combatants[0].is_attacking
        assert not context.combatants[1].is_attacking
        assert context.weapons[0].angle == pytest.approx(p1.swing_angle)
        assert context.weapons[0].anchor.x == p1.position.x + 32

    def test_render_data_is_detached(self, match):
        context = RenderBuilder(match).build_render_context()
        context.combatants[0].position.x = -500
        assert match.combatant(CombatantSlot.PLAYER_ONE).position.x > 0

    def test_winner_banner(self, facing_pair):
        facing_pair.combatant(CombatantSlot.PLAYER_TWO).health = 10
        facing_pair.tick(Intent(attack=True), None)

        banner = RenderBuilder(facing_pair).build_render_context().banner

        assert banner is not None
        assert banner.title == "Player 1 Wins!"
        assert banner.subtitle == RESTART_HINT == "Press R to Restart"

    def test_log_lines(self, stage, event_manager, tmp_path):
        log = LogManager(event_manager, log_dir=str(tmp_path))
        match = Match(stage=stage, event_manager=event_manager)
        event_manager.process_events()
        log.battle("one")
        log.battle("two")
        log.battle("three")

        context = RenderBuilder(match, log_manager=log, log_lines=2).build_render_context()

        assert [t.text for t in context.texts] == ["[BTL] two", "[BTL] three"]
        assert all(t.style == "log" for t in context.texts)

    def test_no_log_lines_without_log_manager(self, match):
        assert RenderBuilder(match).build_render_context().texts == []
