"""
Unit tests for the character-grid projection shared by the text renderers.
"""

import math

import pytest

from duel.core.data import Facing, Vector2
from duel.core.entities import CombatantRenderData, RenderContext, WeaponRenderData
from duel.renderers.stage_grid import StageGrid, health_bar, weapon_symbol


@pytest.fixture
def context():
    """A 100x100 stage with the floor at y=90 and one combatant."""
    ctx = RenderContext(stage_width=100, stage_height=100, floor_y=90)
    ctx.combatants.append(
        CombatantRenderData(position=Vector2(50, 70), name="P1", slot_index=0,
                            facing=Facing.RIGHT, width=20, height=20)
    )
    ctx.weapons.append(
        WeaponRenderData(anchor=Vector2(60, 70), angle=-math.pi / 4, facing=Facing.RIGHT, slot_index=0)
    )
    return ctx


class TestProjection:

    def test_project(self, context):
        grid = StageGrid(10, 10)
        assert grid.project(Vector2(55, 23), context) == (5, 2)

    def test_project_clamps_to_grid(self, context):
        grid = StageGrid(10, 10)
        assert grid.project(Vector2(-5, 500), context) == (0, 9)

    def test_project_size_at_least_one_cell(self, context):
        grid = StageGrid(10, 10)
        assert grid.project_size(20, 20, context) == (2, 2)
        assert grid.project_size(1, 1, context) == (1, 1)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            StageGrid(0, 5)


class TestDraw:

    def test_floor_combatant_and_weapon(self, context):
        lines = StageGrid(10, 10).draw(context).lines()

        assert lines[9] == "=" * 10
        assert lines[6][4:6] == "11"
        assert lines[7][4:6] == "11"
        assert lines[7][6] == "/"
        assert lines[0] == " " * 10

    def test_owners_track_slots(self, context):
        grid = StageGrid(10, 10).draw(context)
        assert grid.owners[6][4] == 0
        assert grid.owners[7][6] == 0
        assert grid.owners[9][0] is None

    def test_empty_context_draws_nothing(self):
        lines = StageGrid(4, 2).draw(RenderContext()).lines()
        assert lines == ["    ", "    "]

    def test_put_outside_grid_is_ignored(self):
        grid = StageGrid(3, 3)
        grid.put(5, 5, "x")
        assert all(cell == " " for row in grid.cells for cell in row)


class TestGlyphs:

    @pytest.mark.parametrize("angle,facing,expected", [
        (-math.pi / 4, Facing.RIGHT, "/"),
        (0.0, Facing.RIGHT, "-"),
        (math.pi / 3, Facing.RIGHT, "\\"),
        (-math.pi / 4, Facing.LEFT, "\\"),
        (0.0, Facing.LEFT, "-"),
        (math.pi / 3, Facing.LEFT, "/"),
    ])
    def test_weapon_symbol(self, angle, facing, expected):
        weapon = WeaponRenderData(anchor=Vector2(), angle=angle, facing=facing, slot_index=0)
        assert weapon_symbol(weapon) == expected

    def test_health_bar(self):
        assert health_bar(0.5, 10) == "[#####.....]"
        assert health_bar(1.0, 4) == "[####]"
        assert health_bar(0.0, 4) == "[....]"

    def test_health_bar_clamps(self):
        assert health_bar(2.0, 4) == "[####]"
        assert health_bar(-1.0, 4) == "[....]"
