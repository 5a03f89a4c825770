"""
Basic test fixtures for the duel test suite.

Provides fresh stages, matches and combatants positioned for the common
physics and combat scenarios.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from duel.core.data import CombatantSlot, Facing, StageConfig, Vector2
from duel.core.events import EventManager
from duel.game.entities import Combatant
from duel.game.match import Match


@pytest.fixture
def stage():
    """The standard 1024x576 stage with the floor at y=526."""
    return StageConfig()


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def match(stage):
    """A match without an event bus."""
    return Match(stage=stage)


@pytest.fixture
def evented_match(stage, event_manager):
    """A match publishing to the event_manager fixture."""
    return Match(stage=stage, event_manager=event_manager)


@pytest.fixture
def grounded_y(stage):
    """Centre height of a combatant standing on the floor."""
    return stage.floor_y - stage.combatant_height / 2


@pytest.fixture
def make_combatant(stage):
    """Factory for combatants at an arbitrary position."""
    def _make(x: float = 200.0, y: float = 288.0, facing: Facing = Facing.RIGHT,
              name: str = "Tester", slot=None) -> Combatant:
        return Combatant(name, Vector2(x, y), facing=facing, stage=stage, slot=slot)
    return _make


@pytest.fixture
def facing_pair(match, grounded_y):
    """Match whose combatants stand on the floor 40 units apart, facing each other.

    Each one's attack point is 8 units from the other's centre, well inside
    the 32-unit hit radius.
    """
    p1 = match.combatant(CombatantSlot.PLAYER_ONE)
    p2 = match.combatant(CombatantSlot.PLAYER_TWO)
    p1.position = Vector2(400.0, grounded_y)
    p2.position = Vector2(440.0, grounded_y)
    p1.facing = Facing.RIGHT
    p2.facing = Facing.LEFT
    return match
