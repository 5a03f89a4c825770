"""
Unit tests for held-key tracking and key-to-intent mapping.
"""

import pytest

from duel.core.data import CombatantSlot
from duel.core.engine import Intent
from duel.core.input import InputEvent, Key
from duel.core.input_system import IntentMapper, KeyConfigLoader, KeyState, PlayerAction


@pytest.fixture
def mapper():
    loader = KeyConfigLoader()
    loader.load_config()
    return IntentMapper.from_loader(loader)


class TestKeyState:
    """Test press/release and press-only tracking."""

    def test_press_and_release(self):
        keys = KeyState()
        keys.press(Key.A)
        assert keys.is_held(Key.A)
        keys.release(Key.A)
        assert not keys.is_held(Key.A)

    def test_release_of_unheld_key_is_ignored(self):
        keys = KeyState()
        keys.release(Key.A)
        assert keys.held_keys() == frozenset()

    def test_held_until_release_without_hold_ticks(self):
        keys = KeyState()
        keys.press(Key.LEFT)
        for _ in range(100):
            keys.end_tick()
        assert keys.is_held(Key.LEFT)

    def test_press_expires_after_hold_ticks(self):
        keys = KeyState(hold_ticks=3)
        keys.press(Key.LEFT)

        keys.end_tick()
        keys.end_tick()
        assert keys.is_held(Key.LEFT)
        keys.end_tick()
        assert not keys.is_held(Key.LEFT)

    def test_repeat_press_refreshes_hold(self):
        keys = KeyState(hold_ticks=2)
        keys.press(Key.LEFT)
        keys.end_tick()
        keys.press(Key.LEFT)
        keys.end_tick()
        assert keys.is_held(Key.LEFT)

    def test_invalid_hold_ticks(self):
        with pytest.raises(ValueError):
            KeyState(hold_ticks=0)

    def test_handle_event(self):
        keys = KeyState()
        assert keys.handle_event(InputEvent.key_press(Key.W))
        assert keys.is_held(Key.W)
        assert keys.handle_event(InputEvent.key_release(Key.W))
        assert not keys.is_held(Key.W)
        assert not keys.handle_event(InputEvent.quit_event())

    def test_clear(self):
        keys = KeyState()
        keys.press(Key.A)
        keys.press(Key.D)
        keys.clear()
        assert keys.held_keys() == frozenset()


class TestIntentMapper:
    """Test polling held keys into intents."""

    def test_no_keys_is_idle(self, mapper):
        p1, p2 = mapper.intents(KeyState())
        assert p1 == Intent.idle()
        assert p2 == Intent.idle()

    def test_player_one_keys(self, mapper):
        keys = KeyState()
        for key in (Key.RIGHT, Key.UP, Key.ENTER):
            keys.press(key)

        p1, p2 = mapper.intents(keys)

        assert p1 == Intent(horizontal=1, jump=True, attack=True)
        assert p2.is_idle

    def test_player_two_keys(self, mapper):
        keys = KeyState()
        keys.press(Key.A)
        keys.press(Key.S)
        keys.press(Key.SPACE)

        intent = mapper.intent_for(CombatantSlot.PLAYER_TWO, keys)

        assert intent == Intent(horizontal=-1, fast_fall=True, attack=True)

    def test_left_wins_over_right(self, mapper):
        keys = KeyState()
        keys.press(Key.LEFT)
        keys.press(Key.RIGHT)
        assert mapper.intent_for(CombatantSlot.PLAYER_ONE, keys).horizontal == -1

    def test_keys_for(self, mapper):
        assert mapper.keys_for(CombatantSlot.PLAYER_TWO, PlayerAction.JUMP) == frozenset({Key.W})

    def test_several_keys_for_one_action(self):
        mapper = IntentMapper({
            CombatantSlot.PLAYER_ONE: {Key.J: PlayerAction.MOVE_LEFT, Key.LEFT: PlayerAction.MOVE_LEFT},
        })
        keys = KeyState()
        keys.press(Key.J)
        assert mapper.intent_for(CombatantSlot.PLAYER_ONE, keys).horizontal == -1
        assert mapper.intent_for(CombatantSlot.PLAYER_TWO, keys).is_idle

    def test_from_loader_defaults_to_bundled_file(self):
        mapper = IntentMapper.from_loader()
        assert Key.ENTER in mapper.keys_for(CombatantSlot.PLAYER_ONE, PlayerAction.ATTACK)
