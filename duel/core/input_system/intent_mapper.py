"""Translate held keys into per-combatant intents."""

from typing import Optional

from ..data import CombatantSlot
from ..engine import Intent
from ..input import Key
from .actions import PlayerAction
from .key_config_loader import KeyConfigLoader
from .key_state import KeyState


class IntentMapper:
    """Polls a KeyState and builds one Intent per combatant.

    When both directions are held, left wins.
    """

    def __init__(self, bindings: dict[CombatantSlot, dict[Key, PlayerAction]]):
        self._actions_by_slot: dict[CombatantSlot, dict[PlayerAction, set[Key]]] = {}
        for slot in CombatantSlot:
            by_action: dict[PlayerAction, set[Key]] = {action: set() for action in PlayerAction}
            for key, action in bindings.get(slot, {}).items():
                by_action[action].add(key)
            self._actions_by_slot[slot] = by_action

    @classmethod
    def from_loader(cls, loader: Optional[KeyConfigLoader] = None) -> "IntentMapper":
        """Build a mapper from a key config loader, loading the default file if none is given."""
        if loader is None:
            loader = KeyConfigLoader()
            loader.load_config()
        return cls(loader.get_all_player_mappings())

    def keys_for(self, slot: CombatantSlot, action: PlayerAction) -> frozenset[Key]:
        return frozenset(self._actions_by_slot[slot][action])

    def _active(self, slot: CombatantSlot, action: PlayerAction, key_state: KeyState) -> bool:
        return any(key_state.is_held(key) for key in self._actions_by_slot[slot][action])

    def intent_for(self, slot: CombatantSlot, key_state: KeyState) -> Intent:
        if self._active(slot, PlayerAction.MOVE_LEFT, key_state):
            horizontal = -1
        elif self._active(slot, PlayerAction.MOVE_RIGHT, key_state):
            horizontal = 1
        else:
            horizontal = 0

        return Intent(
            horizontal=horizontal,
            jump=self._active(slot, PlayerAction.JUMP, key_state),
            fast_fall=self._active(slot, PlayerAction.FAST_FALL, key_state),
            attack=self._active(slot, PlayerAction.ATTACK, key_state),
        )

    def intents(self, key_state: KeyState) -> tuple[Intent, Intent]:
        return (
            self.intent_for(CombatantSlot.PLAYER_ONE, key_state),
            self.intent_for(CombatantSlot.PLAYER_TWO, key_state),
        )
