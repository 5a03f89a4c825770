"""Key bindings and key-state polling.

- actions.py: Player and global action names
- key_config_loader.py: YAML key binding loader with schemes and fallback
- key_state.py: Held-key tracking for press/release and press-only devices
- intent_mapper.py: Held keys to per-combatant Intent
"""

from .actions import PlayerAction, GlobalAction
from .key_config_loader import KeyConfigLoader
from .key_state import KeyState
from .intent_mapper import IntentMapper

__all__ = [
    "PlayerAction",
    "GlobalAction",
    "KeyConfigLoader",
    "KeyState",
    "IntentMapper",
]
