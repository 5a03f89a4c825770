"""Named actions that keys can be bound to."""

from enum import Enum


class PlayerAction(Enum):
    """Per-combatant actions polled every tick while the key is held."""
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    JUMP = "jump"
    FAST_FALL = "fast_fall"
    ATTACK = "attack"


class GlobalAction(Enum):
    """Session commands triggered once per key press."""
    RESTART = "restart"
    QUIT = "quit"
    SAVE_LOG = "save_log"
    TOGGLE_DEBUG = "toggle_debug"


def parse_player_action(name: str) -> PlayerAction:
    return PlayerAction(name.strip().lower())


def parse_global_action(name: str) -> GlobalAction:
    return GlobalAction(name.strip().lower())
