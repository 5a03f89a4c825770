"""Renderer-independent input events.

Renderers translate whatever their device reports into InputEvents. Only
keyboard input exists: two players share one keyboard, each with their own
set of keys.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class InputType(Enum):
    KEY_PRESS = auto()
    KEY_RELEASE = auto()
    QUIT = auto()


class Key(Enum):
    """Keys a binding can name. Member names are the names used in YAML."""
    # Arrows and controls
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    SPACE = auto()
    ESCAPE = auto()
    TAB = auto()

    # Modifiers (only reported by devices that send them on their own)
    SHIFT = auto()
    CTRL = auto()
    ALT = auto()

    A = auto()
    B = auto()
    C = auto()
    D = auto()
    E = auto()
    F = auto()
    G = auto()
    H = auto()
    I = auto()  # noqa: E741
    J = auto()
    K = auto()
    L = auto()
    M = auto()
    N = auto()
    O = auto()  # noqa: E741
    P = auto()
    Q = auto()
    R = auto()
    S = auto()
    T = auto()
    U = auto()
    V = auto()
    W = auto()
    X = auto()
    Y = auto()
    Z = auto()

    NUM_0 = auto()
    NUM_1 = auto()
    NUM_2 = auto()
    NUM_3 = auto()
    NUM_4 = auto()
    NUM_5 = auto()
    NUM_6 = auto()
    NUM_7 = auto()
    NUM_8 = auto()
    NUM_9 = auto()

    UNKNOWN = auto()

    @classmethod
    def parse(cls, name: str) -> Optional["Key"]:
        """Look up a key by config name, case-insensitively.

        Accepts the aliases ESC and RETURN and bare digits ("1" for NUM_1).
        Returns None for anything else.
        """
        name = name.upper().strip()
        if name in KEY_ALIASES:
            return KEY_ALIASES[name]
        if len(name) == 1 and name.isdigit():
            name = f"NUM_{name}"
        return cls.__members__.get(name)


KEY_ALIASES = {
    "ESC": Key.ESCAPE,
    "RETURN": Key.ENTER,
}


@dataclass(frozen=True)
class InputEvent:
    event_type: InputType
    key: Optional[Key] = None
    shift: bool = False

    @property
    def is_press(self) -> bool:
        return self.event_type is InputType.KEY_PRESS

    @property
    def is_release(self) -> bool:
        return self.event_type is InputType.KEY_RELEASE

    @classmethod
    def quit_event(cls) -> "InputEvent":
        return cls(event_type=InputType.QUIT)

    @classmethod
    def key_press(cls, key: Key, shift: bool = False) -> "InputEvent":
        return cls(event_type=InputType.KEY_PRESS, key=key, shift=shift)

    @classmethod
    def key_release(cls, key: Key) -> "InputEvent":
        return cls(event_type=InputType.KEY_RELEASE, key=key)
