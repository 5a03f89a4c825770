"""Per-tick combatant intent.

An Intent is the only way input reaches the simulation. It is validated on
construction so a malformed value can never leak into the physics step.
"""

import numbers
from dataclasses import dataclass


VALID_HORIZONTAL = (-1, 0, 1)


class InvalidIntentError(ValueError):
    """Raised when an intent value falls outside its allowed domain."""


def validate_horizontal(horizontal: object) -> int:
    """Return ``horizontal`` as an int if it is one of -1, 0 or 1, otherwise raise.

    Any integral type is accepted, numpy integers included.

    Booleans are rejected even though ``True == 1``; they almost always mean a
    key flag was passed where a direction was expected.
    """
    if isinstance(horizontal, bool) or not isinstance(horizontal, numbers.Integral):
        raise InvalidIntentError(f"horizontal must be an int in {VALID_HORIZONTAL}, got {horizontal!r}")
    if horizontal not in VALID_HORIZONTAL:
        raise InvalidIntentError(f"horizontal must be one of {VALID_HORIZONTAL}, got {horizontal}")
    return int(horizontal)


def validate_flag(name: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise InvalidIntentError(f"{name} must be a bool, got {value!r}")
    return value


@dataclass(frozen=True)
class Intent:
    """Sanitized description of what one combatant wants to do this tick."""
    horizontal: int = 0
    jump: bool = False
    fast_fall: bool = False
    attack: bool = False

    def __post_init__(self):
        object.__setattr__(self, "horizontal", validate_horizontal(self.horizontal))
        validate_flag("jump", self.jump)
        validate_flag("fast_fall", self.fast_fall)
        validate_flag("attack", self.attack)

    @classmethod
    def idle(cls) -> "Intent":
        return cls()

    @property
    def is_idle(self) -> bool:
        return self.horizontal == 0 and not (self.jump or self.fast_fall or self.attack)
