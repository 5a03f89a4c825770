"""Held-key tracking for polled input.

Combat input is polled: each tick asks "is left held?" rather than reacting
to individual presses. Devices that report releases keep a key held until
its release arrives. Terminals only report presses (plus auto-repeat), so for
them a press counts as held for ``hold_ticks`` ticks and is refreshed by
each repeat.
"""

from typing import Optional

from ..input import InputEvent, Key


class KeyState:
    """Set of keys currently considered held."""

    def __init__(self, hold_ticks: Optional[int] = None):
        """
        Args:
            hold_ticks: Ticks a press stays held without a release event;
                None keeps it held until released
        """
        if hold_ticks is not None and hold_ticks < 1:
            raise ValueError(f"hold_ticks must be at least 1, got {hold_ticks}")
        self.hold_ticks = hold_ticks
        self._held: dict[Key, Optional[int]] = {}

    def press(self, key: Key) -> None:
        self._held[key] = self.hold_ticks

    def release(self, key: Key) -> None:
        self._held.pop(key, None)

    def handle_event(self, event: InputEvent) -> bool:
        """Update from an input event. Returns True if the event was a key event."""
        if event.key is None:
            return False
        if event.is_press:
            self.press(event.key)
            return True
        if event.is_release:
            self.release(event.key)
            return True
        return False

    def is_held(self, key: Key) -> bool:
        return key in self._held

    def held_keys(self) -> frozenset[Key]:
        return frozenset(self._held)

    def end_tick(self) -> None:
        """Age press-only keys by one tick, dropping the expired ones."""
        expired = []
        for key, remaining in self._held.items():
            if remaining is None:
                continue
            if remaining <= 1:
                expired.append(key)
            else:
                self._held[key] = remaining - 1
        for key in expired:
            del self._held[key]

    def clear(self) -> None:
        self._held.clear()
