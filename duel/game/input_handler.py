"""
Input routing for the match.

Raw InputEvents from a renderer are split two ways: global commands
(restart, quit, log save, debug toggle) fire immediately on press, and every
other key updates the held-key state that is polled into Intents once per
tick.
"""

from typing import Callable, Optional, TYPE_CHECKING

from ..core.engine import Intent
from ..core.events import LogMessage, LogSaveRequested
from ..core.input import InputEvent, InputType, Key
from ..core.input_system import GlobalAction, IntentMapper, KeyConfigLoader, KeyState

if TYPE_CHECKING:
    from ..core.events import EventManager
    from .managers.log_manager import LogManager
    from .match import Match


class InputHandler:
    """Turns renderer input into session commands and per-tick intents."""

    def __init__(
        self,
        match: "Match",
        event_manager: "EventManager",
        key_config: Optional[KeyConfigLoader] = None,
        log_manager: Optional["LogManager"] = None,
        hold_ticks: Optional[int] = None,
    ):
        """Initialize the input handler.

        Args:
            match: Match the restart command resets
            event_manager: Bus for log events
            key_config: Loaded key bindings; the default file is loaded if omitted
            log_manager: Target of the debug toggle, if any
            hold_ticks: Press-only hold duration, None when the device reports releases
        """
        self.match = match
        self.event_manager = event_manager
        self.log_manager = log_manager

        if key_config is None:
            key_config = KeyConfigLoader()
            key_config.load_config()
        self.key_config = key_config

        self.key_state = KeyState(hold_ticks=hold_ticks)
        self.intent_mapper = IntentMapper.from_loader(key_config)
        self.global_mappings: dict[Key, GlobalAction] = key_config.get_global_mappings()

        self.on_quit: Optional[Callable[[], None]] = None

    def handle_input_events(self, events: list[InputEvent]) -> None:
        for event in events:
            self.handle_event(event)

    def handle_event(self, event: InputEvent) -> None:
        if event.event_type == InputType.QUIT:
            self._quit()
            return

        if event.is_press and event.key in self.global_mappings:
            self._run_global_action(self.global_mappings[event.key])
            return

        self.key_state.handle_event(event)

    def _run_global_action(self, action: GlobalAction) -> None:
        if action is GlobalAction.RESTART:
            self.key_state.clear()
            self.match.reset()
        elif action is GlobalAction.QUIT:
            self._quit()
        elif action is GlobalAction.SAVE_LOG:
            self.event_manager.publish(LogSaveRequested(tick=self.match.tick_count), source="InputHandler")
        elif action is GlobalAction.TOGGLE_DEBUG:
            if self.log_manager is not None:
                self.log_manager.toggle_debug()
                state = "on" if self.log_manager.is_debug_enabled() else "off"
                self._emit_log(f"Debug log {state}")

    def _quit(self) -> None:
        if self.on_quit is not None:
            self.on_quit()

    def current_intents(self) -> tuple[Intent, Intent]:
        """Intents for player one and player two from the keys held right now."""
        return self.intent_mapper.intents(self.key_state)

    def end_tick(self) -> None:
        self.key_state.end_tick()

    def _emit_log(self, message: str) -> None:
        self.event_manager.publish(
            LogMessage(tick=self.match.tick_count, message=message, category="INPUT", source="InputHandler"),
            source="InputHandler",
        )
