"""
Match log.

Everything in the game logs by publishing a LogMessage or DebugMessage
event; the LogManager is the one subscriber that stores them. It keeps a
bounded buffer for the HUD, filters by category and level on read, and can
dump the whole buffer to a file when a LogSaveRequested event arrives.
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from typing import Iterable, Optional, TYPE_CHECKING

from ...core.events import DebugMessage, EventType, LogMessage as LogEvent, LogSaveRequested

if TYPE_CHECKING:
    from ...core.events import EventManager


class LogCategory(Enum):
    SYSTEM = auto()     # Start-up, restart, configuration
    BATTLE = auto()     # Hits, knockouts, winners
    INPUT = auto()
    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()

    @property
    def tag(self) -> str:
        return CATEGORY_TAGS[self]


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.INPUT: "INP",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}


class LogLevel(Enum):
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


# Categories not listed are INFO
CATEGORY_LEVELS = {
    LogCategory.DEBUG: LogLevel.DEBUG,
    LogCategory.INPUT: LogLevel.DEBUG,
    LogCategory.WARNING: LogLevel.WARNING,
    LogCategory.ERROR: LogLevel.ERROR,
}


@dataclass
class LogMessage:
    """One stored log line."""
    text: str
    category: LogCategory
    tick: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def level(self) -> LogLevel:
        return CATEGORY_LEVELS.get(self.category, LogLevel.INFO)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        prefix = ""
        if include_timestamp:
            prefix += f"[{self.timestamp.strftime('%H:%M:%S')}] "
        if include_category:
            prefix += f"[{self.category.tag}] "
        return prefix + self.text

    def file_line(self) -> str:
        stamp = self.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        return f"[{stamp}] [tick {self.tick}] [{self.category.name}] {self.text}"


def _category_for(event: LogEvent) -> LogCategory:
    """Map a LogMessage event's free-form category and level onto a LogCategory.

    An ERROR level always wins. A WARNING level only recategorizes messages
    that did not name a more specific category.
    """
    level = event.level.upper()
    if level == "ERROR":
        return LogCategory.ERROR
    category = LogCategory.__members__.get(str(event.category).upper(), LogCategory.SYSTEM)
    if level == "WARNING" and category is LogCategory.SYSTEM:
        return LogCategory.WARNING
    return category


class LogManager:
    """Event-driven match log with category and level filtering."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO,
        log_dir: str = "logs",
    ):
        """
        Args:
            event_manager: Bus the log subscribes to
            max_messages: Size of the message buffer; oldest lines drop first
            default_level: Lowest level get_messages() shows
            log_dir: Directory save_log_to_file() writes into
        """
        self.messages: deque[LogMessage] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)
        self.event_manager = event_manager
        self.log_dir = log_dir
        self.last_saved_path: Optional[str] = None

        event_manager.subscribe(EventType.LOG_MESSAGE, self._on_log_message, "LogManager.log_message")
        event_manager.subscribe(EventType.DEBUG_MESSAGE, self._on_debug_message, "LogManager.debug_message")
        event_manager.subscribe(EventType.LOG_SAVE_REQUESTED, self._on_save_requested, "LogManager.save")

    def _on_log_message(self, event) -> None:
        if isinstance(event, LogEvent):
            self.log(event.message, _category_for(event), tick=event.tick)

    def _on_debug_message(self, event) -> None:
        if isinstance(event, DebugMessage):
            self.log(f"[{event.source}] {event.message}", LogCategory.DEBUG, tick=event.tick)

    def _on_save_requested(self, event) -> None:
        if isinstance(event, LogSaveRequested):
            self.save_log_to_file()

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM, tick: int = 0) -> None:
        """Store a message. Filtering happens on read, so nothing is lost."""
        self.messages.append(LogMessage(text=text, category=category, tick=tick))

    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def battle(self, text: str) -> None:
        self.log(text, LogCategory.BATTLE)

    def input(self, text: str) -> None:
        self.log(text, LogCategory.INPUT)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR)

    # ============== Reading ==============

    def _visible(self, message: LogMessage) -> bool:
        return (message.category in self.enabled_categories
                and message.level.value >= self.log_level.value)

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogMessage]:
        """Recent messages, oldest first.

        Args:
            count: Keep only the last ``count`` matches (None for all)
            categories: Only these categories, ignoring the log level. Without
                it the enabled categories and the current level apply.
        """
        if categories:
            selected = [m for m in self.messages
                        if m.category in categories and m.category in self.enabled_categories]
        else:
            selected = [m for m in self.messages if self._visible(m)]

        if count is None:
            return selected
        return selected[-count:] if count > 0 else []

    def get_formatted_messages(self, count: Optional[int] = None) -> list[str]:
        return [message.format() for message in self.get_messages(count)]

    def clear(self) -> None:
        self.messages.clear()

    # ============== Filters ==============

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        return LogCategory.DEBUG in self.enabled_categories and self.log_level is LogLevel.DEBUG

    def toggle_debug(self) -> None:
        if self.is_debug_enabled():
            self.disable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.INFO)
        else:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)

    # ============== Export ==============

    def _header(self, now: datetime) -> Iterable[str]:
        yield "Duel - Match Log"
        yield f"Generated: {now.strftime('%Y-%m-%d %H:%M:%S')}"
        yield "=" * 60
        yield ""

    def save_log_to_file(self) -> bool:
        """Write every stored message, unfiltered, to a timestamped file.

        Failures are logged as errors rather than raised.

        Returns:
            True if the file was written
        """
        now = datetime.now()
        path = Path(self.log_dir) / f"duel_{now.strftime('%Y%m%d_%H%M%S_%f')}.log"

        lines = list(self._header(now))
        if self.messages:
            lines.extend(message.file_line() for message in self.messages)
        else:
            lines.append("No messages to save.")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return False

        self.last_saved_path = str(path)
        self.system(f"Match log saved to {path}")
        return True
