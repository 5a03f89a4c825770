"""
Event bus connecting the simulation to everything that observes it.

The match publishes what happened during a tick; the log, the input layer
and any renderer subscribe. Publishing only queues. Delivery happens when the
game loop calls :meth:`EventManager.process_events` once per frame, so a
subscriber never runs in the middle of a simulation step.
"""

import heapq
import itertools
import threading
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


class EventPriority(Enum):
    """Delivery priority. Lower value is delivered first."""
    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3


_publication_counter = itertools.count()


@dataclass
class QueuedEvent:
    """An event waiting for delivery, ordered by priority then publication."""
    event: "GameEvent"
    priority: EventPriority = EventPriority.NORMAL
    source: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    sequence: int = field(default_factory=lambda: next(_publication_counter))

    def sort_key(self) -> tuple[int, int]:
        return (self.priority.value, self.sequence)

    def __lt__(self, other: "QueuedEvent") -> bool:
        return self.sort_key() < other.sort_key()


EventSubscriber = Callable[["GameEvent"], None]


@dataclass
class _Subscription:
    callback: EventSubscriber
    name: str


def _describe(subscriber: EventSubscriber, name: Optional[str]) -> str:
    return name or getattr(subscriber, "__name__", "anonymous")


class EventManager:
    """Queued publisher-subscriber bus for match events."""

    def __init__(self, enable_debug_logging: bool = False, history_size: int = 1000):
        """
        Args:
            enable_debug_logging: Report bus activity through the debug callback
            history_size: Number of delivered events kept for inspection
        """
        self.enable_debug_logging = enable_debug_logging

        self._by_type: dict["EventType", list[_Subscription]] = defaultdict(list)
        self._universal: list[_Subscription] = []
        self._pending: list[QueuedEvent] = []  # heap
        self._delivered: deque[QueuedEvent] = deque(maxlen=history_size)

        self._published = 0
        self._processed = 0
        self._subscriber_errors = 0

        self._lock = threading.RLock()
        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    # ============== Subscriptions ==============

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Call ``subscriber`` for every delivered event of ``event_type``."""
        name = _describe(subscriber, subscriber_name)
        with self._lock:
            self._by_type[event_type].append(_Subscription(subscriber, name))
        self._debug_log(f"{name} listens for {event_type.name}")

    def subscribe_all(self, subscriber: EventSubscriber, subscriber_name: Optional[str] = None) -> None:
        """Call ``subscriber`` for every delivered event."""
        name = _describe(subscriber, subscriber_name)
        with self._lock:
            self._universal.append(_Subscription(subscriber, name))
        self._debug_log(f"{name} listens for all events")

    @staticmethod
    def _remove(subscriptions: list[_Subscription], subscriber: EventSubscriber) -> bool:
        for index, subscription in enumerate(subscriptions):
            if subscription.callback == subscriber:
                del subscriptions[index]
                return True
        return False

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Returns True if the subscriber was registered for ``event_type``."""
        with self._lock:
            return self._remove(self._by_type[event_type], subscriber)

    def unsubscribe_all(self, subscriber: EventSubscriber) -> bool:
        """Returns True if the subscriber was a universal subscriber."""
        with self._lock:
            return self._remove(self._universal, subscriber)

    # ============== Publishing ==============

    def publish(
        self,
        event: "GameEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue ``event`` for the next :meth:`process_events` call."""
        queued = QueuedEvent(event=event, priority=priority, source=source or "unknown")
        with self._lock:
            heapq.heappush(self._pending, queued)
            self._published += 1
        self._debug_log(f"Queued {type(event).__name__} at tick {event.tick} from {queued.source}")

    def publish_immediate(self, event: "GameEvent", source: Optional[str] = None) -> None:
        """Deliver ``event`` right away, ahead of anything queued."""
        queued = QueuedEvent(event=event, priority=EventPriority.CRITICAL, source=source or "immediate")
        with self._lock:
            self._published += 1
        self._deliver(queued)

    def process_events(self, max_events: Optional[int] = None) -> int:
        """Deliver queued events in priority order.

        Events published by subscribers during delivery wait for the next
        call.

        Args:
            max_events: Stop after this many deliveries (None for all)

        Returns:
            Number of events delivered
        """
        with self._lock:
            batch = [heapq.heappop(self._pending) for _ in range(len(self._pending))]

        if max_events is not None and max_events < len(batch):
            batch, leftover = batch[:max_events], batch[max_events:]
            with self._lock:
                for queued in leftover:
                    heapq.heappush(self._pending, queued)

        for queued in batch:
            self._deliver(queued)
        return len(batch)

    def _deliver(self, queued: QueuedEvent) -> None:
        """Hand one event to its subscribers.

        A subscriber that raises is counted and reported through the debug
        callback; the remaining subscribers still receive the event.
        """
        event = queued.event
        with self._lock:
            self._delivered.append(queued)
            self._processed += 1
            recipients = list(self._by_type.get(event.event_type, [])) + list(self._universal)

        for subscription in recipients:
            try:
                subscription.callback(event)
            except Exception as e:
                with self._lock:
                    self._subscriber_errors += 1
                self._debug_log(f"{subscription.name} failed on {type(event).__name__}: {e}")

    # ============== Inspection ==============

    def has_queued_events(self) -> bool:
        with self._lock:
            return bool(self._pending)

    def has_high_priority_events(self) -> bool:
        with self._lock:
            return bool(self._pending) and self._pending[0].priority.value <= EventPriority.HIGH.value

    def clear_queue(self) -> int:
        """Drop every queued event. Returns how many were dropped."""
        with self._lock:
            dropped = len(self._pending)
            self._pending.clear()
        self._debug_log(f"Dropped {dropped} queued events")
        return dropped

    def get_statistics(self) -> dict[str, Any]:
        with self._lock:
            return {
                'events_published': self._published,
                'events_processed': self._processed,
                'events_queued': len(self._pending),
                'subscriber_errors': self._subscriber_errors,
                'subscribers_count': sum(len(subs) for subs in self._by_type.values()),
                'universal_subscribers_count': len(self._universal),
                'event_history_size': len(self._delivered),
            }

    def get_recent_events(self, count: int = 10) -> list[dict[str, Any]]:
        """Most recently delivered events, oldest first."""
        with self._lock:
            recent = list(self._delivered)[-count:]
        return [
            {
                'event_type': type(queued.event).__name__,
                'tick': queued.event.tick,
                'priority': queued.priority.name,
                'source': queued.source,
                'timestamp': queued.timestamp.isoformat(),
            }
            for queued in recent
        ]

    def shutdown(self) -> None:
        """Forget all subscribers, queued events and history."""
        with self._lock:
            self._by_type.clear()
            self._universal.clear()
            self._pending.clear()
            self._delivered.clear()
        self._debug_log("Event bus shut down")
