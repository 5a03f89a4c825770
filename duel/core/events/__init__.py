"""Event system for publisher-subscriber communication.

This package contains the complete event-driven architecture:
- event_manager.py: Publisher-subscriber event routing and coordination
- events.py: Event definitions for match communication
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    MatchStarted,
    MatchReset,
    MatchEnded,
    AttackStarted,
    CombatantHit,
    CombatantDefeated,
    LogMessage,
    DebugMessage,
    LogSaveRequested,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "MatchStarted",
    "MatchReset",
    "MatchEnded",
    "AttackStarted",
    "CombatantHit",
    "CombatantDefeated",
    "LogMessage",
    "DebugMessage",
    "LogSaveRequested",
]
