"""Match events and their types.

Events are how the simulation talks to everything that is not the
simulation: the log, audio cues and any renderer that wants to flash a hit.

Event Design Principles:
- Events are immutable dataclasses
- All events carry the match tick at which they happened
- Combatants are referenced by slot, never by live object, so a subscriber
  cannot mutate simulation state through an event
- Events use proper enums instead of magic strings
"""

from dataclasses import dataclass, field
from abc import ABC
from enum import Enum, auto
from typing import Optional

from ..data import CombatantSlot


class EventType(Enum):
    """Types of events subscribers can listen for."""
    # Match lifecycle
    MATCH_STARTED = auto()
    MATCH_RESET = auto()
    MATCH_ENDED = auto()

    # Combat
    ATTACK_STARTED = auto()     # Every initiated swing, hit or miss (strike sound cue)
    COMBATANT_HIT = auto()
    COMBATANT_DEFEATED = auto()

    # Logging
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all match events."""
    tick: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class MatchStarted(GameEvent):
    """Event emitted when a match is created."""
    player_one: str
    player_two: str

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.MATCH_STARTED)


@dataclass(frozen=True)
class MatchReset(GameEvent):
    """Event emitted when both combatants are recreated.

    ``tick`` is the tick count the match had reached before the reset.
    """
    previous_winner: Optional[CombatantSlot] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.MATCH_RESET)


@dataclass(frozen=True)
class MatchEnded(GameEvent):
    """Event emitted once when the outcome turns terminal."""
    winner: CombatantSlot
    winner_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.MATCH_ENDED)


@dataclass(frozen=True)
class AttackStarted(GameEvent):
    """Event emitted when a combatant begins a swing."""
    attacker: CombatantSlot
    hit: bool

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ATTACK_STARTED)


@dataclass(frozen=True)
class CombatantHit(GameEvent):
    """Event emitted when a swing lands and takes health."""
    attacker: CombatantSlot
    defender: CombatantSlot
    damage: int
    remaining_health: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBATANT_HIT)


@dataclass(frozen=True)
class CombatantDefeated(GameEvent):
    """Event emitted when a combatant's health reaches zero."""
    slot: CombatantSlot

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBATANT_DEFEATED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted to add a line to the match log."""
    message: str
    category: str = "SYSTEM"
    level: str = "INFO"
    source: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(GameEvent):
    """Event emitted for developer-facing diagnostics."""
    message: str
    source: str = "unknown"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(GameEvent):
    """Event emitted when the player asks for the log to be written to disk."""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)
