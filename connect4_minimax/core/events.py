"""
Event definitions for the Connect4 engine.

Events let the presentation layer react to game changes (score display,
win/draw notifications) without the engine knowing who listens.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    """Types of events in the system."""

    # Game lifecycle
    GAME_STARTED = auto()
    GAME_RESET = auto()
    GAME_WON = auto()
    GAME_DRAW = auto()

    # Moves
    MOVE_MADE = auto()
    INVALID_MOVE = auto()
    TURN_CHANGED = auto()
    AI_MOVE_CHOSEN = auto()

    # Session
    SCORE_UPDATED = auto()


@dataclass
class Event:
    """
    Base event structure.

    Attributes:
        type: The type of event
        data: Event-specific payload
        timestamp: When the event was created
        source: Which module created the event
    """

    type: EventType
    data: Any = None
    timestamp: float = field(default_factory=time.time)
    source: str = "unknown"

    def __str__(self) -> str:
        return f"[{self.source}] {self.type.name}: {self.data}"
