"""Core infrastructure for the Connect4 engine."""

from .bus import EventBus, get_event_bus, reset_event_bus
from .config import (
    AISettings,
    GameSettings,
    LogSettings,
    Settings,
    get_settings,
    reset_settings,
)
from .errors import (
    BoardBusyError,
    ColumnFullError,
    Connect4Error,
    InvalidCoordinateError,
    NoLegalMoveError,
    TurnOrderError,
)
from .events import Event, EventType
from .types import (
    PLAYERS,
    GamePhase,
    GameState,
    Move,
    MoveResult,
    Player,
    Position,
)


__all__ = [
    # Config
    "get_settings",
    "reset_settings",
    "Settings",
    "GameSettings",
    "AISettings",
    "LogSettings",
    # Errors
    "Connect4Error",
    "ColumnFullError",
    "InvalidCoordinateError",
    "NoLegalMoveError",
    "TurnOrderError",
    "BoardBusyError",
    # Types
    "Player",
    "PLAYERS",
    "GamePhase",
    "Position",
    "Move",
    "MoveResult",
    "GameState",
    # Events
    "Event",
    "EventType",
    "EventBus",
    "get_event_bus",
    "reset_event_bus",
]
