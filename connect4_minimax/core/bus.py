"""
Event bus between the engine and whatever presents the game.

Dispatch is synchronous: `publish` runs every handler on the caller's stack,
in subscription order, before returning. The engine publishes from inside
its move methods, so a handler sees the state right after the change.
"""

import logging
from collections import defaultdict, deque
from collections.abc import Callable

from .events import Event, EventType


logger = logging.getLogger(__name__)

Handler = Callable[[Event], None]


class EventBus:
    """
    Pub/sub event bus with a bounded log of recent events.

    Usage:
        bus = EventBus()
        bus.subscribe(EventType.GAME_WON, on_win)
        engine = GameEngine(bus=bus)

    A handler that raises is logged and skipped; the remaining handlers and
    the publishing engine carry on.
    """

    def __init__(self, max_log_size: int = 100) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._event_log: deque[Event] = deque(maxlen=max_log_size)

    def subscribe(self, event_type: EventType, handler: Handler) -> None:
        """Register a handler for an event type (once)."""
        handlers = self._handlers[event_type]
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: Event) -> None:
        """Record the event and hand it to its subscribers."""
        self._event_log.append(event)
        logger.debug("Event %s", event)

        # Snapshot so handlers may (un)subscribe while being called
        for handler in tuple(self._handlers[event.type]):
            try:
                handler(event)
            except Exception:
                logger.exception("Handler error for %s", event.type.name)

    def get_event_log(self, limit: int = 20) -> list[Event]:
        """Most recent events, oldest first."""
        return list(self._event_log)[-limit:]

    def clear_log(self) -> None:
        self._event_log.clear()


# ─────────────────────────────────────────────────────────────
# SINGLETON ACCESS
# ─────────────────────────────────────────────────────────────

_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get the global event bus singleton."""
    global _bus
    if _bus is None:
        _bus = EventBus()
    return _bus


def reset_event_bus() -> None:
    """Reset the event bus (for testing)."""
    global _bus
    _bus = None
