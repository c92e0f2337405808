"""
In-memory event emitter for units.

Handlers subscribe to an exact event type or to a pattern:
- "*" receives every event
- dotted patterns match segment by segment, "*" matching one segment
  ("test.*" matches "test.run" but not "test.run.done")
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger("unitcore.events")

Handler = Callable[["Event"], None]


@dataclass
class EventError:
    """Error details attached to a failure event."""

    message: str
    code: Optional[str] = None

    @classmethod
    def from_exception(cls, error: BaseException) -> "EventError":
        return cls(message=str(error), code=type(error).__name__)


@dataclass
class Event:
    """Structured event passed to handlers."""

    type: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[EventError] = None


def matches(pattern: str, event_type: str) -> bool:
    """Check whether an event type matches a subscription pattern."""
    if pattern == "*" or pattern == event_type:
        return True
    if "." not in pattern or "*" not in pattern:
        return False

    pattern_parts = pattern.split(".")
    type_parts = event_type.split(".")
    if len(pattern_parts) != len(type_parts):
        return False

    return all(p == "*" or p == t for p, t in zip(pattern_parts, type_parts))


class EventEmitter:
    """Synchronous event emitter with wildcard subscriptions."""

    def __init__(self):
        self._observers: Dict[str, List[Handler]] = {}

    def on(self, pattern: str, handler: Handler) -> Callable[[], None]:
        """
        Subscribe a handler.

        Returns:
            Function that removes this handler again
        """
        handlers = self._observers.setdefault(pattern, [])
        if handler not in handlers:
            handlers.append(handler)

        def unsubscribe() -> None:
            current = self._observers.get(pattern)
            if not current or handler not in current:
                return
            current.remove(handler)
            if not current:
                del self._observers[pattern]

        return unsubscribe

    def once(self, pattern: str, handler: Handler) -> Callable[[], None]:
        """Subscribe a handler that is removed after its first call."""
        unsubscribe: Optional[Callable[[], None]] = None

        def wrapper(event: Event) -> None:
            if unsubscribe is not None:
                unsubscribe()
            handler(event)

        unsubscribe = self.on(pattern, wrapper)
        return unsubscribe

    def off(self, pattern: str) -> None:
        """Remove all handlers registered under a pattern."""
        self._observers.pop(pattern, None)

    def emit(self, event: Event) -> None:
        """Deliver an event to every handler whose pattern matches."""
        # Snapshot first, once-handlers mutate the observer lists.
        targets = [
            handler
            for pattern, handlers in list(self._observers.items())
            if matches(pattern, event.type)
            for handler in list(handlers)
        ]
        for handler in targets:
            handler(event)
        logger.debug(f"Emitted {event.type} to {len(targets)} handler(s)")

    def remove_all_listeners(self) -> None:
        self._observers.clear()

    def listener_count(self, pattern: str) -> int:
        return len(self._observers.get(pattern, []))

    def event_types(self) -> List[str]:
        return list(self._observers.keys())

    def has_handlers(self, pattern: str) -> bool:
        return self.listener_count(pattern) > 0
