"""
Synchronous event bus for record lifecycle hooks.

Routes emit an event once a write is committed; subscribers run inline,
in subscription order, before the emitting request continues. A handler
that raises is logged and skipped so it can never undo or fail the write
that triggered it.

Swapping this for a queue-backed dispatcher only requires a different
``emit`` implementation; handlers keep the same ``handler(record)`` shape.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Any]

POST_CREATED = 'post.created'
POST_UPDATED = 'post.updated'


class EventBus:
    """In-process observer registry keyed by event type."""

    def __init__(self):
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Register ``handler`` for ``event_type``. Re-subscribing is a no-op."""
        handlers = self._handlers[event_type]
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers(self, event_type: str) -> list[EventHandler]:
        return list(self._handlers.get(event_type, []))

    def emit(self, event_type: str, record: Any) -> int:
        """Run every handler for ``event_type`` and return how many succeeded."""
        succeeded = 0
        for handler in self.handlers(event_type):
            try:
                handler(record)
                succeeded += 1
            except Exception as e:
                logger.error(
                    f"Event handler {getattr(handler, '__name__', handler)!s} "
                    f"failed for {event_type}: {e}"
                )
        return succeeded
