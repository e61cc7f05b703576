"""Listener registration shared by the objects that emit events."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, ClassVar

logger = logging.getLogger(__name__)

Listener = Callable[..., None]


class EventEmitter:
    """Publish/subscribe helper with listener lists keyed by event name.

    Subclasses declare the closed set of names they emit in ``EVENTS``.
    Listeners are called in registration order. A listener that raises is
    logged and does not stop the remaining listeners.
    """

    EVENTS: ClassVar[frozenset[str]] = frozenset()

    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[int, Listener]]] = {}
        self._ids = itertools.count(1)

    def connect(self, event: str, callback: Listener) -> int:
        if event not in self.EVENTS:
            raise ValueError(f"{type(self).__name__} has no event {event!r}")
        handler_id = next(self._ids)
        self._listeners.setdefault(event, []).append((handler_id, callback))
        return handler_id

    def disconnect(self, handler_id: int) -> None:
        for event, listeners in self._listeners.items():
            remaining = [item for item in listeners if item[0] != handler_id]
            if len(remaining) != len(listeners):
                self._listeners[event] = remaining
                return

    def disconnect_all(self) -> None:
        self._listeners.clear()

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def emit(self, event: str, *args: Any) -> None:
        # Copy so listeners may disconnect themselves while being called.
        for _, callback in list(self._listeners.get(event, ())):
            try:
                callback(*args)
            except Exception:  # noqa: BLE001
                logger.exception("Listener for %r on %s failed", event, type(self).__name__)
