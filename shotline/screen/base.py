"""Interfaces for screen capture backends."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol


class CaptureMode(str, Enum):
    AREA = "area"
    WINDOW = "window"
    DESKTOP = "desktop"


class CaptureBackend(Protocol):
    """Produces one image file per ``start`` call.

    Each call ends with exactly one of the events ``screenshot(path)``,
    ``error(message)`` or ``stop()``.
    """

    def connect(self, event: str, callback: Callable[..., None]) -> int:
        """Register ``callback`` for ``event`` and return a handler id."""

    def disconnect(self, handler_id: int) -> None:
        """Remove a handler registered with ``connect``."""

    def start(self, mode: CaptureMode) -> None:
        """Begin a capture in ``mode``."""
