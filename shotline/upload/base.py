"""Base interfaces for image uploaders."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .types import UploadResult


class UploadProgressListener(Protocol):
    """Receives the request size and transfer progress of one upload."""

    def on_started(self, total: int) -> None:
        """Called once the request body is encoded, before sending."""

    def on_progress(self, sent: int, total: int) -> None:
        """Called with the cumulative number of body bytes written."""


class Uploader(Protocol):
    """Protocol for image hosting clients."""

    async def upload(self, source: Path, listener: UploadProgressListener) -> UploadResult:
        """Upload ``source`` and return the hosted result.

        Failures are raised as ``shotline.errors.UploadError`` subclasses.
        """
