"""Interfaces for user-facing notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..screenshot import Screenshot
    from ..upload import UploadSession


class Notifier(Protocol):
    """Protocol for notification frontends."""

    def notify_screenshot(self, screenshot: "Screenshot") -> None:
        """Announce a new screenshot."""

    def notify_error(self, message: str) -> None:
        """Show an error message."""

    def notify_upload(self, screenshot: "Screenshot", session: "UploadSession") -> None:
        """Follow an upload that was just started."""


def format_progress(sent: int, total: int) -> str:
    if total <= 0:
        return "Uploading..."
    percent = min(100, int(sent * 100 / total))
    return f"Uploading... {percent}%"
