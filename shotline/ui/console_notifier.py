"""Console notifications for terminal use."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import format_progress

if TYPE_CHECKING:
    from ..screenshot import Screenshot
    from ..upload import UploadResult, UploadSession


@dataclass
class ConsoleNotifier:
    """Prints notifications to stdout."""

    prefix: str = "Shotline> "

    def notify_screenshot(self, screenshot: "Screenshot") -> None:
        location = screenshot.destination or screenshot.source
        extra = " (copied to clipboard)" if screenshot.in_clipboard else ""
        print(f"{self.prefix}Screenshot: {location}{extra}")

    def notify_error(self, message: str) -> None:
        print(f"{self.prefix}Error: {message}")

    def notify_upload(self, screenshot: "Screenshot", session: "UploadSession") -> None:
        last_line = ""

        def on_progress(sent: int, total: int) -> None:
            nonlocal last_line
            line = format_progress(sent, total)
            # Progress may arrive in bursts; only print visible changes.
            if line != last_line:
                last_line = line
                print(f"{self.prefix}{line}")

        def on_done(result: "UploadResult") -> None:
            print(f"{self.prefix}Uploaded: {result.link or '(no link)'}")

        def on_error(detail: Exception) -> None:
            self.notify_error(f"Upload failed: {detail}")

        print(f"{self.prefix}Uploading {screenshot.source.name}...")
        session.connect("progress", on_progress)
        session.connect("done", on_done)
        session.connect("error", on_error)
