"""Desktop notifications through plyer."""

from __future__ import annotations

import importlib.util
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..screenshot import Screenshot
    from ..upload import UploadResult, UploadSession

logger = logging.getLogger(__name__)

APP_NAME = "Shotline"


class DesktopNotifier:
    """Shows native notifications using ``plyer.notification``."""

    def __init__(self, timeout: int = 5) -> None:
        if importlib.util.find_spec("plyer") is None:
            raise RuntimeError(
                "plyer is not installed. Install it to enable desktop notifications."
            )

        from plyer import notification  # type: ignore

        self._notification = notification
        self.timeout = timeout

    def notify_screenshot(self, screenshot: "Screenshot") -> None:
        location = screenshot.destination or screenshot.source
        self._show("Screenshot captured", str(location))

    def notify_error(self, message: str) -> None:
        self._show("Screenshot error", message)

    def notify_upload(self, screenshot: "Screenshot", session: "UploadSession") -> None:
        def on_done(result: "UploadResult") -> None:
            self._show("Upload complete", result.link or "The upload returned no link.")

        def on_error(detail: Exception) -> None:
            self._show("Upload failed", str(detail))

        session.connect("done", on_done)
        session.connect("error", on_error)
        self._show("Uploading screenshot", screenshot.source.name)

    def _show(self, title: str, message: str) -> None:
        try:
            self._notification.notify(
                title=title, message=message, app_name=APP_NAME, timeout=self.timeout
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("Desktop notification failed: %s", exc)
