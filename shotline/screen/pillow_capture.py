"""Full-desktop capture with Pillow."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from PIL import ImageGrab

from ..events import EventEmitter
from .base import CaptureMode

logger = logging.getLogger(__name__)


class PillowCaptureBackend(EventEmitter):
    """Grabs the whole desktop into a temporary PNG file.

    Area and window modes need an interactive selector and are reported as
    errors.
    """

    EVENTS = frozenset({"screenshot", "error", "stop"})

    def __init__(self, directory: Path | None = None) -> None:
        super().__init__()
        self.directory = directory
        self._task: asyncio.Task[None] | None = None

    def start(self, mode: CaptureMode) -> None:
        self._task = asyncio.get_running_loop().create_task(self._capture(mode))

    async def _capture(self, mode: CaptureMode) -> None:
        if mode is not CaptureMode.DESKTOP:
            self.emit("error", f"{mode.value} selection is not available without a selector")
            return
        try:
            path = await asyncio.to_thread(self._grab_desktop)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Desktop capture failed: %s", exc)
            self.emit("error", f"screen capture failed: {exc}")
            return
        self.emit("screenshot", str(path))

    def _grab_desktop(self) -> Path:
        image = ImageGrab.grab()
        handle, name = tempfile.mkstemp(
            prefix="shotline-", suffix=".png", dir=self.directory
        )
        os.close(handle)
        image.save(name, format="PNG")
        return Path(name)
