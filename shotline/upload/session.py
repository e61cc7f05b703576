"""A single upload attempt and its lifecycle events."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import MissingURI, NotComplete, UploadAlreadyStarted, UploadError
from ..events import EventEmitter
from .base import Uploader
from .types import UploadResult, UploadState

if TYPE_CHECKING:
    from ..desktop import Desktop

logger = logging.getLogger(__name__)


class UploadSession(EventEmitter):
    """Drives one ``Uploader`` call for one screenshot.

    State moves forward only: ``IDLE -> UPLOADING -> COMPLETED | FAILED``,
    or ``IDLE -> FAILED`` when the source cannot be read. Events:

    - ``started()`` once the request body is ready to send
    - ``progress(sent, total)`` with non-decreasing ``sent <= total``
    - ``done(result)`` with the ``UploadResult``
    - ``error(detail)`` with the ``UploadError``
    """

    EVENTS = frozenset({"started", "progress", "done", "error"})

    def __init__(self, source: Path, uploader: Uploader) -> None:
        super().__init__()
        self.source = Path(source)
        self._uploader = uploader
        self._state = UploadState.IDLE
        self._claimed = False
        self._task: asyncio.Task[None] | None = None
        self.bytes_total = 0
        self.bytes_sent = 0
        self.result: UploadResult | None = None
        self.error_detail: UploadError | None = None

    @property
    def state(self) -> UploadState:
        return self._state

    def start(self) -> asyncio.Task[None]:
        """Schedule the upload on the running event loop."""
        loop = asyncio.get_running_loop()
        self._claim()
        self._task = loop.create_task(self._run())
        self._task.add_done_callback(self._on_task_done)
        return self._task

    async def run(self) -> None:
        """Run the upload to completion in the current task."""
        self._claim()
        await self._run()

    async def wait(self) -> None:
        """Wait for a session scheduled with ``start`` to finish."""
        if self._task is not None:
            await asyncio.wait({self._task})

    def cancel(self) -> bool:
        """Cancel a scheduled upload. Terminal sessions are left untouched."""
        if self._task is None or self._state.is_terminal:
            return False
        return self._task.cancel()

    def is_complete(self) -> bool:
        return self._state is UploadState.COMPLETED and self.result is not None

    def result_url(self) -> str:
        if not self.is_complete():
            raise NotComplete("no completed upload")
        link = self.result.link if self.result is not None else None
        if not link:
            raise MissingURI("no link in upload result")
        return link

    def open_result_url(self, desktop: "Desktop") -> None:
        desktop.open_uri(self.result_url())

    def copy_result_url(self, desktop: "Desktop") -> None:
        desktop.set_clipboard_text(self.result_url())

    # UploadProgressListener

    def on_started(self, total: int) -> None:
        if self._state is not UploadState.IDLE:
            return
        self._state = UploadState.UPLOADING
        self.bytes_total = max(total, 0)
        self.bytes_sent = 0
        self.emit("started")

    def on_progress(self, sent: int, total: int) -> None:
        if self._state is not UploadState.UPLOADING:
            return
        self.bytes_sent = min(max(sent, self.bytes_sent), self.bytes_total)
        self.emit("progress", self.bytes_sent, self.bytes_total)

    def _claim(self) -> None:
        if self._claimed:
            raise UploadAlreadyStarted("upload already started")
        self._claimed = True

    async def _run(self) -> None:
        try:
            result = await self._uploader.upload(self.source, self)
        except asyncio.CancelledError:
            self._fail(UploadError("upload cancelled"))
            raise
        except UploadError as exc:
            self._fail(exc)
            return
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected upload failure for %s", self.source)
            self._fail(UploadError(str(exc) or type(exc).__name__))
            return
        self._complete(result)

    def _on_task_done(self, task: "asyncio.Task[None]") -> None:
        # A task cancelled before its first step never enters _run.
        if task.cancelled():
            self._fail(UploadError("upload cancelled"))

    def _complete(self, result: UploadResult) -> None:
        if self._state.is_terminal:
            return
        self._state = UploadState.COMPLETED
        self.result = result
        self.emit("done", result)

    def _fail(self, detail: UploadError) -> None:
        if self._state.is_terminal:
            return
        logger.warning("Upload of %s failed: %s", self.source, detail)
        self._state = UploadState.FAILED
        self.error_detail = detail
        self.emit("error", detail)
