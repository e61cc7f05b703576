"""Capture lifecycle: one capture at a time, then delivery of the result."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from functools import partial

from .config import ClipboardAction, ShotlineConfig
from .desktop import Desktop
from .errors import CaptureFailed, ReentrantCapture, UnknownAction
from .events import EventEmitter
from .screen import CaptureBackend, CaptureMode
from .screenshot import Screenshot
from .ui import Notifier
from .upload import Uploader, UploadSession

logger = logging.getLogger(__name__)

ACTIONS = {
    "select-area": CaptureMode.AREA,
    "select-window": CaptureMode.WINDOW,
    "select-desktop": CaptureMode.DESKTOP,
}


def parse_action(action: str) -> CaptureMode:
    """Map an action name such as ``select-area`` to its capture mode."""

    try:
        return ACTIONS[action]
    except KeyError:
        raise UnknownAction(action) from None


@dataclass
class CaptureSession:
    """A capture that has been dispatched and has not finished yet."""

    mode: CaptureMode
    loop: "asyncio.AbstractEventLoop"
    outcome: "asyncio.Future[Screenshot | None] | None" = None
    handler_ids: list[int] = field(default_factory=list)


class CaptureOrchestrator(EventEmitter):
    """Runs captures one at a time and delivers each screenshot.

    A capture request made while another capture is in flight is dropped
    with a warning. After a successful capture the image is copied to the
    clipboard (when configured), saved (when configured), and then handed
    to the notifier and to ``screenshot-ready`` listeners, in that order.
    """

    EVENTS = frozenset({"screenshot-ready"})

    def __init__(
        self,
        *,
        config: ShotlineConfig,
        backend: CaptureBackend,
        desktop: Desktop,
        uploader: Uploader,
        notifier: Notifier,
    ) -> None:
        super().__init__()
        self.config = config
        self.latest_screenshot: Screenshot | None = None
        self._backend = backend
        self._desktop = desktop
        self._uploader = uploader
        self._notifier = notifier
        self._session: CaptureSession | None = None
        self._deliveries: set[asyncio.Task[None]] = set()
        self._closed = False

    @property
    def capture_active(self) -> bool:
        return self._session is not None

    def on_action(self, action: str) -> bool:
        """Dispatch a named action; every failure becomes an error notification."""

        try:
            return self.request_capture(parse_action(action))
        except Exception as exc:  # noqa: BLE001
            logger.error("Action %s failed: %s", action, exc)
            self._notifier.notify_error(str(exc))
            return False

    def request_capture(self, mode: CaptureMode) -> bool:
        """Start a capture. Returns False if one is already in progress."""

        return self._begin(mode, outcome=None)

    async def capture(self, mode: CaptureMode) -> Screenshot | None:
        """Capture and deliver a screenshot, waiting for the result.

        Returns ``None`` when the capture was cancelled. Failures are
        notified as usual and then raised.
        """

        outcome: asyncio.Future[Screenshot | None] = asyncio.get_running_loop().create_future()
        if not self._begin(mode, outcome=outcome):
            raise ReentrantCapture("a capture is already in progress")
        return await outcome

    def close(self) -> None:
        """Abort any capture in flight and drop all listeners."""

        if self._closed:
            return
        self._closed = True
        if self._session is not None:
            session = self._session
            self._end(session)
            _resolve(session.outcome, None)
        for task in list(self._deliveries):
            task.cancel()
        self.disconnect_all()

    def _begin(self, mode: CaptureMode, outcome: "asyncio.Future[Screenshot | None] | None") -> bool:
        if self._closed:
            raise RuntimeError("orchestrator is closed")
        if self._session is not None:
            logger.warning(
                "Capture already in progress (%s); ignoring %s request.",
                self._session.mode.value,
                mode.value,
            )
            return False

        # Delivery runs on this loop; fail here, before the session is claimed.
        loop = asyncio.get_running_loop()
        session = CaptureSession(mode=mode, loop=loop, outcome=outcome)
        self._session = session
        session.handler_ids = [
            self._backend.connect("screenshot", partial(self._on_screenshot, session)),
            self._backend.connect("error", partial(self._on_error, session)),
            self._backend.connect("stop", partial(self._on_stop, session)),
        ]
        try:
            self._backend.start(mode)
        except Exception:
            self._end(session)
            raise
        return True

    def _end(self, session: CaptureSession) -> None:
        for handler_id in session.handler_ids:
            self._backend.disconnect(handler_id)
        session.handler_ids = []
        if self._session is session:
            self._session = None

    def _on_screenshot(self, session: CaptureSession, file_path: str) -> None:
        if self._session is not session:
            return
        self._end(session)
        screenshot = Screenshot(
            file_path,
            config=self.config,
            desktop=self._desktop,
            uploader=self._uploader,
        )
        screenshot.connect("upload-started", partial(self._on_upload_started, screenshot))
        task = session.loop.create_task(self._deliver(screenshot, session))
        self._deliveries.add(task)
        task.add_done_callback(self._deliveries.discard)

    def _on_error(self, session: CaptureSession, message: str) -> None:
        if self._session is not session:
            return
        self._end(session)
        logger.warning("Capture failed: %s", message)
        self._notifier.notify_error(message)
        _fail(session.outcome, CaptureFailed(message))

    def _on_stop(self, session: CaptureSession) -> None:
        if self._session is not session:
            return
        self._end(session)
        logger.debug("Capture stopped (%s).", session.mode.value)
        _resolve(session.outcome, None)

    async def _deliver(self, screenshot: Screenshot, session: CaptureSession) -> None:
        try:
            if self.config.clipboard_action is ClipboardAction.SET_IMAGE_DATA:
                screenshot.copy_clipboard()
            if self.config.save_screenshot:
                await screenshot.autosave()
        except asyncio.CancelledError:
            _resolve(session.outcome, None)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception("Delivering screenshot %s failed", screenshot.source)
            self._notifier.notify_error(str(exc))
            _fail(session.outcome, exc)
            return

        self.latest_screenshot = screenshot
        self._notifier.notify_screenshot(screenshot)
        self.emit("screenshot-ready", screenshot)
        _resolve(session.outcome, screenshot)

    def _on_upload_started(self, screenshot: Screenshot, session: UploadSession) -> None:
        self._notifier.notify_upload(screenshot, session)


def _resolve(outcome: "asyncio.Future[Screenshot | None] | None", value: Screenshot | None) -> None:
    if outcome is not None and not outcome.done():
        outcome.set_result(value)


def _fail(outcome: "asyncio.Future[Screenshot | None] | None", exc: BaseException) -> None:
    if outcome is not None and not outcome.done():
        outcome.set_exception(exc)
