"""A captured screenshot and the delivery actions that act on it."""

from __future__ import annotations

import asyncio
import logging
import shutil
from datetime import datetime
from pathlib import Path

from PIL import Image

from .config import ShotlineConfig
from .desktop import Desktop
from .errors import NotComplete, UploadAlreadyStarted
from .events import EventEmitter
from .filename import Dimensions, render
from .paths import expand_path
from .upload import Uploader, UploadSession

logger = logging.getLogger(__name__)

RESOURCE_DIR = Path(__file__).resolve().parent


class Screenshot(EventEmitter):
    """One captured image.

    ``destination`` is set once the image has been saved, ``in_clipboard``
    once it has been copied and ``upload`` once an upload was started. An
    upload session is never replaced. Emits ``upload-started(session)``.
    """

    EVENTS = frozenset({"upload-started"})

    def __init__(
        self,
        source: Path | str,
        *,
        config: ShotlineConfig,
        desktop: Desktop,
        uploader: Uploader,
        captured_at: datetime | None = None,
    ) -> None:
        super().__init__()
        self.source = Path(source)
        self.destination: Path | None = None
        self.in_clipboard = False
        self.upload: UploadSession | None = None
        self.captured_at = captured_at or datetime.now()
        self._config = config
        self._desktop = desktop
        self._uploader = uploader
        self._dimensions: Dimensions | None = None

    @property
    def dimensions(self) -> Dimensions:
        if self._dimensions is None:
            with Image.open(self.source) as image:
                width, height = image.size
            self._dimensions = Dimensions(width=width, height=height)
        return self._dimensions

    async def next_file(self) -> Path:
        """Return the first candidate path in the save location that is free."""

        directory = expand_path(self._config.save_location)
        dimensions = await asyncio.to_thread(lambda: self.dimensions)
        index = 0
        while True:
            name = render(self._config.filename_template, dimensions, index, self.captured_at)
            candidate = directory / name
            if not await asyncio.to_thread(candidate.exists):
                return candidate
            index += 1

    async def autosave(self) -> Path:
        destination = await self.next_file()
        await asyncio.to_thread(_copy_to_new_file, self.source, destination)
        self.destination = destination
        logger.info("Saved screenshot to %s", destination)
        return destination

    def copy_clipboard(self) -> None:
        self._desktop.set_clipboard_image(self.source)
        self.in_clipboard = True

    def launch_open(self) -> None:
        path = self.destination or self.source
        self._desktop.open_uri(path.resolve().as_uri())

    async def launch_save(self) -> Path:
        """Hand the image to the save dialog with a suggested target path."""

        candidate = await self.next_file()
        self._desktop.spawn(
            [
                self._config.save_dialog_command,
                str(self.source),
                str(expand_path("$PICTURES")),
                str(candidate),
                str(RESOURCE_DIR),
            ]
        )
        return candidate

    def start_upload(self) -> UploadSession:
        if self.upload is not None:
            raise UploadAlreadyStarted("an upload was already started for this screenshot")
        # Uploads run on the event loop; without one the image stays uploadable.
        asyncio.get_running_loop()
        session = UploadSession(self.source, self._uploader)
        self.upload = session
        self.emit("upload-started", session)
        session.start()
        return session

    def is_upload_complete(self) -> bool:
        return self.upload is not None and self.upload.is_complete()

    def open_upload_url(self) -> None:
        self._require_upload().open_result_url(self._desktop)

    def copy_upload_url(self) -> None:
        self._require_upload().copy_result_url(self._desktop)

    def _require_upload(self) -> UploadSession:
        if self.upload is None:
            raise NotComplete("no completed upload")
        return self.upload


def _copy_to_new_file(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    # "xb" fails if another process created the file after the existence check.
    with open(source, "rb") as src, open(destination, "xb") as dst:
        shutil.copyfileobj(src, dst)
