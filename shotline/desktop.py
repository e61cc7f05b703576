"""Desktop integration: clipboard, default handlers and helper processes."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)


class Desktop(Protocol):
    """Protocol for the desktop services used by delivery actions."""

    def set_clipboard_image(self, path: Path) -> None:
        """Place the image stored at ``path`` on the clipboard."""

    def set_clipboard_text(self, text: str) -> None:
        """Place ``text`` on the clipboard."""

    def open_uri(self, uri: str) -> None:
        """Open ``uri`` with the default handler."""

    def spawn(self, argv: Sequence[str]) -> None:
        """Start a detached helper process."""


class SystemDesktop:
    """Freedesktop implementation based on ``xdg-open`` and ``xclip``."""

    def __init__(self, clipboard_command: str = "xclip", open_command: str = "xdg-open") -> None:
        self.clipboard_command = clipboard_command
        self.open_command = open_command

    def set_clipboard_image(self, path: Path) -> None:
        self._pipe_to_clipboard("image/png", Path(path).read_bytes())

    def set_clipboard_text(self, text: str) -> None:
        self._pipe_to_clipboard("UTF8_STRING", text.encode("utf-8"))

    def open_uri(self, uri: str) -> None:
        self.spawn([self.open_command, uri])

    def spawn(self, argv: Sequence[str]) -> None:
        logger.debug("Spawning %s", list(argv))
        subprocess.Popen(
            list(argv),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )

    def _pipe_to_clipboard(self, target: str, payload: bytes) -> None:
        executable = shutil.which(self.clipboard_command)
        if executable is None:
            raise RuntimeError(
                f"{self.clipboard_command} is not installed. "
                "Install it to enable clipboard support."
            )
        subprocess.run(
            [executable, "-selection", "clipboard", "-t", target, "-i"],
            input=payload,
            check=True,
        )
