"""Configuration loading for Shotline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_FILENAME_TEMPLATE = "Screenshot from {Y}-{m}-{d} {H}-{M}-{S}"
DEFAULT_IMGUR_CLIENT_ID = "c5c1369fb46f29e"
DEFAULT_IMGUR_BASE_URL = "https://api.imgur.com/3/"


class ClipboardAction(str, Enum):
    NONE = "none"
    SET_IMAGE_DATA = "set-image-data"


@dataclass(frozen=True)
class ShotlineConfig:
    """Runtime configuration for Shotline."""

    save_screenshot: bool = False
    save_location: str = "$PICTURES"
    filename_template: str = DEFAULT_FILENAME_TEMPLATE
    clipboard_action: ClipboardAction = ClipboardAction.NONE
    imgur_client_id: str = DEFAULT_IMGUR_CLIENT_ID
    imgur_base_url: str = DEFAULT_IMGUR_BASE_URL
    upload_timeout: float = 60.0
    notifier: str = "console"
    save_dialog_command: str = "shotline-save-dialog"

    @classmethod
    def from_env(cls) -> "ShotlineConfig":
        """Load configuration from environment variables."""

        return cls(
            save_screenshot=_truthy(os.getenv("SHOTLINE_SAVE_SCREENSHOT", "false")),
            save_location=os.getenv("SHOTLINE_SAVE_LOCATION", "$PICTURES"),
            filename_template=os.getenv(
                "SHOTLINE_FILENAME_TEMPLATE", DEFAULT_FILENAME_TEMPLATE
            ),
            clipboard_action=_clipboard_action(
                os.getenv("SHOTLINE_CLIPBOARD_ACTION", "none")
            ),
            imgur_client_id=os.getenv("SHOTLINE_IMGUR_CLIENT_ID", DEFAULT_IMGUR_CLIENT_ID),
            imgur_base_url=os.getenv("SHOTLINE_IMGUR_BASE_URL", DEFAULT_IMGUR_BASE_URL),
            upload_timeout=float(os.getenv("SHOTLINE_UPLOAD_TIMEOUT", "60.0")),
            notifier=os.getenv("SHOTLINE_NOTIFIER", "console").strip().lower(),
            save_dialog_command=os.getenv(
                "SHOTLINE_SAVE_DIALOG_COMMAND", "shotline-save-dialog"
            ),
        )


def _truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _clipboard_action(value: str) -> ClipboardAction:
    try:
        return ClipboardAction(value.strip().lower())
    except ValueError:
        logger.warning("Unknown clipboard action %r, using 'none'.", value)
        return ClipboardAction.NONE
