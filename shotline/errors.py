"""Error types raised by the capture and upload pipeline."""

from __future__ import annotations


class ShotlineError(Exception):
    """Base class for every error surfaced to the user."""


class ReentrantCapture(ShotlineError):
    """A capture was requested while another one is in flight."""


class UnknownAction(ShotlineError):
    def __init__(self, action: str) -> None:
        super().__init__(f"unknown action: {action}")
        self.action = action


class CaptureFailed(ShotlineError):
    """The capture backend reported an error."""


class UploadError(ShotlineError):
    """Base class for failures of a single upload."""


class SourceReadError(UploadError):
    """The screenshot file could not be read before uploading."""


class UploadHTTPError(UploadError):
    def __init__(self, status_code: int, message: str, body: str = "") -> None:
        super().__init__(f"HTTP {status_code} - {message}")
        self.status_code = status_code
        self.message = message
        self.body = body


class UploadParseError(UploadError):
    """The success response could not be decoded."""


class UploadAlreadyStarted(ShotlineError):
    """An upload session already exists for this screenshot."""


class NotComplete(ShotlineError):
    """The upload has not completed successfully."""


class MissingURI(ShotlineError):
    """The upload result carries no usable link."""
