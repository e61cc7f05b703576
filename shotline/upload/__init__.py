"""Image upload for Shotline."""

from .base import UploadProgressListener, Uploader
from .imgur_client import ImgurUploader
from .session import UploadSession
from .types import UploadResult, UploadState

__all__ = [
    "UploadProgressListener",
    "Uploader",
    "ImgurUploader",
    "UploadSession",
    "UploadResult",
    "UploadState",
]
