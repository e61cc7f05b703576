"""Screen capture backends for Shotline."""

from .base import CaptureBackend, CaptureMode
from .pillow_capture import PillowCaptureBackend

__all__ = ["CaptureBackend", "CaptureMode", "PillowCaptureBackend"]
