"""Notification frontends for Shotline."""

from .base import Notifier, format_progress
from .console_notifier import ConsoleNotifier
from .desktop_notifier import DesktopNotifier

__all__ = ["Notifier", "format_progress", "ConsoleNotifier", "DesktopNotifier"]
