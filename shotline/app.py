"""Application wiring for Shotline."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import os
import sys
from typing import Sequence

from .config import ClipboardAction, ShotlineConfig
from .desktop import Desktop, SystemDesktop
from .errors import UnknownAction
from .orchestrator import ACTIONS, CaptureOrchestrator, parse_action
from .screen import CaptureBackend, PillowCaptureBackend
from .ui import ConsoleNotifier, DesktopNotifier, Notifier
from .upload import ImgurUploader, Uploader

logger = logging.getLogger(__name__)


class ShotlineApp:
    """Top-level application that wires Shotline components together."""

    def __init__(
        self,
        config: ShotlineConfig | None = None,
        *,
        backend: CaptureBackend | None = None,
        desktop: Desktop | None = None,
        uploader: Uploader | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.config = config or ShotlineConfig.from_env()
        self.desktop = desktop or SystemDesktop()
        self.uploader = uploader or ImgurUploader(
            client_id=self.config.imgur_client_id,
            base_url=self.config.imgur_base_url,
            timeout=self.config.upload_timeout,
        )
        self.notifier = notifier or _build_notifier(self.config)
        self.backend = backend or PillowCaptureBackend()
        self.orchestrator = CaptureOrchestrator(
            config=self.config,
            backend=self.backend,
            desktop=self.desktop,
            uploader=self.uploader,
            notifier=self.notifier,
        )

    async def run(self, action: str, *, upload: bool = False) -> int:
        """Run one capture and, optionally, upload the result."""
        try:
            mode = parse_action(action)
        except UnknownAction as exc:
            logger.error("%s", exc)
            self.notifier.notify_error(str(exc))
            return 2

        try:
            screenshot = await self.orchestrator.capture(mode)
        except Exception as exc:  # noqa: BLE001
            # Already surfaced through the notifier by the orchestrator.
            logger.debug("Capture did not produce a screenshot: %s", exc)
            return 1
        finally:
            self.orchestrator.close()

        if screenshot is None:
            logger.info("Capture cancelled.")
            return 1
        if not upload:
            return 0

        session = screenshot.start_upload()
        await session.wait()
        return 0 if session.is_complete() else 1


def _build_notifier(config: ShotlineConfig) -> Notifier:
    if config.notifier == "desktop":
        return DesktopNotifier()
    if config.notifier != "console":
        logger.warning("Unknown notifier %r, using the console.", config.notifier)
    return ConsoleNotifier()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shotline",
        description="Take a screenshot and save, copy or upload it.",
    )
    parser.add_argument(
        "action",
        help=f"Capture action, one of: {', '.join(ACTIONS)}.",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save the screenshot to the configured location.",
    )
    parser.add_argument(
        "--copy",
        action="store_true",
        help="Copy the image data to the clipboard.",
    )
    parser.add_argument(
        "--upload",
        action="store_true",
        help="Upload the screenshot to Imgur.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running Shotline."""
    args = build_parser().parse_args(argv)
    log_level = os.getenv("SHOTLINE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=log_level, format="%(levelname)s %(message)s")

    config = ShotlineConfig.from_env()
    if args.save:
        config = dataclasses.replace(config, save_screenshot=True)
    if args.copy:
        config = dataclasses.replace(config, clipboard_action=ClipboardAction.SET_IMAGE_DATA)
    return asyncio.run(ShotlineApp(config).run(args.action, upload=args.upload))


if __name__ == "__main__":
    sys.exit(main())
