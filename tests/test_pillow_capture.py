"""Tests for the Pillow desktop capture backend."""

import asyncio
from pathlib import Path

from PIL import Image

from shotline.screen import CaptureMode, PillowCaptureBackend
from shotline.screen import pillow_capture


def run_capture(backend: PillowCaptureBackend, mode: CaptureMode) -> list:
    events = []
    backend.connect("screenshot", lambda path: events.append(("screenshot", path)))
    backend.connect("error", lambda message: events.append(("error", message)))
    backend.connect("stop", lambda: events.append(("stop", None)))

    async def scenario() -> None:
        backend.start(mode)
        await backend._task

    asyncio.run(scenario())
    return events


def test_desktop_capture_writes_png(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(
        pillow_capture.ImageGrab, "grab", lambda: Image.new("RGB", (8, 6), color="blue")
    )
    backend = PillowCaptureBackend(directory=tmp_path)

    events = run_capture(backend, CaptureMode.DESKTOP)

    assert [name for name, _ in events] == ["screenshot"]
    path = Path(events[0][1])
    assert path.parent == tmp_path
    with Image.open(path) as image:
        assert image.size == (8, 6)


def test_grab_failure_is_reported(monkeypatch, tmp_path) -> None:
    def broken_grab():
        raise OSError("X connection failed")

    monkeypatch.setattr(pillow_capture.ImageGrab, "grab", broken_grab)
    events = run_capture(PillowCaptureBackend(directory=tmp_path), CaptureMode.DESKTOP)

    assert events == [("error", "screen capture failed: X connection failed")]


def test_interactive_modes_are_reported_as_errors(tmp_path) -> None:
    events = run_capture(PillowCaptureBackend(directory=tmp_path), CaptureMode.AREA)

    assert len(events) == 1
    assert events[0][0] == "error"
    assert "area" in events[0][1]
