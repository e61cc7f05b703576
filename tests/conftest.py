"""Shared fixtures for Shotline tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from fakes import FakeDesktop, FakeNotifier
from shotline.config import ShotlineConfig


@pytest.fixture
def image_path(tmp_path: Path) -> Path:
    path = tmp_path / "capture.png"
    Image.new("RGB", (4, 3), color="red").save(path)
    return path


@pytest.fixture
def config(tmp_path: Path) -> ShotlineConfig:
    return ShotlineConfig(
        save_location=str(tmp_path / "saved"),
        filename_template="shot-{N}-{w}x{h}",
    )


@pytest.fixture
def desktop() -> FakeDesktop:
    return FakeDesktop()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()
