"""Tests for Shotline configuration loading."""

from shotline.config import (
    DEFAULT_FILENAME_TEMPLATE,
    DEFAULT_IMGUR_CLIENT_ID,
    ClipboardAction,
    ShotlineConfig,
)

ENV_VARS = [
    "SHOTLINE_SAVE_SCREENSHOT",
    "SHOTLINE_SAVE_LOCATION",
    "SHOTLINE_FILENAME_TEMPLATE",
    "SHOTLINE_CLIPBOARD_ACTION",
    "SHOTLINE_IMGUR_CLIENT_ID",
    "SHOTLINE_IMGUR_BASE_URL",
    "SHOTLINE_UPLOAD_TIMEOUT",
    "SHOTLINE_NOTIFIER",
    "SHOTLINE_SAVE_DIALOG_COMMAND",
]


def test_config_defaults(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    config = ShotlineConfig.from_env()
    assert config.save_screenshot is False
    assert config.save_location == "$PICTURES"
    assert config.filename_template == DEFAULT_FILENAME_TEMPLATE
    assert config.clipboard_action is ClipboardAction.NONE
    assert config.imgur_client_id == DEFAULT_IMGUR_CLIENT_ID
    assert config.imgur_base_url == "https://api.imgur.com/3/"
    assert config.upload_timeout == 60.0
    assert config.notifier == "console"


def test_config_overrides(monkeypatch) -> None:
    monkeypatch.setenv("SHOTLINE_SAVE_SCREENSHOT", "yes")
    monkeypatch.setenv("SHOTLINE_SAVE_LOCATION", "/tmp/shots")
    monkeypatch.setenv("SHOTLINE_FILENAME_TEMPLATE", "{N}")
    monkeypatch.setenv("SHOTLINE_CLIPBOARD_ACTION", "set-image-data")
    monkeypatch.setenv("SHOTLINE_IMGUR_CLIENT_ID", "abc")
    monkeypatch.setenv("SHOTLINE_UPLOAD_TIMEOUT", "5")
    monkeypatch.setenv("SHOTLINE_NOTIFIER", " Desktop ")

    config = ShotlineConfig.from_env()
    assert config.save_screenshot is True
    assert config.save_location == "/tmp/shots"
    assert config.filename_template == "{N}"
    assert config.clipboard_action is ClipboardAction.SET_IMAGE_DATA
    assert config.imgur_client_id == "abc"
    assert config.upload_timeout == 5.0
    assert config.notifier == "desktop"


def test_unknown_clipboard_action_falls_back_to_none(monkeypatch) -> None:
    monkeypatch.setenv("SHOTLINE_CLIPBOARD_ACTION", "paste-everywhere")
    assert ShotlineConfig.from_env().clipboard_action is ClipboardAction.NONE
