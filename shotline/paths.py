"""Path helpers for save locations."""

from __future__ import annotations

import os
from pathlib import Path


def pictures_dir() -> Path:
    configured = os.getenv("XDG_PICTURES_DIR")
    if configured:
        return Path(os.path.expandvars(configured)).expanduser()
    return Path.home() / "Pictures"


def expand_path(value: str) -> Path:
    """Expand ``$PICTURES``, ``~`` and environment variables in ``value``."""

    if value.startswith("$PICTURES"):
        value = str(pictures_dir()) + value[len("$PICTURES"):]
    return Path(os.path.expandvars(value)).expanduser()
