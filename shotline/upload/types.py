"""Types describing an upload and its outcome."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class UploadState(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (UploadState.COMPLETED, UploadState.FAILED)


@dataclass(frozen=True)
class UploadResult:
    """Remote resource created by a successful upload."""

    link: str | None
    data: Mapping[str, Any] = field(default_factory=dict)
