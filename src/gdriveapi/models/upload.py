"""Upload progress models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UploadStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class UploadProgress:
    """Snapshot of a resumable upload, passed to progress observers."""

    status: UploadStatus = UploadStatus.NOT_STARTED
    bytes_sent: int = 0
    total_size: Optional[int] = None
    error: Optional[BaseException] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (
            UploadStatus.COMPLETED,
            UploadStatus.FAILED,
            UploadStatus.CANCELLED,
        )
