"""Public model exports for gdriveapi."""

from __future__ import annotations

from .remote_item import RemoteItem
from .upload import UploadProgress, UploadStatus

__all__ = [
    "RemoteItem",
    "UploadStatus",
    "UploadProgress",
]
