"""Controller exports for gdriveapi."""

from __future__ import annotations

from .drive_controller import GoogleDriveController
from .pagination import iter_items, list_all
from .transfer import ResumableUpload

__all__ = ["GoogleDriveController", "ResumableUpload", "iter_items", "list_all"]
