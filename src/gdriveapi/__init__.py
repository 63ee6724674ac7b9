"""gdriveapi public API."""

from __future__ import annotations

from gdriveapi.aio import AsyncGoogleDriveApi
from gdriveapi.api import GoogleDriveApi
from gdriveapi.auth import (
    AuthProvider,
    DriveApiOptions,
    OAuthProvider,
    SessionManager,
)
from gdriveapi.controller import GoogleDriveController
from gdriveapi.errors import (
    AlreadyAuthorizedError,
    ApiError,
    AuthError,
    ConflictError,
    CopyFailedError,
    DownloadFailedError,
    ExportFailedError,
    GDriveApiError,
    InvalidArgumentError,
    InvalidItemTypeError,
    InvalidStateError,
    NetworkError,
    NotAuthorizedError,
    NotFoundError,
    ObjectDisposedError,
    OperationCancelledError,
    OperationFailedError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    RestoreFailedError,
    TrashFailedError,
    UnsupportedMimeTypeError,
    UpdateContentFailedError,
    UploadFailedError,
)
from gdriveapi.models import RemoteItem, UploadProgress, UploadStatus

__all__ = [
    # High-level
    "GoogleDriveApi",
    "AsyncGoogleDriveApi",
    "GoogleDriveController",
    # Auth / Config
    "DriveApiOptions",
    "SessionManager",
    "AuthProvider",
    "OAuthProvider",
    # Models
    "RemoteItem",
    "UploadProgress",
    "UploadStatus",
    # Errors
    "GDriveApiError",
    "OperationCancelledError",
    "InvalidArgumentError",
    "InvalidStateError",
    "NotAuthorizedError",
    "AlreadyAuthorizedError",
    "ObjectDisposedError",
    "AuthError",
    "InvalidItemTypeError",
    "UnsupportedMimeTypeError",
    "OperationFailedError",
    "CopyFailedError",
    "UploadFailedError",
    "UpdateContentFailedError",
    "TrashFailedError",
    "RestoreFailedError",
    "DownloadFailedError",
    "ExportFailedError",
    "PermissionError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
]
