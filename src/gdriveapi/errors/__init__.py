"""Public error exports for gdriveapi."""

from __future__ import annotations

from .exceptions import (
    AlreadyAuthorizedError,
    ApiError,
    AuthError,
    ConflictError,
    CopyFailedError,
    DownloadFailedError,
    ExportFailedError,
    GDriveApiError,
    HttpErrorInfo,
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
    map_http_error,
)

__all__ = [
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
    "HttpErrorInfo",
    "map_http_error",
]
