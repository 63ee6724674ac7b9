"""Exception hierarchy and HTTP error mapping for gdriveapi."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveApiError(Exception):
    """
    Base exception for gdriveapi.

    Attributes:
        details: Optional structured information (e.g., HTTP status, file id).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class OperationCancelledError(Exception):
    """
    Raised when a cancel event is observed at a request boundary.

    Not a GDriveApiError subclass.
    """


class InvalidArgumentError(GDriveApiError):
    """Raised when arguments are invalid (empty strings, page size < 1, HTTP 400)."""


class InvalidStateError(GDriveApiError):
    """Raised when the library is used in an invalid state."""


class NotAuthorizedError(InvalidStateError):
    """Raised when the Drive service is accessed before authorize()."""


class AlreadyAuthorizedError(InvalidStateError):
    """Raised when authorize() is called on an authorized session."""


class ObjectDisposedError(InvalidStateError):
    """Raised when a disposed session or API object is used."""


class AuthError(GDriveApiError):
    """Raised when OAuth authentication/refresh fails (or HTTP 401)."""


class InvalidItemTypeError(GDriveApiError):
    """Raised when an operation expects a folder but got a file, or vice versa."""

    def __init__(
        self,
        file_id: str,
        actual_mime_type: str,
        expected: str,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            f"Invalid MIME type '{actual_mime_type}' for item '{file_id}'. "
            f"A {expected} was expected.",
            details={
                "file_id": file_id,
                "actual_mime_type": actual_mime_type,
                "expected": expected,
            },
            cause=cause,
        )


class UnsupportedMimeTypeError(GDriveApiError):
    """Raised when a MIME type has no export mapping or no known extension."""


class OperationFailedError(GDriveApiError):
    """Base for remote operations that did not produce the expected result."""


class CopyFailedError(OperationFailedError):
    """Raised when a server-side copy returns no new item."""


class UploadFailedError(OperationFailedError):
    """Raised when an upload does not terminate in the completed state."""


class UpdateContentFailedError(OperationFailedError):
    """Raised when replacing file content does not complete."""


class TrashFailedError(OperationFailedError):
    """Raised when the server does not report the item as trashed."""


class RestoreFailedError(OperationFailedError):
    """Raised when the server still reports the item as trashed after restore."""


class DownloadFailedError(OperationFailedError):
    """Raised when a binary download fails."""


class ExportFailedError(OperationFailedError):
    """Raised when exporting a Google Workspace document fails."""


class PermissionError(GDriveApiError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class NotFoundError(GDriveApiError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class ConflictError(GDriveApiError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(GDriveApiError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(GDriveApiError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(GDriveApiError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(GDriveApiError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdriveapi exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> GDriveApiError:
    """
    Map an HTTP error to a gdriveapi exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError, or QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
