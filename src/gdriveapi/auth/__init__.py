"""Public auth exports for gdriveapi."""

from __future__ import annotations

from .options import DRIVE_SCOPE, DriveApiOptions
from .provider import AuthProvider, OAuthProvider, build_drive_service
from .session import (
    Authenticated,
    Disposed,
    SessionManager,
    SessionState,
    Unauthenticated,
)

__all__ = [
    "DRIVE_SCOPE",
    "DriveApiOptions",
    "AuthProvider",
    "OAuthProvider",
    "build_drive_service",
    "SessionManager",
    "SessionState",
    "Unauthenticated",
    "Authenticated",
    "Disposed",
]
