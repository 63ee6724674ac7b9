"""Authorization strategies and Drive service construction for gdriveapi."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Protocol

import httplib2
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.http import set_user_agent

from gdriveapi.errors import AuthError

from .options import DriveApiOptions

logger = logging.getLogger(__name__)


class AuthProvider(Protocol):
    """
    Pluggable authorization strategy used by SessionManager.

    `authorize()` returns a credentials object exposing `valid`,
    `refresh_token` and `refresh(request)` (google.oauth2 Credentials or a fake).
    """

    def authorize(self) -> Any:
        ...

    def refresh(self, credentials: Any) -> None:
        ...


class OAuthProvider:
    """Installed-app OAuth flow with an on-disk authorized-user token cache."""

    def __init__(self, options: DriveApiOptions) -> None:
        self._options = options

    @property
    def token_file(self) -> str:
        return self._options.token_file

    def authorize(self) -> Credentials:
        return self.get_credentials(ensure_valid=True)

    def get_credentials(self, ensure_valid: bool = True) -> Credentials:
        """
        Return OAuth credentials for the configured scopes.

        Args:
            ensure_valid: If True, refresh a cached token when possible and fall
                back to the browser flow when the token is unusable.

        Raises:
            AuthError: on load/refresh/flow failures.
        """
        scopes = list(self._options.scopes)
        token_file = self.token_file
        creds = None

        if os.path.exists(token_file):
            try:
                creds = Credentials.from_authorized_user_file(token_file, scopes=scopes)
            except Exception as exc:
                raise AuthError(
                    "Failed to load token file",
                    details={"token_file": token_file},
                    cause=exc,
                ) from exc

            if not ensure_valid:
                return creds

            if not creds.valid and creds.refresh_token:
                self.refresh(creds)

            if creds.valid:
                return creds

        client_secrets = self._options.credentials_path
        try:
            flow = InstalledAppFlow.from_client_secrets_file(client_secrets, scopes=scopes)
            creds = flow.run_local_server(port=0)
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={
                    "client_secrets_file": client_secrets,
                    "token_file": token_file,
                },
                cause=exc,
            ) from exc

        self._save_credentials(creds)
        logger.info("Authorized user %s via OAuth flow", self._options.user_id)
        return creds

    def refresh(self, credentials: Credentials) -> None:
        try:
            credentials.refresh(Request())
        except Exception as exc:
            raise AuthError(
                "Failed to refresh OAuth credentials",
                details={"token_file": self.token_file},
                cause=exc,
            ) from exc
        self._save_credentials(credentials)

    def _save_credentials(self, creds: Credentials) -> None:
        token_file = self.token_file
        token_dir = os.path.dirname(token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)

        try:
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except OSError as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc


def build_drive_service(credentials: Any, application_name: Optional[str] = None) -> Any:
    """
    Build a Drive v3 service resource.

    When `application_name` is given it is sent as the User-Agent.

    Returns:
        googleapiclient.discovery.Resource
    """
    try:
        if application_name:
            http = AuthorizedHttp(credentials, http=httplib2.Http())
            http = set_user_agent(http, application_name)
            return build("drive", "v3", http=http, cache_discovery=False)
        return build("drive", "v3", credentials=credentials, cache_discovery=False)
    except Exception as exc:
        raise AuthError("Failed to build Drive service", cause=exc) from exc
