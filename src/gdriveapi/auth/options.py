"""Configuration for gdriveapi sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DRIVE_SCOPE: str = "https://www.googleapis.com/auth/drive"

ENV_PREFIX: str = "GDRIVEAPI_"


@dataclass(slots=True, frozen=True)
class DriveApiOptions:
    """
    Options recognized by GoogleDriveApi.

    Attributes:
        credentials_path: OAuth client secrets JSON.
        token_folder_path: Folder where authorized-user tokens are cached.
        user_id: Key of the cached token inside token_folder_path.
        application_name: Optional name sent as User-Agent.
        root_folder_id: Default parent for lookups and folder creation.
        scopes: OAuth scopes requested during authorization.
    """

    credentials_path: str = "credentials.json"
    token_folder_path: str = "_metadata"
    user_id: str = "user"
    application_name: Optional[str] = None
    root_folder_id: str = "root"
    scopes: tuple[str, ...] = (DRIVE_SCOPE,)

    def __post_init__(self) -> None:
        for key in ("credentials_path", "token_folder_path", "user_id", "root_folder_id"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"DriveApiOptions.{key} must be a non-empty string")

        if self.application_name is not None and not isinstance(self.application_name, str):
            raise TypeError("DriveApiOptions.application_name must be a string or None")

        if not self.scopes or not all(isinstance(s, str) and s.strip() for s in self.scopes):
            raise ValueError("DriveApiOptions.scopes must be a non-empty sequence of strings")
        object.__setattr__(self, "scopes", tuple(self.scopes))

    @property
    def token_file(self) -> str:
        """Path of the cached token for user_id."""
        return os.path.join(self.token_folder_path, f"{self.user_id}.json")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        prefix: str = ENV_PREFIX,
    ) -> "DriveApiOptions":
        """
        Build options from environment variables.

        Recognized (with the default prefix):
            GDRIVEAPI_CREDENTIALS_PATH, GDRIVEAPI_TOKEN_FOLDER_PATH,
            GDRIVEAPI_USER_ID, GDRIVEAPI_APPLICATION_NAME,
            GDRIVEAPI_ROOT_FOLDER_ID, GDRIVEAPI_SCOPES (comma-separated)
        Unset or blank variables keep their defaults.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            value = env.get(prefix + name, "").strip()
            return value or None

        kwargs: dict[str, object] = {}
        for name, key in (
            ("CREDENTIALS_PATH", "credentials_path"),
            ("TOKEN_FOLDER_PATH", "token_folder_path"),
            ("USER_ID", "user_id"),
            ("APPLICATION_NAME", "application_name"),
            ("ROOT_FOLDER_ID", "root_folder_id"),
        ):
            value = _get(name)
            if value is not None:
                kwargs[key] = value

        scopes_raw = _get("SCOPES")
        if scopes_raw:
            kwargs["scopes"] = tuple(s.strip() for s in scopes_raw.split(",") if s.strip())

        return cls(**kwargs)  # type: ignore[arg-type]
