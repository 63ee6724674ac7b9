"""Data model for Drive items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gdriveapi.util.mime import is_folder


@dataclass(slots=True)
class RemoteItem:
    """
    A Drive file or folder as returned by a single API call.

    Notes:
        - `file_id` is opaque and always comes from the server.
        - A folder is a RemoteItem whose mime_type is the folder type.
    """

    file_id: str
    name: str
    mime_type: str = ""
    parents: list[str] = field(default_factory=list)
    trashed: bool = False

    @property
    def is_folder(self) -> bool:
        return is_folder(self.mime_type)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RemoteItem":
        """Build from a Drive v3 `File` resource dict (partial responses allowed)."""
        file_id = data.get("id")
        name = data.get("name")
        mime_type = data.get("mimeType")
        parents = data.get("parents") or []

        return cls(
            file_id=file_id if isinstance(file_id, str) else "",
            name=name if isinstance(name, str) else "",
            mime_type=mime_type if isinstance(mime_type, str) else "",
            parents=list(parents) if isinstance(parents, list) else [],
            trashed=bool(data.get("trashed", False)),
        )
