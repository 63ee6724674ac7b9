"""Field selectors for Google Drive API responses."""

from __future__ import annotations

ITEM_FIELDS: str = "id, name, mimeType, parents, trashed"

NAME_LOOKUP_FIELDS: str = "files(id, name)"
FOLDER_LIST_FIELDS: str = "nextPageToken, files(id, name)"
FOLDER_TREE_FIELDS: str = "nextPageToken, files(id, name, parents)"
TRASH_LIST_FIELDS: str = f"nextPageToken, files({ITEM_FIELDS})"

RENAME_FIELDS: str = "id, name"
MOVE_FIELDS: str = "id, parents"
TRASH_FIELDS: str = "id, trashed"
ID_FIELDS: str = "id"

# Drive caps pageSize at 1000.
MAX_PAGE_SIZE: int = 1000
