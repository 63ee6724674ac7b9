from .mime import (
    EXPORT_MIMES,
    FOLDER_MIME,
    GOOGLE_APPS_PREFIX,
    exportable_type_for,
    extension_for,
    is_folder,
    is_virtual_type,
)
from .streams import reset_if_seekable

__all__ = [
    "FOLDER_MIME",
    "GOOGLE_APPS_PREFIX",
    "EXPORT_MIMES",
    "is_folder",
    "is_virtual_type",
    "exportable_type_for",
    "extension_for",
    "reset_if_seekable",
]
