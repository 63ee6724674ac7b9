from __future__ import annotations

import mimetypes
from typing import Optional

GOOGLE_APPS_PREFIX: str = "application/vnd.google-apps"

FOLDER_MIME: str = "application/vnd.google-apps.folder"
DOCUMENT_MIME: str = "application/vnd.google-apps.document"
SPREADSHEET_MIME: str = "application/vnd.google-apps.spreadsheet"
PRESENTATION_MIME: str = "application/vnd.google-apps.presentation"
DRAWING_MIME: str = "application/vnd.google-apps.drawing"

DOCX_MIME: str = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
XLSX_MIME: str = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PPTX_MIME: str = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
PNG_MIME: str = "image/png"

# Google Workspace type -> concrete type used for export.
EXPORT_MIMES: dict[str, str] = {
    DOCUMENT_MIME: DOCX_MIME,
    SPREADSHEET_MIME: XLSX_MIME,
    PRESENTATION_MIME: PPTX_MIME,
    DRAWING_MIME: PNG_MIME,
}

# Entries the platform mimetypes table may lack or disagree on.
_KNOWN_EXTENSIONS: dict[str, str] = {
    DOCX_MIME: "docx",
    XLSX_MIME: "xlsx",
    PPTX_MIME: "pptx",
    PNG_MIME: "png",
    "image/jpeg": "jpg",
    "application/pdf": "pdf",
    "text/plain": "txt",
    "text/csv": "csv",
}


def is_folder(mime_type: Optional[str]) -> bool:
    return mime_type == FOLDER_MIME


def is_virtual_type(mime_type: Optional[str]) -> bool:
    """
    Returns True if the MIME type is a Google Workspace ('apps') type.

    The check is a case-insensitive prefix match; empty or None is False.
    """
    if not mime_type or not mime_type.strip():
        return False
    return mime_type.lower().startswith(GOOGLE_APPS_PREFIX)


def exportable_type_for(virtual_type: Optional[str]) -> Optional[str]:
    """Return the export MIME type for a known Workspace type, else None."""
    if not virtual_type:
        return None
    return EXPORT_MIMES.get(virtual_type)


def extension_for(mime_type: Optional[str]) -> Optional[str]:
    """
    Return a conventional file extension (without the dot) for a MIME type.

    Returns None when the type is unknown.
    """
    if not mime_type:
        return None

    key = mime_type.strip().lower()
    if key in _KNOWN_EXTENSIONS:
        return _KNOWN_EXTENSIONS[key]

    guessed = mimetypes.guess_extension(key, strict=False)
    if not guessed:
        return None
    return guessed.lstrip(".")
