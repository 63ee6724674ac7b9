"""Google Drive API controller: one request per logical item operation."""

from __future__ import annotations

import json
import logging
import os
import threading
from typing import IO, Any, Callable, Optional, TypeVar

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from gdriveapi.errors import (
    ApiError,
    CopyFailedError,
    DownloadFailedError,
    ExportFailedError,
    GDriveApiError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidItemTypeError,
    NetworkError,
    OperationCancelledError,
    OperationFailedError,
    RestoreFailedError,
    TrashFailedError,
    UnsupportedMimeTypeError,
    UpdateContentFailedError,
    UploadFailedError,
    map_http_error,
)
from gdriveapi.models import RemoteItem, UploadStatus
from gdriveapi.util.mime import (
    FOLDER_MIME,
    exportable_type_for,
    extension_for,
    is_virtual_type,
)
from gdriveapi.util.streams import reset_if_seekable

from .fields import (
    FOLDER_LIST_FIELDS,
    FOLDER_TREE_FIELDS,
    ID_FIELDS,
    ITEM_FIELDS,
    MAX_PAGE_SIZE,
    MOVE_FIELDS,
    NAME_LOOKUP_FIELDS,
    RENAME_FIELDS,
    TRASH_FIELDS,
    TRASH_LIST_FIELDS,
)
from .pagination import list_all
from .transfer import ProgressObserver, ResumableUpload, download_media

T = TypeVar("T")

DEFAULT_DOWNLOAD_DIR: str = "Downloads"

logger = logging.getLogger(__name__)


class GoogleDriveController:
    """
    Drive API controller.

    Notes:
        - Identifiers are opaque: they are passed through, never built or parsed.
        - No retries: HTTP failures are mapped to gdriveapi errors and raised.
        - Every operation accepts `cancel`, a threading.Event checked right
          before each request is issued and right after it returns.
    """

    def __init__(self, service: Any, *, root_folder_id: str = "root") -> None:
        if service is None:
            raise InvalidArgumentError("service must not be None")
        _require("root_folder_id", root_folder_id)
        self._service = service
        self._root_folder_id = root_folder_id

    @property
    def root_folder_id(self) -> str:
        return self._root_folder_id

    @property
    def service(self) -> Any:
        return self._service

    # ----------------------------
    # Lookup
    # ----------------------------
    def get(self, file_id: str, *, cancel: Optional[threading.Event] = None) -> RemoteItem:
        _require("file_id", file_id)
        req = self._service.files().get(fileId=file_id, fields=ITEM_FIELDS)
        data = self._execute(req.execute, cancel)
        return RemoteItem.from_api(data)

    def find_folder_by_name(
        self,
        name: str,
        parent_id: Optional[str] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> Optional[str]:
        """
        Return the id of a non-trashed folder named exactly `name` under
        `parent_id` (default: root folder), or None when nothing matches.

        If several folders share the name, which one is returned is unspecified.
        """
        _require("name", name)
        parent = self._resolve_parent(parent_id)
        q = (
            f"mimeType='{FOLDER_MIME}' and name={_quote(name)} "
            f"and {_quote(parent)} in parents and trashed=false"
        )
        return self._first_id(q, cancel)

    def find_file_by_name(
        self,
        name: str,
        parent_id: Optional[str] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> Optional[str]:
        """Like find_folder_by_name(), for items of any type."""
        _require("name", name)
        parent = self._resolve_parent(parent_id)
        q = f"name={_quote(name)} and {_quote(parent)} in parents and trashed=false"
        return self._first_id(q, cancel)

    # ----------------------------
    # Listing
    # ----------------------------
    def list_folders_in(
        self,
        parent_id: str,
        page_size: int = 50,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> list[RemoteItem]:
        _require("parent_id", parent_id)
        q = f"mimeType='{FOLDER_MIME}' and {_quote(parent_id)} in parents and trashed=false"
        return list_all(
            self._page_fetcher(FOLDER_LIST_FIELDS, cancel),
            q,
            page_size,
            cancel=cancel,
        )

    def list_all_folders(
        self,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> list[RemoteItem]:
        """
        List every folder visible to the user, with parents attached.

        Returned items carry `parents` so callers can rebuild the folder tree
        without one request per folder.
        """
        q = f"mimeType='{FOLDER_MIME}'"
        return list_all(
            self._page_fetcher(FOLDER_TREE_FIELDS, cancel),
            q,
            MAX_PAGE_SIZE,
            cancel=cancel,
        )

    def list_trashed(
        self,
        page_size: int = 100,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> list[RemoteItem]:
        return list_all(
            self._page_fetcher(TRASH_LIST_FIELDS, cancel),
            "trashed=true",
            page_size,
            cancel=cancel,
        )

    # ----------------------------
    # Folder / file CRUD
    # ----------------------------
    def create_folder(
        self,
        name: str,
        parent_id: Optional[str] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        _require("name", name)
        parent = self._resolve_parent(parent_id)
        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [parent]}
        req = self._service.files().create(body=body, fields=ID_FIELDS)
        data = self._execute(req.execute, cancel)

        folder_id = (data or {}).get("id")
        if not folder_id:
            raise ApiError(
                "Drive did not return an id for the created folder",
                details={"name": name, "parent_id": parent},
            )
        logger.debug("Created folder %s (%s) under %s", name, folder_id, parent)
        return folder_id

    def delete_folder(self, folder_id: str, *, cancel: Optional[threading.Event] = None) -> bool:
        """Permanently delete a folder. Raises InvalidItemTypeError for files."""
        item = self.get(folder_id, cancel=cancel)
        if not item.is_folder:
            raise InvalidItemTypeError(folder_id, item.mime_type, "folder")
        self._delete(folder_id, cancel)
        return True

    def delete_file(self, file_id: str, *, cancel: Optional[threading.Event] = None) -> bool:
        """Permanently delete a file. Raises InvalidItemTypeError for folders."""
        item = self.get(file_id, cancel=cancel)
        if item.is_folder:
            raise InvalidItemTypeError(file_id, item.mime_type, "file")
        self._delete(file_id, cancel)
        return True

    def rename(
        self,
        file_id: str,
        new_name: str,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        _require("file_id", file_id)
        _require("new_name", new_name)
        req = self._service.files().update(
            fileId=file_id,
            body={"name": new_name},
            fields=RENAME_FIELDS,
        )
        self._execute(req.execute, cancel)

    def move(
        self,
        file_id: str,
        from_parent_id: str,
        to_parent_id: str,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        """
        Add `to_parent_id` and remove `from_parent_id` in one update.

        Membership of `from_parent_id` is not checked locally; Drive decides.
        """
        _require("file_id", file_id)
        _require("from_parent_id", from_parent_id)
        _require("to_parent_id", to_parent_id)
        req = self._service.files().update(
            fileId=file_id,
            body={},
            addParents=to_parent_id,
            removeParents=from_parent_id,
            fields=MOVE_FIELDS,
        )
        self._execute(req.execute, cancel)

    def copy(
        self,
        file_id: str,
        to_parent_id: str,
        new_name: Optional[str] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        """Server-side copy. A blank `new_name` keeps the original name."""
        _require("file_id", file_id)
        _require("to_parent_id", to_parent_id)

        body: dict[str, Any] = {"parents": [to_parent_id]}
        if new_name is not None and new_name.strip():
            body["name"] = new_name

        req = self._service.files().copy(fileId=file_id, body=body, fields=ID_FIELDS)
        data = self._execute(req.execute, cancel)

        new_id = (data or {}).get("id")
        if not new_id:
            raise CopyFailedError(
                "Copy returned no item",
                details={"file_id": file_id, "to_parent_id": to_parent_id},
            )
        return new_id

    # ----------------------------
    # Trash
    # ----------------------------
    def trash(self, file_id: str, *, cancel: Optional[threading.Event] = None) -> None:
        data = self._set_trashed(file_id, True, cancel)
        if data.get("trashed") is not True:
            raise TrashFailedError(
                "Drive did not report the item as trashed",
                details={"file_id": file_id, "trashed": data.get("trashed")},
            )

    def restore(self, file_id: str, *, cancel: Optional[threading.Event] = None) -> None:
        data = self._set_trashed(file_id, False, cancel)
        if data.get("trashed") is not False:
            raise RestoreFailedError(
                "Drive still reports the item as trashed",
                details={"file_id": file_id, "trashed": data.get("trashed")},
            )

    def empty_trash(self, *, cancel: Optional[threading.Event] = None) -> None:
        """Permanently delete every trashed item. Irreversible."""
        req = self._service.files().emptyTrash()
        self._execute(req.execute, cancel)
        logger.info("Trash emptied")

    # ----------------------------
    # Content transfer
    # ----------------------------
    def download(
        self,
        file_id: str,
        destination_dir: str = DEFAULT_DOWNLOAD_DIR,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        """
        Download (or export, for Workspace documents) a file into destination_dir.

        The file is saved as `<name without extension>.<extension of the
        downloaded type>`.

        Returns:
            Path of the written file.

        Raises:
            UnsupportedMimeTypeError: no export type or no extension is known.
                Raised before any content request.
            ExportFailedError / DownloadFailedError: the transfer failed.
        """
        _require("file_id", file_id)
        _require("destination_dir", destination_dir)

        item = self.get(file_id, cancel=cancel)
        virtual = is_virtual_type(item.mime_type)

        target_mime: Optional[str] = item.mime_type
        if virtual:
            target_mime = exportable_type_for(item.mime_type)
            if target_mime is None:
                raise UnsupportedMimeTypeError(
                    f"Unsupported mime type ({item.mime_type})",
                    details={"file_id": file_id, "mime_type": item.mime_type},
                )

        extension = extension_for(target_mime)
        if extension is None:
            raise UnsupportedMimeTypeError(
                f"Unsupported mime type ({item.mime_type})",
                details={"file_id": file_id, "mime_type": target_mime},
            )

        stem = _local_stem(item.name, file_id)
        full_path = os.path.join(destination_dir, f"{stem}.{extension}")

        error_cls: type[OperationFailedError]
        if virtual:
            req = self._service.files().export_media(fileId=file_id, mimeType=target_mime)
            error_cls = ExportFailedError
        else:
            req = self._service.files().get_media(fileId=file_id)
            error_cls = DownloadFailedError

        _check_cancelled(cancel)
        try:
            content = download_media(req, cancel=cancel)
        except OperationCancelledError:
            raise
        except Exception as exc:
            raise error_cls(
                "Failed to download the file from Google Drive",
                details={"file_id": file_id, "mime_type": target_mime},
                cause=self._map_exception(exc),
            ) from exc
        _check_cancelled(cancel)

        os.makedirs(destination_dir, exist_ok=True)
        with open(full_path, "wb") as f:
            f.write(content)

        logger.debug("Saved %s (%d bytes) to %s", file_id, len(content), full_path)
        return full_path

    def upload_from_path(
        self,
        local_path: str,
        mime_type: str,
        parent_id: Optional[str] = None,
        *,
        on_progress: Optional[ProgressObserver] = None,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        _require("local_path", local_path)
        _require("mime_type", mime_type)
        if not os.path.isfile(local_path):
            raise InvalidArgumentError(
                f"Cannot find the file at {local_path}",
                details={"local_path": local_path},
            )

        with open(local_path, "rb") as f:
            return self.upload_from_stream(
                f,
                os.path.basename(local_path),
                mime_type,
                parent_id,
                on_progress=on_progress,
                cancel=cancel,
            )

    def upload_from_stream(
        self,
        stream: IO[bytes],
        name: str,
        mime_type: str,
        parent_id: Optional[str] = None,
        *,
        on_progress: Optional[ProgressObserver] = None,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        """
        Create a new file from a stream with a resumable upload.

        A seekable stream is rewound to 0 first. Without `parent_id` Drive
        places the file in the user's root.

        Returns:
            The new file id.

        Raises:
            UploadFailedError: the upload did not complete, or completed
                without returning an id.
        """
        if stream is None:
            raise InvalidArgumentError("stream must not be None")
        _require("name", name)
        _require("mime_type", mime_type)
        if parent_id is not None:
            _require("parent_id", parent_id)

        _check_cancelled(cancel)
        reset_if_seekable(stream)

        body: dict[str, Any] = {"name": name}
        if parent_id is not None:
            body["parents"] = [parent_id]

        media = MediaIoBaseUpload(stream, mimetype=mime_type, resumable=True)
        req = self._service.files().create(body=body, media_body=media, fields=ID_FIELDS)
        return self._run_upload(req, UploadFailedError, "Upload", on_progress, cancel)

    def update_content(
        self,
        file_id: str,
        stream: IO[bytes],
        content_type: str,
        *,
        on_progress: Optional[ProgressObserver] = None,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        """Replace a file's bytes in place. No metadata is sent."""
        _require("file_id", file_id)
        if stream is None:
            raise InvalidArgumentError("stream must not be None")
        _require("content_type", content_type)

        _check_cancelled(cancel)
        reset_if_seekable(stream)

        media = MediaIoBaseUpload(stream, mimetype=content_type, resumable=True)
        req = self._service.files().update(fileId=file_id, media_body=media, fields=ID_FIELDS)
        return self._run_upload(
            req, UpdateContentFailedError, "Content update", on_progress, cancel
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _resolve_parent(self, parent_id: Optional[str]) -> str:
        if parent_id is None:
            return self._root_folder_id
        _require("parent_id", parent_id)
        return parent_id

    def _first_id(self, q: str, cancel: Optional[threading.Event]) -> Optional[str]:
        req = self._service.files().list(q=q, fields=NAME_LOOKUP_FIELDS, pageSize=1)
        data = self._execute(req.execute, cancel)
        files = (data or {}).get("files") or []
        if not files:
            return None
        return files[0].get("id")

    def _page_fetcher(
        self,
        fields: str,
        cancel: Optional[threading.Event],
    ) -> Callable[[str, int, Optional[str]], tuple[list[RemoteItem], Optional[str]]]:
        def fetch(
            q: str,
            page_size: int,
            page_token: Optional[str],
        ) -> tuple[list[RemoteItem], Optional[str]]:
            req = self._service.files().list(
                q=q,
                fields=fields,
                pageSize=page_size,
                pageToken=page_token,
            )
            data = self._execute(req.execute, cancel) or {}
            items = [RemoteItem.from_api(f) for f in data.get("files") or []]
            return items, data.get("nextPageToken")

        return fetch

    def _delete(self, file_id: str, cancel: Optional[threading.Event]) -> None:
        req = self._service.files().delete(fileId=file_id)
        self._execute(req.execute, cancel)
        logger.debug("Deleted %s", file_id)

    def _set_trashed(
        self,
        file_id: str,
        trashed: bool,
        cancel: Optional[threading.Event],
    ) -> dict[str, Any]:
        _require("file_id", file_id)
        req = self._service.files().update(
            fileId=file_id,
            body={"trashed": trashed},
            fields=TRASH_FIELDS,
        )
        return self._execute(req.execute, cancel) or {}

    def _run_upload(
        self,
        req: Any,
        error_cls: type[OperationFailedError],
        what: str,
        on_progress: Optional[ProgressObserver],
        cancel: Optional[threading.Event],
    ) -> str:
        upload = ResumableUpload(req)
        if on_progress is not None:
            upload.subscribe(on_progress)
        try:
            response = upload.run(cancel=cancel)
        finally:
            if on_progress is not None:
                upload.unsubscribe(on_progress)

        progress = upload.progress
        if progress.status is not UploadStatus.COMPLETED:
            cause = progress.error
            raise error_cls(
                f"{what} failed with status {progress.status.value}",
                details={"status": progress.status.value},
                cause=self._map_exception(cause) if cause is not None else None,
            )

        new_id = (response or {}).get("id")
        if not new_id:
            raise error_cls(
                f"{what} completed but no id was returned",
                details={"status": progress.status.value},
            )
        return new_id

    def _execute(self, func: Callable[[], T], cancel: Optional[threading.Event] = None) -> T:
        _check_cancelled(cancel)
        try:
            result = func()
        except Exception as exc:
            raise self._map_exception(exc) from exc
        _check_cancelled(cancel)
        return result

    def _map_exception(self, exc: BaseException) -> BaseException:
        if isinstance(exc, (GDriveApiError, OperationCancelledError)):
            return exc

        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def _local_stem(name: str, fallback: str) -> str:
    """File name without directory parts or extension; `fallback` when nothing usable is left."""
    base = os.path.basename(name.replace("\\", "/"))
    stem = os.path.splitext(base)[0]
    if stem in ("", ".", ".."):
        return fallback
    return stem


def _require(name: str, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{name} must be a non-empty string", details={name: value})


def _check_cancelled(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelledError("Operation was cancelled")


def _quote(value: str) -> str:
    """Quote a string literal for a Drive query (escapes \\ and ')."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None

        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
