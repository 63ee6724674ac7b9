"""GoogleDriveApi: session-backed facade over the Drive controller."""

from __future__ import annotations

import functools
import threading
from typing import IO, Any, Callable, Optional, TypeVar

from gdriveapi.auth import AuthProvider, DriveApiOptions, SessionManager
from gdriveapi.auth.session import ServiceFactory
from gdriveapi.controller import GoogleDriveController
from gdriveapi.controller.drive_controller import DEFAULT_DOWNLOAD_DIR
from gdriveapi.controller.transfer import ProgressObserver
from gdriveapi.models import RemoteItem

F = TypeVar("F", bound=Callable[..., Any])


def _refreshing(func: F) -> F:
    """Run SessionManager.refresh_if_stale() before the wrapped operation."""

    @functools.wraps(func)
    def wrapper(self: "GoogleDriveApi", *args: Any, **kwargs: Any) -> Any:
        self._session.refresh_if_stale(cancel=kwargs.get("cancel"))
        return func(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class GoogleDriveApi:
    """
    High-level Google Drive API.

    Example:
        with GoogleDriveApi(DriveApiOptions(application_name="MyApp")) as api:
            folder_id = api.find_folder_by_name("Reports")
    """

    def __init__(
        self,
        options: Optional[DriveApiOptions] = None,
        *,
        auth_provider: Optional[AuthProvider] = None,
        service_factory: Optional[ServiceFactory] = None,
        immediate_authorization: bool = True,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        self._session = SessionManager(
            options,
            auth_provider=auth_provider,
            service_factory=service_factory,
        )
        self._controller: Optional[GoogleDriveController] = None
        if immediate_authorization:
            self.authorize(cancel=cancel)

    @classmethod
    def from_session(cls, session: SessionManager) -> "GoogleDriveApi":
        """Create the API around an existing session (useful for tests)."""
        obj = cls.__new__(cls)
        obj._session = session
        obj._controller = None
        return obj

    # ----------------------------
    # Session
    # ----------------------------
    @property
    def session(self) -> SessionManager:
        return self._session

    @property
    def options(self) -> DriveApiOptions:
        return self._session.options

    @property
    def root_folder_id(self) -> str:
        return self._session.options.root_folder_id

    @property
    def is_authorized(self) -> bool:
        return self._session.is_authorized

    @property
    def is_token_stale(self) -> bool:
        return self._session.is_token_stale

    @property
    def service(self) -> Any:
        """The underlying Drive service resource."""
        return self._session.service

    def authorize(self, *, cancel: Optional[threading.Event] = None) -> None:
        self._session.authorize(cancel=cancel)

    def refresh_if_stale(self, *, cancel: Optional[threading.Event] = None) -> bool:
        return self._session.refresh_if_stale(cancel=cancel)

    def dispose(self) -> None:
        self._controller = None
        self._session.dispose()

    def __enter__(self) -> "GoogleDriveApi":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    # ----------------------------
    # Lookup / listing
    # ----------------------------
    @_refreshing
    def get(self, file_id: str, *, cancel: Optional[threading.Event] = None) -> RemoteItem:
        return self._drive.get(file_id, cancel=cancel)

    @_refreshing
    def find_folder_by_name(
        self,
        name: str,
        parent_id: Optional[str] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> Optional[str]:
        return self._drive.find_folder_by_name(name, parent_id, cancel=cancel)

    @_refreshing
    def find_file_by_name(
        self,
        name: str,
        parent_id: Optional[str] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> Optional[str]:
        return self._drive.find_file_by_name(name, parent_id, cancel=cancel)

    @_refreshing
    def list_folders_in(
        self,
        parent_id: str,
        page_size: int = 50,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> list[RemoteItem]:
        return self._drive.list_folders_in(parent_id, page_size, cancel=cancel)

    @_refreshing
    def list_all_folders(self, *, cancel: Optional[threading.Event] = None) -> list[RemoteItem]:
        return self._drive.list_all_folders(cancel=cancel)

    @_refreshing
    def list_trashed(
        self,
        page_size: int = 100,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> list[RemoteItem]:
        return self._drive.list_trashed(page_size, cancel=cancel)

    # ----------------------------
    # CRUD
    # ----------------------------
    @_refreshing
    def create_folder(
        self,
        name: str,
        parent_id: Optional[str] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        return self._drive.create_folder(name, parent_id, cancel=cancel)

    @_refreshing
    def delete_folder(self, folder_id: str, *, cancel: Optional[threading.Event] = None) -> bool:
        return self._drive.delete_folder(folder_id, cancel=cancel)

    @_refreshing
    def delete_file(self, file_id: str, *, cancel: Optional[threading.Event] = None) -> bool:
        return self._drive.delete_file(file_id, cancel=cancel)

    @_refreshing
    def rename(
        self,
        file_id: str,
        new_name: str,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        self._drive.rename(file_id, new_name, cancel=cancel)

    @_refreshing
    def move(
        self,
        file_id: str,
        from_parent_id: str,
        to_parent_id: str,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        self._drive.move(file_id, from_parent_id, to_parent_id, cancel=cancel)

    @_refreshing
    def copy(
        self,
        file_id: str,
        to_parent_id: str,
        new_name: Optional[str] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        return self._drive.copy(file_id, to_parent_id, new_name, cancel=cancel)

    # ----------------------------
    # Trash
    # ----------------------------
    @_refreshing
    def trash(self, file_id: str, *, cancel: Optional[threading.Event] = None) -> None:
        self._drive.trash(file_id, cancel=cancel)

    @_refreshing
    def restore(self, file_id: str, *, cancel: Optional[threading.Event] = None) -> None:
        self._drive.restore(file_id, cancel=cancel)

    @_refreshing
    def empty_trash(self, *, cancel: Optional[threading.Event] = None) -> None:
        self._drive.empty_trash(cancel=cancel)

    # ----------------------------
    # Content
    # ----------------------------
    @_refreshing
    def download(
        self,
        file_id: str,
        destination_dir: str = DEFAULT_DOWNLOAD_DIR,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        return self._drive.download(file_id, destination_dir, cancel=cancel)

    @_refreshing
    def upload_from_path(
        self,
        local_path: str,
        mime_type: str,
        parent_id: Optional[str] = None,
        *,
        on_progress: Optional[ProgressObserver] = None,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        return self._drive.upload_from_path(
            local_path,
            mime_type,
            parent_id,
            on_progress=on_progress,
            cancel=cancel,
        )

    @_refreshing
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
        return self._drive.upload_from_stream(
            stream,
            name,
            mime_type,
            parent_id,
            on_progress=on_progress,
            cancel=cancel,
        )

    @_refreshing
    def update_content(
        self,
        file_id: str,
        stream: IO[bytes],
        content_type: str,
        *,
        on_progress: Optional[ProgressObserver] = None,
        cancel: Optional[threading.Event] = None,
    ) -> str:
        return self._drive.update_content(
            file_id,
            stream,
            content_type,
            on_progress=on_progress,
            cancel=cancel,
        )

    # ----------------------------
    # Internals
    # ----------------------------
    @property
    def _drive(self) -> GoogleDriveController:
        service = self._session.service
        if self._controller is None or self._controller.service is not service:
            self._controller = GoogleDriveController(
                service,
                root_folder_id=self.root_folder_id,
            )
        return self._controller
