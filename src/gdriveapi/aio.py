"""Asyncio facade: runs GoogleDriveApi operations in worker threads."""

from __future__ import annotations

import asyncio
import threading
from typing import IO, Any, Callable, Optional, TypeVar

from gdriveapi.api import GoogleDriveApi
from gdriveapi.auth import AuthProvider, DriveApiOptions
from gdriveapi.auth.session import ServiceFactory
from gdriveapi.controller.drive_controller import DEFAULT_DOWNLOAD_DIR
from gdriveapi.controller.transfer import ProgressObserver
from gdriveapi.models import RemoteItem

T = TypeVar("T")


class AsyncGoogleDriveApi:
    """
    Async counterpart of GoogleDriveApi.

    Each coroutine runs one blocking operation via `asyncio.to_thread`. When the
    awaiting task is cancelled, a cancel event is set so the worker stops at its
    next request boundary; a request already in flight is not aborted.
    `asyncio.CancelledError` propagates unchanged.
    """

    def __init__(self, api: GoogleDriveApi) -> None:
        self._api = api

    @classmethod
    async def create(
        cls,
        options: Optional[DriveApiOptions] = None,
        *,
        auth_provider: Optional[AuthProvider] = None,
        service_factory: Optional[ServiceFactory] = None,
        immediate_authorization: bool = True,
    ) -> "AsyncGoogleDriveApi":
        api = GoogleDriveApi(
            options,
            auth_provider=auth_provider,
            service_factory=service_factory,
            immediate_authorization=False,
        )
        obj = cls(api)
        if immediate_authorization:
            await obj.authorize()
        return obj

    @property
    def api(self) -> GoogleDriveApi:
        return self._api

    @property
    def is_authorized(self) -> bool:
        return self._api.is_authorized

    @property
    def is_token_stale(self) -> bool:
        return self._api.is_token_stale

    @property
    def root_folder_id(self) -> str:
        return self._api.root_folder_id

    def dispose(self) -> None:
        self._api.dispose()

    async def __aenter__(self) -> "AsyncGoogleDriveApi":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.dispose()

    async def authorize(self) -> None:
        await self._run(self._api.authorize)

    async def refresh_if_stale(self) -> bool:
        return await self._run(self._api.refresh_if_stale)

    async def get(self, file_id: str) -> RemoteItem:
        return await self._run(self._api.get, file_id)

    async def find_folder_by_name(self, name: str, parent_id: Optional[str] = None) -> Optional[str]:
        return await self._run(self._api.find_folder_by_name, name, parent_id)

    async def find_file_by_name(self, name: str, parent_id: Optional[str] = None) -> Optional[str]:
        return await self._run(self._api.find_file_by_name, name, parent_id)

    async def list_folders_in(self, parent_id: str, page_size: int = 50) -> list[RemoteItem]:
        return await self._run(self._api.list_folders_in, parent_id, page_size)

    async def list_all_folders(self) -> list[RemoteItem]:
        return await self._run(self._api.list_all_folders)

    async def list_trashed(self, page_size: int = 100) -> list[RemoteItem]:
        return await self._run(self._api.list_trashed, page_size)

    async def create_folder(self, name: str, parent_id: Optional[str] = None) -> str:
        return await self._run(self._api.create_folder, name, parent_id)

    async def delete_folder(self, folder_id: str) -> bool:
        return await self._run(self._api.delete_folder, folder_id)

    async def delete_file(self, file_id: str) -> bool:
        return await self._run(self._api.delete_file, file_id)

    async def rename(self, file_id: str, new_name: str) -> None:
        await self._run(self._api.rename, file_id, new_name)

    async def move(self, file_id: str, from_parent_id: str, to_parent_id: str) -> None:
        await self._run(self._api.move, file_id, from_parent_id, to_parent_id)

    async def copy(self, file_id: str, to_parent_id: str, new_name: Optional[str] = None) -> str:
        return await self._run(self._api.copy, file_id, to_parent_id, new_name)

    async def trash(self, file_id: str) -> None:
        await self._run(self._api.trash, file_id)

    async def restore(self, file_id: str) -> None:
        await self._run(self._api.restore, file_id)

    async def empty_trash(self) -> None:
        await self._run(self._api.empty_trash)

    async def download(self, file_id: str, destination_dir: str = DEFAULT_DOWNLOAD_DIR) -> str:
        return await self._run(self._api.download, file_id, destination_dir)

    async def upload_from_path(
        self,
        local_path: str,
        mime_type: str,
        parent_id: Optional[str] = None,
        *,
        on_progress: Optional[ProgressObserver] = None,
    ) -> str:
        return await self._run(
            self._api.upload_from_path,
            local_path,
            mime_type,
            parent_id,
            on_progress=on_progress,
        )

    async def upload_from_stream(
        self,
        stream: IO[bytes],
        name: str,
        mime_type: str,
        parent_id: Optional[str] = None,
        *,
        on_progress: Optional[ProgressObserver] = None,
    ) -> str:
        return await self._run(
            self._api.upload_from_stream,
            stream,
            name,
            mime_type,
            parent_id,
            on_progress=on_progress,
        )

    async def update_content(
        self,
        file_id: str,
        stream: IO[bytes],
        content_type: str,
        *,
        on_progress: Optional[ProgressObserver] = None,
    ) -> str:
        return await self._run(
            self._api.update_content,
            file_id,
            stream,
            content_type,
            on_progress=on_progress,
        )

    async def _run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        cancel = threading.Event()
        try:
            return await asyncio.to_thread(func, *args, cancel=cancel, **kwargs)
        except asyncio.CancelledError:
            cancel.set()
            raise
