"""Chunked upload/download loops over googleapiclient media requests."""

from __future__ import annotations

import io
import logging
import threading
from typing import Any, Callable, Optional

from googleapiclient.http import MediaIoBaseDownload

from gdriveapi.errors import OperationCancelledError
from gdriveapi.models import UploadProgress, UploadStatus

ProgressObserver = Callable[[UploadProgress], None]

logger = logging.getLogger(__name__)


class ResumableUpload:
    """
    Drive a resumable upload request chunk by chunk.

    State machine:
        NOT_STARTED -> IN_PROGRESS -> {COMPLETED, FAILED}
        IN_PROGRESS -> CANCELLED (cancel event seen between chunks)

    A failed chunk is recorded on `progress` (status FAILED, `error` set) and
    `run()` returns None; only cancellation raises.
    """

    def __init__(self, request: Any) -> None:
        self._request = request
        self._observers: list[ProgressObserver] = []
        self.progress = UploadProgress()

    def subscribe(self, observer: ProgressObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: ProgressObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def run(self, *, cancel: Optional[threading.Event] = None) -> Optional[dict[str, Any]]:
        self._transition(UploadStatus.IN_PROGRESS)

        response: Optional[dict[str, Any]] = None
        while response is None:
            if cancel is not None and cancel.is_set():
                self._transition(UploadStatus.CANCELLED)
                raise OperationCancelledError("Upload was cancelled")

            try:
                status, response = self._request.next_chunk()
            except Exception as exc:
                self.progress.error = exc
                self._transition(UploadStatus.FAILED)
                logger.debug("Upload chunk failed: %s", exc)
                return None

            if status is not None:
                self.progress.bytes_sent = int(getattr(status, "resumable_progress", 0) or 0)
                self.progress.total_size = getattr(status, "total_size", None)
                logger.debug(
                    "Uploaded %d of %s bytes",
                    self.progress.bytes_sent,
                    self.progress.total_size,
                )
                self._notify()

        self._transition(UploadStatus.COMPLETED)
        return response

    def _transition(self, status: UploadStatus) -> None:
        self.progress.status = status
        self._notify()

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self.progress)


def download_media(request: Any, *, cancel: Optional[threading.Event] = None) -> bytes:
    """
    Download a media/export request fully into memory.

    Nothing is written to disk here, so a failed transfer leaves no partial file.
    """
    buffer = io.BytesIO()
    downloader = MediaIoBaseDownload(buffer, request)

    done = False
    while not done:
        if cancel is not None and cancel.is_set():
            raise OperationCancelledError("Download was cancelled")
        status, done = downloader.next_chunk()
        if status is not None:
            logger.debug("Downloaded %d%%", int(status.progress() * 100))

    return buffer.getvalue()
