import threading
import unittest
from unittest.mock import Mock, patch

from gdriveapi.controller.transfer import ResumableUpload, download_media
from gdriveapi.errors import OperationCancelledError
from gdriveapi.models import UploadStatus


def _chunk_status(sent: int, total: int) -> Mock:
    status = Mock()
    status.resumable_progress = sent
    status.total_size = total
    return status


class TestResumableUpload(unittest.TestCase):
    def test_completed_upload_reports_progress(self) -> None:
        request = Mock()
        request.next_chunk.side_effect = [
            (_chunk_status(5, 10), None),
            (None, {"id": "F1"}),
        ]
        seen = []
        upload = ResumableUpload(request)
        upload.subscribe(lambda p: seen.append((p.status, p.bytes_sent)))

        response = upload.run()

        self.assertEqual(response, {"id": "F1"})
        self.assertIs(upload.progress.status, UploadStatus.COMPLETED)
        self.assertEqual(seen[0], (UploadStatus.IN_PROGRESS, 0))
        self.assertIn((UploadStatus.IN_PROGRESS, 5), seen)
        self.assertEqual(seen[-1][0], UploadStatus.COMPLETED)
        self.assertEqual(upload.progress.total_size, 10)

    def test_failed_chunk_records_error(self) -> None:
        request = Mock()
        boom = RuntimeError("connection reset")
        request.next_chunk.side_effect = boom
        upload = ResumableUpload(request)

        self.assertIsNone(upload.run())
        self.assertIs(upload.progress.status, UploadStatus.FAILED)
        self.assertIs(upload.progress.error, boom)

    def test_cancel_between_chunks_is_not_a_failure(self) -> None:
        cancel = threading.Event()
        request = Mock()

        def next_chunk():
            cancel.set()
            return _chunk_status(1, 10), None

        request.next_chunk.side_effect = next_chunk
        upload = ResumableUpload(request)

        with self.assertRaises(OperationCancelledError):
            upload.run(cancel=cancel)
        self.assertIs(upload.progress.status, UploadStatus.CANCELLED)
        self.assertEqual(request.next_chunk.call_count, 1)

    def test_unsubscribe(self) -> None:
        upload = ResumableUpload(Mock())
        observer = Mock()
        upload.subscribe(observer)
        self.assertEqual(upload.observer_count, 1)
        upload.unsubscribe(observer)
        upload.unsubscribe(observer)
        self.assertEqual(upload.observer_count, 0)


class _FakeDownloader:
    chunks: list = []

    def __init__(self, fd, request) -> None:
        self._fd = fd
        self._chunks = list(self.chunks)

    def next_chunk(self):
        data = self._chunks.pop(0)
        if isinstance(data, Exception):
            raise data
        self._fd.write(data)
        status = Mock()
        status.progress.return_value = 0.5
        return status, not self._chunks


class TestDownloadMedia(unittest.TestCase):
    def test_collects_all_chunks(self) -> None:
        _FakeDownloader.chunks = [b"ab", b"cd"]
        with patch("gdriveapi.controller.transfer.MediaIoBaseDownload", _FakeDownloader):
            self.assertEqual(download_media(Mock()), b"abcd")

    def test_errors_propagate(self) -> None:
        _FakeDownloader.chunks = [b"ab", RuntimeError("broken pipe")]
        with patch("gdriveapi.controller.transfer.MediaIoBaseDownload", _FakeDownloader):
            with self.assertRaises(RuntimeError):
                download_media(Mock())

    def test_cancelled_before_first_chunk(self) -> None:
        _FakeDownloader.chunks = [b"ab"]
        cancel = threading.Event()
        cancel.set()
        with patch("gdriveapi.controller.transfer.MediaIoBaseDownload", _FakeDownloader):
            with self.assertRaises(OperationCancelledError):
                download_media(Mock(), cancel=cancel)


if __name__ == "__main__":
    unittest.main()
