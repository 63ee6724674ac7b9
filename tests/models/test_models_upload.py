import unittest

from gdriveapi.models import UploadProgress, UploadStatus


class TestUploadProgress(unittest.TestCase):
    def test_defaults(self) -> None:
        progress = UploadProgress()
        self.assertIs(progress.status, UploadStatus.NOT_STARTED)
        self.assertEqual(progress.bytes_sent, 0)
        self.assertIsNone(progress.total_size)
        self.assertFalse(progress.is_terminal)

    def test_terminal_states(self) -> None:
        for status in (UploadStatus.COMPLETED, UploadStatus.FAILED, UploadStatus.CANCELLED):
            self.assertTrue(UploadProgress(status=status).is_terminal)
        self.assertFalse(UploadProgress(status=UploadStatus.IN_PROGRESS).is_terminal)

    def test_status_values(self) -> None:
        self.assertEqual(UploadStatus.COMPLETED.value, "completed")
        self.assertNotEqual(UploadStatus.CANCELLED, UploadStatus.FAILED)


if __name__ == "__main__":
    unittest.main()
