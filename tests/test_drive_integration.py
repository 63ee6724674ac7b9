import argparse
import io
import os
import tempfile
import unittest
from pathlib import Path

from gdriveapi import DriveApiOptions, GoogleDriveApi, UploadStatus


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


@unittest.skipUnless(
    _env("GDRIVEAPI_CREDENTIALS_PATH") and _env("GDRIVEAPI_TEST_ROOT_ID"),
    "Set GDRIVEAPI_CREDENTIALS_PATH and GDRIVEAPI_TEST_ROOT_ID to run against real Google Drive",
)
class TestGoogleDriveIntegration(unittest.TestCase):
    """
    Integration test with real Google Drive.

    Required env vars:
        - GDRIVEAPI_CREDENTIALS_PATH: path to OAuth client secrets json
        - GDRIVEAPI_TEST_ROOT_ID: Drive folder ID used as test root (safe sandbox)

    Optional:
        - GDRIVEAPI_TOKEN_FOLDER_PATH: folder for cached tokens (default: _metadata)
        - GDRIVEAPI_USER_ID, GDRIVEAPI_APPLICATION_NAME, GDRIVEAPI_SCOPES
    """

    @classmethod
    def setUpClass(cls) -> None:
        cls.root_id = _env("GDRIVEAPI_TEST_ROOT_ID")
        cls.options = DriveApiOptions.from_env()

    def test_folder_file_trash_smoke(self) -> None:
        with GoogleDriveApi(self.options) as api:
            folder_id = api.create_folder("gdriveapi_it_tmp", self.root_id)
            self.assertEqual(api.find_folder_by_name("gdriveapi_it_tmp", self.root_id), folder_id)

            with tempfile.TemporaryDirectory() as tmp:
                tmp_path = Path(tmp)
                src_file = tmp_path / "hello.txt"
                src_file.write_text("hello from gdriveapi integration test\n", encoding="utf-8")

                seen = []
                uploaded_id = api.upload_from_path(
                    str(src_file),
                    "text/plain",
                    folder_id,
                    on_progress=lambda p: seen.append(p.status),
                )
                self.assertEqual(seen[-1], UploadStatus.COMPLETED)

                api.rename(uploaded_id, "hello_renamed.txt")
                copied_id = api.copy(uploaded_id, folder_id, "hello_copy.txt")
                api.update_content(copied_id, io.BytesIO(b"replaced\n"), "text/plain")

                path = api.download(uploaded_id, str(tmp_path / "out"))
                self.assertEqual(os.path.basename(path), "hello_renamed.txt")

            # Trash only; permanent delete is opt-in below.
            api.trash(copied_id)
            api.restore(copied_id)
            api.trash(copied_id)
            api.trash(uploaded_id)
            api.trash(folder_id)

    def test_optional_danger_delete(self) -> None:
        """
        Optional test: permanent delete.

        Enabled only when env GDRIVEAPI_DANGER_DELETE=1 is set.
        """
        if _env("GDRIVEAPI_DANGER_DELETE") != "1":
            self.skipTest("Set GDRIVEAPI_DANGER_DELETE=1 to enable permanent delete test")

        with GoogleDriveApi(self.options) as api:
            folder_id = api.create_folder("gdriveapi_it_delete_tmp", self.root_id)
            file_id = api.upload_from_stream(
                io.BytesIO(b"delete me\n"), "delete_me.txt", "text/plain", folder_id
            )

            self.assertTrue(api.delete_file(file_id))
            self.assertTrue(api.delete_folder(folder_id))


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose unittest output",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    unittest.main(verbosity=2 if args.verbose else 1)
