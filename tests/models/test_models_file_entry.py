import unittest
from datetime import datetime, timezone

from drivesh.models import Clip, Drive, FileEntry


class TestFileEntry(unittest.TestCase):
    def test_from_dict_reads_files_api_payload(self) -> None:
        entry = FileEntry.from_dict(
            {
                "name": "report.pdf",
                "kind": "file",
                "path": "/docs/report.pdf",
                "size": "12",
                "createdAtTime": "2021-01-01T00:00:00Z",
                "lastModifiedTime": 1609459200000,
                "contentURI": "http://server/dl/1",
                "mimeType": "application/pdf",
            }
        )
        self.assertEqual(entry.size, 12)
        self.assertFalse(entry.is_folder)
        self.assertEqual(entry.created_at, datetime(2021, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(entry.last_modified, datetime(2021, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(entry.content_locator, "http://server/dl/1")

    def test_from_dict_is_tolerant(self) -> None:
        entry = FileEntry.from_dict({"name": "x", "kind": "folder", "size": True, "lastModifiedTime": None})
        self.assertTrue(entry.is_folder)
        self.assertEqual(entry.path, "")
        self.assertIsNone(entry.size)
        self.assertIsNone(entry.last_modified)

    def test_to_dict_writes_rfc3339(self) -> None:
        dt = datetime(2021, 1, 1, tzinfo=timezone.utc)
        entry = FileEntry(name="a", kind="file", path="/a", last_modified=dt)
        data = entry.to_dict()
        self.assertEqual(data["lastModifiedTime"], "2021-01-01T00:00:00.000000Z")
        self.assertIsNone(data["createdAtTime"])
        self.assertEqual(FileEntry.from_dict(data), entry)

    def test_with_path_returns_copy(self) -> None:
        entry = FileEntry(name="a", kind="file", path="")
        moved = entry.with_path("/x/a")
        self.assertEqual(moved.path, "/x/a")
        self.assertEqual(entry.path, "")


class TestDriveAndClip(unittest.TestCase):
    def test_drive_from_corrupt_record_has_no_provider(self) -> None:
        self.assertIsNone(Drive.from_dict("d", "garbage").provider_id)
        drive = Drive.from_dict("d", {"provider": "", "path": 3, "auth": []})
        self.assertIsNone(drive.provider_id)
        self.assertEqual(drive.current_path, "")
        self.assertEqual(drive.auth_state, {})

    def test_drive_to_dict(self) -> None:
        drive = Drive(name="d", provider_id="hard_drive", current_path="/x", auth_state={"k": 1})
        self.assertEqual(drive.to_dict(), {"provider": "hard_drive", "path": "/x", "auth": {"k": 1}})

    def test_clip_keeps_file_order(self) -> None:
        files = (
            FileEntry(name="b", kind="file", path="/docs/b"),
            FileEntry(name="a", kind="file", path="/docs/a"),
        )
        clip = Clip(name="c", origin_drive="d", origin_path="/docs", files=files)
        loaded = Clip.from_dict("c", clip.to_dict())
        self.assertEqual([f.name for f in loaded.files], ["b", "a"])
        self.assertEqual(loaded.origin_path, "/docs")


if __name__ == "__main__":
    unittest.main()
