import unittest

import drivesh


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(drivesh, "Session"))
        self.assertTrue(hasattr(drivesh, "ShellApp"))
        self.assertTrue(hasattr(drivesh, "CommandDispatcher"))
        self.assertTrue(hasattr(drivesh, "DriveRegistry"))
        self.assertTrue(hasattr(drivesh, "ClipStore"))

        self.assertTrue(hasattr(drivesh, "resolve"))
        self.assertTrue(hasattr(drivesh, "traverse"))
        self.assertTrue(hasattr(drivesh, "paste"))

        self.assertTrue(hasattr(drivesh, "DriveShError"))
        self.assertTrue(hasattr(drivesh, "NoValidDriveError"))

    def test___all___is_defined(self) -> None:
        for name in drivesh.__all__:
            self.assertTrue(hasattr(drivesh, name), name)

    def test_provider_registry_is_closed(self) -> None:
        self.assertEqual(sorted(drivesh.PROVIDERS), ["files_api", "google_drive", "hard_drive"])


if __name__ == "__main__":
    unittest.main()
