import unittest
from unittest.mock import patch

from drivesh.shell.app import human_size, open_local_file


class TestShellHelpers(unittest.TestCase):
    def test_human_size(self) -> None:
        self.assertEqual(human_size(0), "0 B")
        self.assertEqual(human_size(1023), "1023 B")
        self.assertEqual(human_size(1536), "1.5 KB")
        self.assertEqual(human_size(5 * 1024 * 1024), "5.0 MB")

    def test_open_local_file_uses_platform_opener(self) -> None:
        with patch("drivesh.shell.app.platform.system", return_value="Darwin"), patch(
            "drivesh.shell.app.subprocess.Popen"
        ) as popen:
            open_local_file("/tmp/a.txt")
        popen.assert_called_once_with(["open", "/tmp/a.txt"])

    def test_open_failure_is_logged(self) -> None:
        with patch("drivesh.shell.app.platform.system", return_value="Linux"), patch(
            "drivesh.shell.app.subprocess.Popen", side_effect=FileNotFoundError("xdg-open")
        ):
            with self.assertLogs("drivesh.shell.app", level="WARNING"):
                open_local_file("/tmp/a.txt")


if __name__ == "__main__":
    unittest.main()
