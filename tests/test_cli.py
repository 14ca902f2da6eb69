import unittest
from unittest.mock import AsyncMock, patch

from drivesh.cli import build_parser, main


class TestCli(unittest.TestCase):
    def test_parser(self) -> None:
        args = build_parser().parse_args(["--home", "/tmp/h", "-v"])
        self.assertEqual(args.home, "/tmp/h")
        self.assertTrue(args.verbose)
        self.assertIsNone(args.server)

    def test_main_runs_shell_with_overrides(self) -> None:
        with patch("drivesh.cli.run_shell", new_callable=AsyncMock) as run_shell, patch(
            "drivesh.cli.configure_logging"
        ) as configure_logging:
            self.assertEqual(main(["--home", "/tmp/h", "--server", "http://s", "--verbose"]), 0)

        settings = run_shell.call_args.args[0]
        self.assertEqual(settings.home, "/tmp/h")
        self.assertEqual(settings.server, "http://s")
        configure_logging.assert_called_once_with("DEBUG")


if __name__ == "__main__":
    unittest.main()
