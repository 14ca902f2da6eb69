import os
import tempfile
import unittest
from unittest.mock import Mock, patch

from drivesh.config import Settings
from drivesh.errors import InvalidArgumentError, InvalidStateError
from drivesh.models import FileEntry
from drivesh.providers import GoogleDriveAdapter


class TestGoogleDriveAdapter(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.settings = Settings(home=self._tmp.name)
        self.controller = Mock()
        self.adapter = GoogleDriveAdapter(
            "g",
            {"client_secrets_file": "/x/secrets.json", "token_file": "/x/token.json"},
            cache_dir=self._tmp.name,
            settings=self.settings,
            controller=self.controller,
        )

    def tearDown(self) -> None:
        self._tmp.cleanup()

    async def test_list_delegates_to_controller(self) -> None:
        entry = FileEntry(name="a", kind="file", path="/docs/a", content_locator="F1")
        self.controller.list_folder.return_value = [entry]

        self.assertEqual(await self.adapter.list("/docs"), [entry])
        self.controller.list_folder.assert_called_once_with("/docs")

    async def test_fetch_downloads_into_new_cache_dir(self) -> None:
        self.controller.download.return_value = ["/cache/x/a.docx"]

        self.assertEqual(await self.adapter.fetch("/docs", "a"), ["/cache/x/a.docx"])
        path, name, dest_dir = self.controller.download.call_args.args
        self.assertEqual((path, name), ("/docs", "a"))
        self.assertTrue(dest_dir.startswith(self._tmp.name))
        self.assertTrue(os.path.isdir(dest_dir))

    async def test_store_and_delete(self) -> None:
        self.assertTrue(await self.adapter.store("/docs", "a.txt", "/tmp/a.txt"))
        self.controller.upload.assert_called_once_with("/docs", "a.txt", "/tmp/a.txt")

        self.assertTrue(await self.adapter.delete("/docs", "a.txt"))
        self.controller.remove.assert_called_once_with("/docs", "a.txt")

    async def test_missing_oauth_files(self) -> None:
        adapter = GoogleDriveAdapter("g", {}, cache_dir=self._tmp.name, settings=self.settings)
        with self.assertRaises(InvalidStateError):
            await adapter.list("/")

    async def test_initialize_runs_consent_flow(self) -> None:
        secrets = os.path.join(self._tmp.name, "client_secrets.json")
        with open(secrets, "w", encoding="utf-8") as f:
            f.write("{}")

        async def ask(message: str) -> str:
            return secrets

        adapter = GoogleDriveAdapter("mine", None, cache_dir=self._tmp.name, settings=self.settings)
        with patch("drivesh.providers.google_drive.OAuthClient") as client_cls:
            state = await adapter.initialize("mine", ask)

        client_cls.return_value.authorize.assert_called_once_with()
        auth_info = client_cls.call_args.args[0]
        self.assertEqual(auth_info.client_secrets_file, secrets)
        self.assertEqual(
            state,
            {
                "client_secrets_file": secrets,
                "token_file": os.path.join(self.settings.tokens_dir, "mine.json"),
            },
        )

    async def test_initialize_requires_existing_secrets_file(self) -> None:
        async def ask(message: str) -> str:
            return os.path.join(self._tmp.name, "missing.json")

        adapter = GoogleDriveAdapter("mine", None, cache_dir=self._tmp.name, settings=self.settings)
        with self.assertRaises(InvalidArgumentError):
            await adapter.initialize("mine", ask)


if __name__ == "__main__":
    unittest.main()
