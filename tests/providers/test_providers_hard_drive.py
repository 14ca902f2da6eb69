import os
import tempfile
import unittest

from drivesh.config import Settings
from drivesh.errors import (
    InvalidArgumentError,
    InvalidStateError,
    IsAFolderError,
    NotFoundError,
)
from drivesh.providers import HardDriveAdapter
from drivesh.traversal import traverse


def _write(path: str, text: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


class TestHardDriveAdapter(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.base = os.path.join(self._tmp.name, "base")
        self.cache = os.path.join(self._tmp.name, "cache")
        os.makedirs(self.cache)
        _write(os.path.join(self.base, "b.txt"), "bee")
        _write(os.path.join(self.base, "a.txt"), "ay")
        _write(os.path.join(self.base, "docs", "report.txt"), "report")

        self.settings = Settings(home=self._tmp.name)
        self.adapter = HardDriveAdapter(
            "local",
            {"base_path": self.base},
            cache_dir=self.cache,
            settings=self.settings,
        )

    def tearDown(self) -> None:
        self._tmp.cleanup()

    async def test_list_sorts_folders_first(self) -> None:
        entries = await self.adapter.list("/")
        self.assertEqual([e.name for e in entries], ["docs", "a.txt", "b.txt"])
        self.assertEqual(entries[0].kind, "folder")
        self.assertIsNone(entries[0].size)
        self.assertEqual(entries[1].path, "/a.txt")
        self.assertEqual(entries[1].size, 2)
        self.assertIsNotNone(entries[1].last_modified)

    async def test_list_missing_folder(self) -> None:
        with self.assertRaises(NotFoundError):
            await self.adapter.list("/nope")

    async def test_list_dotdot_cannot_escape_base(self) -> None:
        entries = await self.adapter.list("/../..")
        self.assertEqual(len(entries), 3)

    async def test_symlinked_folder_is_not_descended(self) -> None:
        link = os.path.join(self.base, "docs", "loop")
        try:
            os.symlink(self.base, link, target_is_directory=True)
        except (OSError, NotImplementedError):
            self.skipTest("symlinks are not available")

        entries = await traverse("/", self.adapter)

        paths = sorted(e.path for e in entries)
        self.assertEqual(paths, ["/a.txt", "/b.txt", "/docs", "/docs/loop", "/docs/report.txt"])
        loop = next(e for e in entries if e.path == "/docs/loop")
        self.assertEqual(loop.kind, "file")

    async def test_fetch_copies_into_cache(self) -> None:
        paths = await self.adapter.fetch("/docs", "report.txt")
        self.assertEqual(len(paths), 1)
        self.assertTrue(paths[0].startswith(self.cache))
        with open(paths[0], encoding="utf-8") as f:
            self.assertEqual(f.read(), "report")

    async def test_fetch_folder_and_missing(self) -> None:
        with self.assertRaises(IsAFolderError):
            await self.adapter.fetch("/", "docs")
        with self.assertRaises(NotFoundError):
            await self.adapter.fetch("/docs", "missing.txt")

    async def test_store_creates_intermediate_folders(self) -> None:
        src = os.path.join(self._tmp.name, "upload.txt")
        _write(src, "payload")

        self.assertTrue(await self.adapter.store("/new/deep", "copy.txt", src))
        with open(os.path.join(self.base, "new", "deep", "copy.txt"), encoding="utf-8") as f:
            self.assertEqual(f.read(), "payload")

    async def test_delete_file_and_folder(self) -> None:
        self.assertTrue(await self.adapter.delete("/", "a.txt"))
        self.assertFalse(os.path.exists(os.path.join(self.base, "a.txt")))

        self.assertTrue(await self.adapter.delete("/docs"))
        self.assertFalse(os.path.exists(os.path.join(self.base, "docs")))

        with self.assertRaises(NotFoundError):
            await self.adapter.delete("/", "a.txt")

    async def test_delete_root_is_refused(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            await self.adapter.delete("/")

    async def test_initialize_validates_folder(self) -> None:
        answers = iter([self.base])

        async def ask(message: str) -> str:
            return next(answers)

        adapter = HardDriveAdapter("new", None, cache_dir=self.cache, settings=self.settings)
        state = await adapter.initialize("new", ask)
        self.assertEqual(state, {"base_path": os.path.abspath(self.base)})
        self.assertEqual(adapter.auth_state, state)

        async def ask_missing(message: str) -> str:
            return os.path.join(self.base, "does-not-exist")

        with self.assertRaises(InvalidArgumentError):
            await adapter.initialize("new", ask_missing)

    async def test_missing_base_path(self) -> None:
        adapter = HardDriveAdapter("bad", {}, cache_dir=self.cache, settings=self.settings)
        with self.assertRaises(InvalidStateError):
            await adapter.list("/")


if __name__ == "__main__":
    unittest.main()
