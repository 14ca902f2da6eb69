import unittest

from drivesh.errors import InvalidPathError
from drivesh.util.paths import (
    base_name,
    is_drive_switch,
    join_path,
    normalize,
    parent_path,
    relative_to,
    resolve,
    split_drive_prefix,
    split_file_path,
)


class TestResolve(unittest.TestCase):
    def test_dot_is_idempotent(self) -> None:
        for p in ("", "/", "/a/b", "/a/b/", "/a//b"):
            once = resolve(p, ".")
            self.assertEqual(resolve(once, "."), once)

    def test_dotdot_is_clamped_at_root(self) -> None:
        self.assertEqual(resolve("/", ".."), "/")
        self.assertEqual(resolve("/a/b", "../../../.."), "/")

    def test_empty_input_keeps_current_path(self) -> None:
        self.assertEqual(resolve("/docs", ""), "/docs")
        self.assertEqual(resolve("", ""), "/")

    def test_relative_and_absolute(self) -> None:
        self.assertEqual(resolve("/a/b", "../c"), "/a/c")
        self.assertEqual(resolve("/a", "/x/y"), "/x/y")
        self.assertEqual(resolve("", "docs"), "/docs")

    def test_repeated_slashes_collapse_and_trailing_slash_survives(self) -> None:
        self.assertEqual(resolve("/a", "b//c/"), "/a/b/c/")
        self.assertEqual(resolve("/a", "/"), "/")

    def test_drive_token_is_rejected(self) -> None:
        with self.assertRaises(InvalidPathError):
            resolve("/a", "d:/x")
        with self.assertRaises(InvalidPathError):
            resolve("/a", "d:")


class TestPathHelpers(unittest.TestCase):
    def test_normalize(self) -> None:
        self.assertEqual(normalize("a/./b/../c"), "/a/c")
        self.assertEqual(normalize(""), "/")

    def test_is_drive_switch(self) -> None:
        self.assertTrue(is_drive_switch("d:"))
        self.assertFalse(is_drive_switch("::"))
        self.assertFalse(is_drive_switch(":"))
        self.assertFalse(is_drive_switch("ls"))

    def test_split_drive_prefix(self) -> None:
        self.assertEqual(split_drive_prefix("d:/docs"), ("d", "/docs"))
        self.assertEqual(split_drive_prefix("docs/a"), (None, "docs/a"))
        self.assertEqual(split_drive_prefix(":x"), (None, "x"))
        self.assertEqual(split_drive_prefix("a/b:c"), (None, "a/b:c"))

    def test_split_file_path(self) -> None:
        self.assertEqual(split_file_path("/docs", "a.txt"), ("/docs", "a.txt"))
        self.assertEqual(split_file_path("/docs", "/x/y.txt"), ("/x", "y.txt"))
        self.assertEqual(split_file_path("/docs", "/y.txt"), ("/", "y.txt"))
        self.assertEqual(split_file_path("", "a.txt"), ("/", "a.txt"))

    def test_split_file_path_folder_forms_have_no_file_name(self) -> None:
        self.assertEqual(split_file_path("/docs", "sub/"), ("/docs/sub", None))
        self.assertEqual(split_file_path("/docs", ".."), ("/", None))
        self.assertEqual(split_file_path("/docs", ""), ("/docs", None))

    def test_join_parent_base(self) -> None:
        self.assertEqual(join_path("/", "a"), "/a")
        self.assertEqual(join_path("/x/", "a"), "/x/a")
        self.assertEqual(join_path("", "a"), "/a")
        self.assertEqual(parent_path("/a/b"), "/a")
        self.assertEqual(parent_path("/a"), "/")
        self.assertEqual(base_name("/a/b/"), "b")

    def test_relative_to_respects_segments(self) -> None:
        self.assertEqual(relative_to("/docs/a.txt", "/docs"), "a.txt")
        self.assertEqual(relative_to("/docs/sub/a.txt", "/docs/"), "sub/a.txt")
        self.assertIsNone(relative_to("/docsx/a", "/docs"))
        self.assertEqual(relative_to("/a/b", "/"), "a/b")
        self.assertEqual(relative_to("/docs", "/docs"), "")


if __name__ == "__main__":
    unittest.main()
