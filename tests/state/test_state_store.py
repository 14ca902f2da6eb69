import json
import os
import tempfile
import unittest

from drivesh.state import HISTORY_LIMIT, StateStore, append_history


class TestStateStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "nested", "state.json")
        self.store = StateStore(self.path)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_loads_empty(self) -> None:
        self.assertEqual(self.store.load(), {})

    def test_save_then_load(self) -> None:
        data = {"drives": {"a": {"provider": "x", "path": "", "auth": {}}}, "current_drive": "a"}
        self.store.save(data)
        self.assertEqual(self.store.load(), data)
        self.assertFalse(os.path.exists(self.path + ".tmp"))

    def test_corrupt_file_loads_empty(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertLogs("drivesh.state.store", level="WARNING"):
            self.assertEqual(self.store.load(), {})

    def test_non_object_loads_empty(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([1, 2], f)
        with self.assertLogs("drivesh.state.store", level="WARNING"):
            self.assertEqual(self.store.load(), {})

    def test_reset_removes_file(self) -> None:
        self.store.save({"setup_done": True})
        with self.assertLogs("drivesh.state.store", level="WARNING"):
            self.store.reset()
        self.assertFalse(os.path.exists(self.path))
        with self.assertLogs("drivesh.state.store", level="WARNING"):
            self.store.reset()


class TestHistory(unittest.TestCase):
    def test_history_is_capped(self) -> None:
        history: list[str] = []
        for i in range(HISTORY_LIMIT + 5):
            history = append_history(history, f"cmd {i}")
        self.assertEqual(len(history), HISTORY_LIMIT)
        self.assertEqual(history[0], "cmd 5")
        self.assertEqual(history[-1], f"cmd {HISTORY_LIMIT + 4}")

    def test_blank_commands_are_not_recorded(self) -> None:
        self.assertEqual(append_history(["ls"], "   "), ["ls"])


if __name__ == "__main__":
    unittest.main()
