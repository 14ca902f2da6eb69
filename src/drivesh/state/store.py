"""JSON persistence for drives, active drive, history and clips."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20


class StateStore:
    """
    One JSON document on disk.

    Layout:
        {
          "setup_done": bool,
          "drives": {name: {"provider": str, "path": str, "auth": {...}}},
          "current_drive": str,
          "history": [str, ...],
          "clips": {name: {"drive": str, "path": str, "files": [...]}}
        }
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def load(self) -> dict[str, Any]:
        """Load the document. A missing or corrupt file yields an empty one."""
        if not os.path.exists(self.path):
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed state file %s", self.path)
            return {}
        return data

    def save(self, data: dict[str, Any]) -> None:
        """Write the document atomically (temp file + rename)."""
        state_dir = os.path.dirname(self.path)
        if state_dir:
            os.makedirs(state_dir, exist_ok=True)

        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)

    def reset(self) -> None:
        """Discard all persisted state."""
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        logger.warning("Persisted state at %s was reset", self.path)


def append_history(history: list[str], command: str) -> list[str]:
    """Return history with command appended, trimmed to the last HISTORY_LIMIT."""
    if not command.strip():
        return list(history)
    return [*history, command][-HISTORY_LIMIT:]
