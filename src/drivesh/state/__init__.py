"""Session state: drive registry, clip store and their persistence."""

from __future__ import annotations

from .clips import ClipStore
from .registry import DriveRegistry, validate_drive_name
from .store import HISTORY_LIMIT, StateStore, append_history

__all__ = [
    "DriveRegistry",
    "validate_drive_name",
    "ClipStore",
    "StateStore",
    "append_history",
    "HISTORY_LIMIT",
]
