"""Public model exports for drivesh."""

from __future__ import annotations

from .clip import DEFAULT_CLIP, Clip
from .drive import Drive
from .file_entry import EntryKind, FileEntry
from .results import PasteResult, TransferResult, TransferStatus

__all__ = [
    "FileEntry",
    "EntryKind",
    "Drive",
    "Clip",
    "DEFAULT_CLIP",
    "TransferResult",
    "TransferStatus",
    "PasteResult",
]
