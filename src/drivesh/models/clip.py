"""Clip: a named snapshot of a listing for later paste."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .file_entry import FileEntry

DEFAULT_CLIP = "default"


@dataclass(slots=True, frozen=True)
class Clip:
    """
    Immutable capture of a list/tree/search result.

    origin_path is the resolved folder the capturing command ran against;
    every entry in files lives under it.
    """

    name: str
    origin_drive: str
    origin_path: str
    files: tuple[FileEntry, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "drive": self.origin_drive,
            "path": self.origin_path,
            "files": [f.to_dict() for f in self.files],
        }

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> Clip:
        files = data.get("files") or []
        return cls(
            name=name,
            origin_drive=str(data.get("drive") or ""),
            origin_path=str(data.get("path") or ""),
            files=tuple(FileEntry.from_dict(f) for f in files if isinstance(f, dict)),
        )
