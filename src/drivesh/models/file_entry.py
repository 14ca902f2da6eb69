"""Data model for items returned by provider adapters."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Literal, Optional

from drivesh.util.time import parse_timestamp, to_rfc3339

EntryKind = Literal["file", "folder"]


@dataclass(slots=True, frozen=True)
class FileEntry:
    """
    A file or folder as seen by a provider.

    Notes:
        - path is absolute and provider-local (e.g. "/docs/report.pdf").
        - content_locator is an opaque handle the provider may use to fetch
          bytes (a download URL, a Drive file id, ...).
    """

    name: str
    kind: EntryKind
    path: str

    size: Optional[int] = None
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    content_locator: Optional[str] = None
    mime_type: Optional[str] = None

    @property
    def is_folder(self) -> bool:
        return self.kind == "folder"

    def with_path(self, path: str) -> FileEntry:
        return replace(self, path=path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "path": self.path,
            "size": self.size,
            "createdAtTime": to_rfc3339(self.created_at) if self.created_at else None,
            "lastModifiedTime": (
                to_rfc3339(self.last_modified) if self.last_modified else None
            ),
            "contentURI": self.content_locator,
            "mimeType": self.mime_type,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileEntry:
        """Build an entry from the files-API / persisted dict shape."""
        kind = data.get("kind")
        size = data.get("size")
        if isinstance(size, str) and size.isdigit():
            size = int(size)
        elif not isinstance(size, int) or isinstance(size, bool):
            size = None

        locator = data.get("contentURI")
        mime_type = data.get("mimeType")
        return cls(
            name=str(data.get("name") or ""),
            kind="folder" if kind == "folder" else "file",
            path=str(data.get("path") or ""),
            size=size,
            created_at=parse_timestamp(data.get("createdAtTime")),
            last_modified=parse_timestamp(data.get("lastModifiedTime")),
            content_locator=locator if isinstance(locator, str) else None,
            mime_type=mime_type if isinstance(mime_type, str) else None,
        )
