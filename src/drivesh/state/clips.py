"""Clip store: named snapshots captured with `| cp [name]`."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from drivesh.errors import UnknownClipError
from drivesh.models import DEFAULT_CLIP, Clip, FileEntry

logger = logging.getLogger(__name__)


class ClipStore:
    def __init__(self, clips: Optional[Iterable[Clip]] = None) -> None:
        self._clips: dict[str, Clip] = {}
        for clip in clips or ():
            self._clips[clip.name] = clip

    def capture(
        self,
        name: Optional[str],
        origin_drive: str,
        origin_path: str,
        files: Iterable[FileEntry],
    ) -> Clip:
        """Store a new clip, replacing any clip with the same name."""
        clip = Clip(
            name=name or DEFAULT_CLIP,
            origin_drive=origin_drive,
            origin_path=origin_path,
            files=tuple(files),
        )
        self._clips[clip.name] = clip
        logger.debug("Captured clip %s (%d entries)", clip.name, len(clip.files))
        return clip

    def get(self, name: Optional[str] = None) -> Clip:
        key = name or DEFAULT_CLIP
        try:
            return self._clips[key]
        except KeyError:
            raise UnknownClipError(
                f"No clip was found with the name {key}",
                details={"name": key},
            ) from None

    def list_clips(self) -> list[Clip]:
        return list(self._clips.values())

    def clear(self) -> None:
        self._clips.clear()

    def __len__(self) -> int:
        return len(self._clips)

    def to_dict(self) -> dict[str, Any]:
        return {name: clip.to_dict() for name, clip in self._clips.items()}

    @classmethod
    def from_dict(cls, data: Any) -> ClipStore:
        if not isinstance(data, dict):
            return cls()
        clips = [
            Clip.from_dict(str(name), value)
            for name, value in data.items()
            if isinstance(value, dict)
        ]
        return cls(clips)
