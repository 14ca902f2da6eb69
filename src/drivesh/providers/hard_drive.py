"""A local folder exposed as a drive."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from typing import Any, Optional

from drivesh.errors import (
    InvalidArgumentError,
    InvalidStateError,
    IsAFolderError,
    NotFoundError,
    map_os_error,
)
from drivesh.models import FileEntry
from drivesh.util.paths import join_path, normalize
from drivesh.util.time import from_epoch_seconds

from .base import AskFn, ProviderAdapter

logger = logging.getLogger(__name__)


class HardDriveAdapter(ProviderAdapter):
    """
    Serve a folder of the local filesystem.

    auth_state:
        - base_path: absolute folder that acts as the drive root
    """

    provider_id = "hard_drive"
    description = "a folder on this computer"

    async def initialize(self, drive_name: str, ask: AskFn) -> dict[str, Any]:
        answer = (await ask("Enter the path of the folder to use as the drive root > ")).strip()
        if not answer:
            raise InvalidArgumentError("A folder path is required")

        base_path = os.path.abspath(os.path.expanduser(answer))
        if not os.path.isdir(base_path):
            raise InvalidArgumentError(
                "Folder does not exist",
                details={"base_path": base_path},
            )

        self._auth_state = {"base_path": base_path}
        return self.auth_state

    async def list(self, path: str) -> list[FileEntry]:
        return await asyncio.to_thread(self._list_sync, path)

    async def fetch(self, path: str, file_name: str) -> list[str]:
        return await asyncio.to_thread(self._fetch_sync, path, file_name)

    async def store(self, path: str, file_name: str, local_path: str) -> bool:
        return await asyncio.to_thread(self._store_sync, path, file_name, local_path)

    async def delete(self, path: str, file_name: Optional[str] = None) -> bool:
        return await asyncio.to_thread(self._delete_sync, path, file_name)

    # ----------------------------
    # Internals
    # ----------------------------
    @property
    def _base_path(self) -> str:
        base = self._auth_state.get("base_path")
        if not isinstance(base, str) or not base:
            raise InvalidStateError(
                "Drive has no base_path configured",
                details={"drive": self.drive_name},
            )
        return base

    def _local(self, path: str) -> str:
        # normalize() drops '..' so the result never escapes base_path.
        return os.path.join(self._base_path, normalize(path).lstrip("/"))

    def _list_sync(self, path: str) -> list[FileEntry]:
        folder = normalize(path)
        local = self._local(folder)
        if not os.path.exists(local):
            raise NotFoundError(f"No such folder: {folder}", details={"path": folder})
        if not os.path.isdir(local):
            raise InvalidArgumentError(f"Not a folder: {folder}", details={"path": folder})

        entries: list[FileEntry] = []
        try:
            with os.scandir(local) as it:
                for item in it:
                    entries.append(_dir_entry_to_file_entry(item, folder))
        except OSError as exc:
            raise map_os_error(exc, folder) from exc

        entries.sort(key=lambda e: (e.kind != "folder", e.name))
        return entries

    def _fetch_sync(self, path: str, file_name: str) -> list[str]:
        target = join_path(normalize(path), file_name)
        src = self._local(target)
        if not os.path.exists(src):
            raise NotFoundError(f"No such file: {target}", details={"path": target})
        if os.path.isdir(src):
            raise IsAFolderError(f"Cannot download folder {file_name}", details={"path": target})

        dest = os.path.join(self._new_fetch_dir(), file_name)
        try:
            shutil.copy2(src, dest)
        except OSError as exc:
            raise map_os_error(exc, target) from exc
        return [dest]

    def _store_sync(self, path: str, file_name: str, local_path: str) -> bool:
        target = join_path(normalize(path), file_name)
        dest = self._local(target)
        try:
            os.makedirs(os.path.dirname(dest), exist_ok=True)
            shutil.copy2(local_path, dest)
        except OSError as exc:
            raise map_os_error(exc, target) from exc
        logger.debug("Stored %s on %s", target, self.drive_name)
        return True

    def _delete_sync(self, path: str, file_name: Optional[str]) -> bool:
        target = join_path(normalize(path), file_name) if file_name else normalize(path)
        if target == "/":
            raise InvalidArgumentError("Refusing to delete the drive root")

        local = self._local(target)
        if not os.path.lexists(local):
            raise NotFoundError(f"No such file or folder: {target}", details={"path": target})

        try:
            if os.path.isdir(local) and not os.path.islink(local):
                shutil.rmtree(local)
            else:
                os.remove(local)
        except OSError as exc:
            raise map_os_error(exc, target) from exc
        return True


def _dir_entry_to_file_entry(item: os.DirEntry, folder: str) -> FileEntry:
    # symlinked folders are listed as files and never descended into
    is_dir = item.is_dir(follow_symlinks=False)
    try:
        st = item.stat()
    except OSError:
        st = None

    return FileEntry(
        name=item.name,
        kind="folder" if is_dir else "file",
        path=join_path(folder, item.name),
        size=None if (is_dir or st is None) else st.st_size,
        created_at=from_epoch_seconds(st.st_ctime) if st else None,
        last_modified=from_epoch_seconds(st.st_mtime) if st else None,
        content_locator=item.path,
    )
