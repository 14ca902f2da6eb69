"""Provider adapter contract shared by every storage backend."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, ClassVar, Optional

from drivesh.config import Settings
from drivesh.errors import map_os_error
from drivesh.models import FileEntry
from drivesh.util.ids import new_fetch_id

AskFn = Callable[[str], Awaitable[str]]
"""Async prompt used during interactive setup: message in, user's answer out."""


class ProviderAdapter(ABC):
    """
    Uniform capability contract for a storage backend.

    Notes:
        - Paths are absolute, provider-local, '/'-separated.
        - Adapters raise drivesh errors only: TransportError for network-level
          failures, NotFoundError/IsAFolderError for semantic ones.
        - auth_state is opaque to the core; adapters may update it (token
          refresh) and the session persists the new value after each command.
    """

    provider_id: ClassVar[str]
    description: ClassVar[str] = ""

    def __init__(
        self,
        drive_name: str,
        auth_state: Optional[dict[str, Any]],
        *,
        cache_dir: str,
        settings: Settings,
    ) -> None:
        self.drive_name = drive_name
        self._auth_state: dict[str, Any] = dict(auth_state or {})
        self._cache_dir = cache_dir
        self._settings = settings

    @property
    def auth_state(self) -> dict[str, Any]:
        return dict(self._auth_state)

    @abstractmethod
    async def initialize(self, drive_name: str, ask: AskFn) -> dict[str, Any]:
        """Run interactive setup and return the auth state to store on the drive."""

    @abstractmethod
    async def list(self, path: str) -> list[FileEntry]:
        """List direct children of the folder at path ([] for an empty folder)."""

    @abstractmethod
    async def fetch(self, path: str, file_name: str) -> list[str]:
        """Download a file into the session cache and return the local path(s)."""

    @abstractmethod
    async def store(self, path: str, file_name: str, local_path: str) -> bool:
        """Upload local_path as path/file_name, creating folders as needed."""

    @abstractmethod
    async def delete(self, path: str, file_name: Optional[str] = None) -> bool:
        """Delete path/file_name, or the folder at path when file_name is None."""

    async def aclose(self) -> None:
        """Release network resources held by the adapter."""

    def _new_fetch_dir(self) -> str:
        fetch_dir = os.path.join(self._cache_dir, new_fetch_id())
        try:
            os.makedirs(fetch_dir, exist_ok=True)
        except OSError as exc:
            raise map_os_error(exc, fetch_dir) from exc
        return fetch_dir
