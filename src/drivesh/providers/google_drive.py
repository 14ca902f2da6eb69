"""Google Drive (v3 API) exposed as a drive."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Optional

from drivesh.auth import AuthInfo, OAuthClient
from drivesh.config import Settings
from drivesh.controller import GoogleDriveController
from drivesh.errors import InvalidArgumentError, InvalidStateError
from drivesh.models import FileEntry

from .base import AskFn, ProviderAdapter

logger = logging.getLogger(__name__)


class GoogleDriveAdapter(ProviderAdapter):
    """
    Google Drive through the official client library.

    auth_state:
        - client_secrets_file: OAuth client secrets JSON (desktop app)
        - token_file: authorized-user token written by the consent flow
    """

    provider_id = "google_drive"
    description = "Google Drive"

    def __init__(
        self,
        drive_name: str,
        auth_state: Optional[dict[str, Any]],
        *,
        cache_dir: str,
        settings: Settings,
        controller: Optional[GoogleDriveController] = None,
    ) -> None:
        super().__init__(drive_name, auth_state, cache_dir=cache_dir, settings=settings)
        self._controller = controller

    async def initialize(self, drive_name: str, ask: AskFn) -> dict[str, Any]:
        answer = (await ask("Enter the path to your OAuth client secrets JSON file > ")).strip()
        if not answer:
            raise InvalidArgumentError("A client secrets file is required")

        client_secrets = os.path.abspath(os.path.expanduser(answer))
        if not os.path.isfile(client_secrets):
            raise InvalidArgumentError(
                "Client secrets file does not exist",
                details={"client_secrets_file": client_secrets},
            )

        auth_info = AuthInfo(
            kind="oauth",
            data={
                "client_secrets_file": client_secrets,
                "token_file": os.path.join(self._settings.tokens_dir, f"{drive_name}.json"),
            },
        )
        await asyncio.to_thread(OAuthClient(auth_info).authorize)
        logger.info("Authorized Google Drive for drive %s", drive_name)

        self._controller = None
        self._auth_state = auth_info.to_auth_state()
        return self.auth_state

    async def list(self, path: str) -> list[FileEntry]:
        controller = await self._get_controller()
        return await asyncio.to_thread(controller.list_folder, path)

    async def fetch(self, path: str, file_name: str) -> list[str]:
        controller = await self._get_controller()
        return await asyncio.to_thread(controller.download, path, file_name, self._new_fetch_dir())

    async def store(self, path: str, file_name: str, local_path: str) -> bool:
        controller = await self._get_controller()
        await asyncio.to_thread(controller.upload, path, file_name, local_path)
        return True

    async def delete(self, path: str, file_name: Optional[str] = None) -> bool:
        controller = await self._get_controller()
        await asyncio.to_thread(controller.remove, path, file_name)
        return True

    async def _get_controller(self) -> GoogleDriveController:
        if self._controller is None:
            try:
                auth_info = AuthInfo.from_auth_state(self._auth_state)
            except ValueError as exc:
                raise InvalidStateError(
                    "Drive has no OAuth files configured",
                    details={"drive": self.drive_name},
                    cause=exc,
                ) from exc
            # Non-interactive: a missing token fails the command instead of opening a browser.
            self._controller = await asyncio.to_thread(GoogleDriveController, auth_info)
        return self._controller
