"""Remote files server speaking the path-addressed files API over HTTP."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional
from urllib.parse import quote

import httpx

from drivesh.config import Settings
from drivesh.errors import (
    ApiError,
    HttpErrorInfo,
    InvalidArgumentError,
    IsAFolderError,
    NotFoundError,
    TransportError,
    map_http_error,
    map_os_error,
)
from drivesh.models import FileEntry
from drivesh.util.paths import join_path, normalize

from .base import AskFn, ProviderAdapter

logger = logging.getLogger(__name__)

API_PREFIX = "/files-api/v2"


class FilesApiAdapter(ProviderAdapter):
    """
    Client for a files API server.

    Every response carries a `content` envelope: a list (or a single item
    for metadata requests), or null for an empty folder.

    auth_state:
        - server: base URL of the files server
        - provider: provider id on that server (e.g. "one_drive")
        - token: optional bearer token sent with every request
    """

    provider_id = "files_api"
    description = "a files API server"

    def __init__(
        self,
        drive_name: str,
        auth_state: Optional[dict[str, Any]],
        *,
        cache_dir: str,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(drive_name, auth_state, cache_dir=cache_dir, settings=settings)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ----------------------------
    # Public API
    # ----------------------------
    async def initialize(self, drive_name: str, ask: AskFn) -> dict[str, Any]:
        default = self._settings.server
        server = (await ask(f"Enter your server's address (default: {default}) > ")).strip()
        server = (server or default).rstrip("/")
        self._auth_state = {"server": server}

        providers = await self.list_remote_providers()
        if not providers:
            raise ApiError(
                "The server returned no valid/enabled providers",
                details={"server": server},
            )

        choice = (
            await ask(f"Choose a provider - {', '.join(providers)} > ")
        ).strip().replace(" ", "_").lower()
        if choice not in providers:
            raise InvalidArgumentError(
                f"Unknown provider {choice!r} - choose one of these - {', '.join(providers)}",
                details={"provider": choice},
            )

        token = (await ask("Enter an access token (leave empty if none) > ")).strip()

        state: dict[str, Any] = {"server": server, "provider": choice}
        if token:
            state["token"] = token
        await self.aclose()
        self._auth_state = state
        return self.auth_state

    async def list_remote_providers(self) -> list[str]:
        data = await self._request_json("GET", f"{self._server}{API_PREFIX}/providers")
        content = data.get("content") or {}
        providers = content.get("providers") if isinstance(content, dict) else None
        return [str(p) for p in providers] if isinstance(providers, list) else []

    async def list(self, path: str) -> list[FileEntry]:
        folder = normalize(path)
        data = await self._request_json(
            "GET",
            self._data_url(folder),
            params={"orderBy": "kind", "direction": "asc", "exportType": "view"},
        )
        content = data.get("content")
        if not content:
            return []
        if not isinstance(content, list):
            raise ApiError("Unexpected listing payload", details={"path": folder})

        entries: list[FileEntry] = []
        for item in content:
            if not isinstance(item, dict):
                continue
            entry = FileEntry.from_dict(item)
            if not entry.path:
                entry = entry.with_path(join_path(folder, entry.name))
            entries.append(entry)
        return entries

    async def fetch(self, path: str, file_name: str) -> list[str]:
        folder = normalize(path)
        target = join_path(folder, file_name)
        data = await self._request_json(
            "GET",
            self._data_url(folder, file_name),
            params={"exportType": "media"},
        )
        content = data.get("content")
        if not isinstance(content, dict):
            raise NotFoundError(f"No such file: {target}", details={"path": target})

        entry = FileEntry.from_dict(content)
        if entry.is_folder:
            raise IsAFolderError(f"Cannot download folder {file_name}", details={"path": target})
        if not entry.content_locator:
            raise NotFoundError(
                f"No content available for {target}",
                details={"path": target},
            )

        dest = os.path.join(self._new_fetch_dir(), entry.name or file_name)
        await self._download(entry.content_locator, dest)
        return [dest]

    async def store(self, path: str, file_name: str, local_path: str) -> bool:
        folder = normalize(path)
        try:
            fh = open(local_path, "rb")
        except OSError as exc:
            raise map_os_error(exc, local_path) from exc
        with fh:
            await self._request(
                "POST",
                self._data_url(folder, file_name),
                files={"content": (file_name, fh)},
            )
        logger.debug("Uploaded %s to %s", join_path(folder, file_name), self.drive_name)
        return True

    async def delete(self, path: str, file_name: Optional[str] = None) -> bool:
        folder = normalize(path)
        await self._request("DELETE", self._data_url(folder, file_name))
        return True

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ----------------------------
    # Internals
    # ----------------------------
    @property
    def _server(self) -> str:
        server = self._auth_state.get("server") or self._settings.server
        return str(server).rstrip("/")

    def _data_url(self, folder: str, file_name: Optional[str] = None) -> str:
        provider = self._auth_state.get("provider")
        if not provider:
            raise InvalidArgumentError(
                "Drive has no remote provider configured",
                details={"drive": self.drive_name},
            )
        url = f"{self._server}{API_PREFIX}/data/{quote(str(provider), safe='')}/{quote(folder, safe='')}"
        if file_name:
            url += f"/{quote(file_name, safe='')}"
        return url

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {}
            token = self._auth_state.get("token")
            if token:
                headers["Authorization"] = f"Bearer {token}"
            self._client = httpx.AsyncClient(
                headers=headers,
                timeout=self._settings.http_timeout,
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._get_client().request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise TransportError(
                f"Network error. Cannot reach {self._server}",
                details={"url": url},
                cause=exc,
            ) from exc

        if response.is_error:
            raise _response_error(response)
        return response

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        response = await self._request(method, url, **kwargs)
        try:
            data = response.json()
        except ValueError as exc:
            raise ApiError("Server returned invalid JSON", details={"url": url}, cause=exc) from exc
        if not isinstance(data, dict):
            raise ApiError("Server returned an unexpected payload", details={"url": url})
        return data

    async def _download(self, url: str, dest: str) -> None:
        try:
            async with self._get_client().stream("GET", url) as response:
                if response.is_error:
                    await response.aread()
                    raise _response_error(response)
                with open(dest, "wb") as f:
                    async for chunk in response.aiter_bytes():
                        f.write(chunk)
        except httpx.TransportError as exc:
            raise TransportError(
                "Network error while downloading",
                details={"url": url},
                cause=exc,
            ) from exc
        except OSError as exc:
            raise map_os_error(exc, dest) from exc


def _response_error(response: httpx.Response) -> Exception:
    message = None
    details: dict[str, Any] = {"url": str(response.request.url)}
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        err = payload.get("error")
        if isinstance(err, dict):
            message = err.get("message") or None
        elif isinstance(err, str):
            message = err

    info = HttpErrorInfo(
        status_code=response.status_code,
        reason=response.reason_phrase or None,
        message=message,
        details=details,
    )
    return map_http_error(info)
