"""Google Drive API controller addressed by '/'-separated paths."""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from drivesh.auth import AuthInfo, OAuthClient
from drivesh.errors import (
    ApiError,
    DriveShError,
    HttpErrorInfo,
    InvalidArgumentError,
    IsAFolderError,
    NotFoundError,
    TransportError,
    map_http_error,
    map_os_error,
)
from drivesh.models import FileEntry
from drivesh.util.mime import FOLDER_MIME, export_format, exported_file_name, is_folder
from drivesh.util.paths import join_path, normalize
from drivesh.util.time import parse_timestamp

from .fields import ENTRY_FIELDS, LIST_FIELDS, LOOKUP_FIELDS

T = TypeVar("T")

logger = logging.getLogger(__name__)

ROOT_ID = "root"


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveController:
    """
    Drive v3 controller (blocking; adapters run it in a worker thread).

    Notes:
        - Drive is id-addressed; paths are resolved one segment at a time
          from "My Drive" (file id "root").
        - Drive allows same-named siblings; lookups take the first match in
          folder-first, name order.
        - Rate limits, network errors and 5xx are retried with backoff here,
          behind the adapter boundary.
    """

    def __init__(self, auth_info: AuthInfo, *, interactive: bool = False) -> None:
        self._retry_policy = _RetryPolicy()
        client = OAuthClient(auth_info)
        self._service = client.build_drive_service(interactive=interactive)

    @classmethod
    def from_service(cls, service: Any, *, retry_delay_sec: float = 1.0) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._retry_policy = _RetryPolicy(initial_delay_sec=retry_delay_sec)
        obj._service = service
        return obj

    # ----------------------------
    # Path API
    # ----------------------------
    def lookup(self, path: str) -> dict[str, Any]:
        """Resolve a path to its Drive metadata (id, name, mimeType)."""
        current: dict[str, Any] = {"id": ROOT_ID, "name": "", "mimeType": FOLDER_MIME}
        walked = "/"
        for segment in _segments(path):
            walked = join_path(walked, segment)
            if not is_folder(current.get("mimeType")):
                raise NotFoundError(f"No such file or folder: {walked}", details={"path": walked})
            child = self.find_child(current["id"], segment)
            if child is None:
                raise NotFoundError(f"No such file or folder: {walked}", details={"path": walked})
            current = child
        return current

    def list_folder(self, path: str) -> list[FileEntry]:
        folder = normalize(path)
        info = self.lookup(folder)
        if not is_folder(info.get("mimeType")):
            raise InvalidArgumentError(f"Not a folder: {folder}", details={"path": folder})
        return [_file_dict_to_entry(data, folder) for data in self.list_children(info["id"])]

    def download(self, path: str, file_name: str, dest_dir: str) -> list[str]:
        target = join_path(normalize(path), file_name)
        info = self.lookup(target)
        mime_type = info.get("mimeType")
        if is_folder(mime_type):
            raise IsAFolderError(f"Cannot download folder {file_name}", details={"path": target})

        local_path = os.path.join(dest_dir, exported_file_name(file_name, mime_type))
        self.download_file(info["id"], mime_type, local_path)
        return [local_path]

    def upload(self, path: str, file_name: str, local_path: str) -> FileEntry:
        folder = normalize(path)
        parent_id = self.ensure_folder(folder)
        data = self.upload_file(local_path, parent_id, name=file_name)
        return _file_dict_to_entry(data, folder)

    def remove(self, path: str, file_name: Optional[str] = None) -> None:
        target = join_path(normalize(path), file_name) if file_name else normalize(path)
        if target == "/":
            raise InvalidArgumentError("Refusing to delete the drive root")
        info = self.lookup(target)
        self.trash(info["id"])

    def ensure_folder(self, path: str) -> str:
        """Return the folder id for path, creating missing folders."""
        parent_id = ROOT_ID
        for segment in _segments(path):
            child = self.find_child(parent_id, segment, folders_only=True)
            if child is None:
                child = self.create_folder(segment, parent_id)
                logger.debug("Created Drive folder %s under %s", segment, parent_id)
            parent_id = child["id"]
        return parent_id

    # ----------------------------
    # Id API
    # ----------------------------
    def list_children(self, parent_id: str) -> list[dict[str, Any]]:
        q = f"'{_escape(parent_id)}' in parents and trashed=false"
        return self._find_by_query(q, fields=LIST_FIELDS)

    def find_child(
        self,
        parent_id: str,
        name: str,
        *,
        folders_only: bool = False,
    ) -> Optional[dict[str, Any]]:
        q = f"name = '{_escape(name)}' and '{_escape(parent_id)}' in parents and trashed=false"
        if folders_only:
            q += f" and mimeType = '{FOLDER_MIME}'"
        matches = self._find_by_query(q, fields=LOOKUP_FIELDS, single_page=True)
        return matches[0] if matches else None

    def create_folder(self, name: str, parent_id: str) -> dict[str, Any]:
        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            fields=ENTRY_FIELDS,
            supportsAllDrives=True,
        )
        return self._execute(req.execute)

    def upload_file(
        self,
        local_path: str,
        parent_id: str,
        *,
        name: Optional[str] = None,
    ) -> dict[str, Any]:
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")

        from googleapiclient.http import MediaFileUpload

        filename = name if name is not None else os.path.basename(local_path)
        try:
            media = MediaFileUpload(local_path, resumable=True)
        except OSError as exc:
            raise map_os_error(exc, local_path) from exc
        body = {"name": filename, "parents": [parent_id]}

        req = self._service.files().create(
            body=body,
            media_body=media,
            fields=ENTRY_FIELDS,
            supportsAllDrives=True,
        )
        return self._execute(req.execute)

    def download_file(self, file_id: str, mime_type: Optional[str], local_path: str) -> None:
        from googleapiclient.http import MediaIoBaseDownload

        fmt = export_format(mime_type)
        if fmt is not None:
            req = self._service.files().export_media(fileId=file_id, mimeType=fmt[0])
        else:
            req = self._service.files().get_media(fileId=file_id, supportsAllDrives=True)

        parent_dir = os.path.dirname(local_path)
        try:
            if parent_dir:
                os.makedirs(parent_dir, exist_ok=True)
            f = open(local_path, "wb")
        except OSError as exc:
            raise map_os_error(exc, local_path) from exc

        with f:
            downloader = MediaIoBaseDownload(f, req)
            done = False
            while not done:
                _, done = self._execute(downloader.next_chunk)

    def trash(self, file_id: str) -> None:
        req = self._service.files().update(
            fileId=file_id,
            body={"trashed": True},
            fields="id",
            supportsAllDrives=True,
        )
        self._execute(req.execute)

    # ----------------------------
    # Internals
    # ----------------------------
    def _find_by_query(
        self,
        q: str,
        *,
        fields: str,
        single_page: bool = False,
    ) -> list[dict[str, Any]]:
        all_files: list[dict[str, Any]] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.files().list(
                q=q,
                fields=fields,
                orderBy="folder,name",
                pageToken=page_token,
                supportsAllDrives=True,
                includeItemsFromAllDrives=True,
            )
            data = self._execute(req.execute)
            all_files.extend(f for f in data.get("files", []) if isinstance(f, dict))

            page_token = data.get("nextPageToken")
            if single_page or not page_token:
                break

        return all_files

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if isinstance(mapped, TransportError) and attempt < self._retry_policy.max_retries:
                    logger.debug("Retrying Drive request after %s (attempt %d)", mapped, attempt + 1)
                    time.sleep(delay)
                    delay *= 2
                    continue
                if mapped is exc:
                    raise
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _map_exception(self, exc: Exception) -> Exception:
        from googleapiclient.errors import HttpError

        if isinstance(exc, DriveShError):
            return exc

        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return TransportError("Network error. Cannot reach Google servers.", cause=exc)

        return ApiError("Drive API error", cause=exc)


def _segments(path: str) -> list[str]:
    return [s for s in normalize(path).split("/") if s]


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _file_dict_to_entry(data: dict[str, Any], folder: str) -> FileEntry:
    name = data.get("name")
    name = name if isinstance(name, str) else ""
    mime_type = data.get("mimeType")
    mime_type = mime_type if isinstance(mime_type, str) else None

    size = None
    if isinstance(data.get("size"), str) and data["size"].isdigit():
        size = int(data["size"])
    elif isinstance(data.get("size"), int):
        size = data["size"]

    file_id = data.get("id")
    return FileEntry(
        name=name,
        kind="folder" if is_folder(mime_type) else "file",
        path=join_path(folder, name),
        size=size,
        created_at=parse_timestamp(data.get("createdTime")),
        last_modified=parse_timestamp(data.get("modifiedTime")),
        content_locator=file_id if isinstance(file_id, str) else None,
        mime_type=mime_type,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
