"""Cross-drive copy (cp) and clip replay (pst)."""

from __future__ import annotations

import logging
import os
from typing import Optional

from drivesh.errors import DriveShError, EmptyClipError, map_os_error
from drivesh.models import Clip, FileEntry, PasteResult, TransferResult
from drivesh.providers.base import ProviderAdapter
from drivesh.util.paths import base_name, join_path, normalize, parent_path, relative_to

logger = logging.getLogger(__name__)


def relative_destination(entry: FileEntry, origin_path: str, dest_path: Optional[str]) -> str:
    """
    Rebase a clip entry from its origin folder onto dest_path.

    Entries outside origin_path keep their full path below dest_path.
    """
    source = entry.path or join_path(origin_path, entry.name)
    rel = relative_to(source, origin_path)
    if not rel:
        rel = source.lstrip("/") or entry.name
    return normalize(join_path(dest_path or "/", rel))


async def store_fetched(
    dest: ProviderAdapter,
    folder: str,
    file_name: str,
    local_paths: list[str],
) -> list[str]:
    """
    Store fetched local files under folder.

    A single file is stored as file_name; several are each stored under their
    own base name. Each temp file is removed once stored; on failure the
    remaining ones stay on disk and the store error propagates.
    """
    stored: list[str] = []
    for local in local_paths:
        name = file_name if len(local_paths) == 1 else os.path.basename(local)
        await dest.store(folder, name, local)
        stored.append(join_path(folder, name))
        try:
            os.remove(local)
        except OSError as exc:
            logger.warning("Could not remove temp file %s: %s", local, exc)
    return stored


async def copy_file(
    origin: ProviderAdapter,
    src_folder: str,
    src_name: str,
    dest: ProviderAdapter,
    dest_folder: str,
    dest_name: str,
) -> list[str]:
    """Fetch one file from origin and store it on dest. Not atomic."""
    local_paths = await origin.fetch(src_folder, src_name)
    return await store_fetched(dest, dest_folder, dest_name, local_paths)


async def paste(
    clip: Clip,
    origin: ProviderAdapter,
    dest: ProviderAdapter,
    dest_drive: str,
    dest_path: Optional[str],
) -> PasteResult:
    """
    Replay a clip onto dest, rebased under dest_path.

    Items run one at a time in clip order. Folders are skipped; a failing
    item is recorded and the loop moves on.

    Raises:
        EmptyClipError: if the clip holds no entries.
    """
    if not clip.files:
        raise EmptyClipError(
            f"Clip {clip.name} has no files to paste",
            details={"name": clip.name},
        )

    result = PasteResult(clip_name=clip.name, destination_drive=dest_drive)
    for entry in clip.files:
        source = entry.path or join_path(clip.origin_path, entry.name)
        if entry.is_folder:
            result.results.append(TransferResult(source=source, destination=None, status="skipped"))
            continue

        target = relative_destination(entry, clip.origin_path, dest_path)
        local_paths: list[str] = []
        try:
            local_paths = await origin.fetch(parent_path(source), entry.name or base_name(source))
            await store_fetched(dest, parent_path(target), base_name(target), local_paths)
        except DriveShError as exc:
            logger.warning("Could not paste %s to %s: %s", source, target, exc)
            result.results.append(_failed_result(source, target, exc, local_paths))
            continue
        except OSError as exc:
            error = map_os_error(exc, source)
            logger.warning("Could not paste %s to %s: %s", source, target, error)
            result.results.append(_failed_result(source, target, error, local_paths))
            continue

        result.results.append(TransferResult(source=source, destination=target, status="success"))

    logger.info("Pasted clip %s onto %s: %s", clip.name, dest_drive, result.summary)
    return result


def _failed_result(
    source: str,
    destination: str,
    exc: DriveShError,
    local_paths: list[str],
) -> TransferResult:
    return TransferResult(
        source=source,
        destination=destination,
        status="failed",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        error_details=getattr(exc, "details", None),
        error=exc,
        leftover_paths=[p for p in local_paths if os.path.exists(p)],
    )
