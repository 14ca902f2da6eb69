"""Recursive listing (tree) and keyword search over a provider."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

from drivesh.errors import InvalidArgumentError
from drivesh.models import FileEntry
from drivesh.providers.base import ProviderAdapter
from drivesh.util.paths import join_path, strip_trailing

logger = logging.getLogger(__name__)


async def traverse(root: str, adapter: ProviderAdapter) -> list[FileEntry]:
    """
    List every entry under root, breadth-first.

    Children appear in the order the adapter lists them; sub-folders are
    visited in the order they were discovered, so the output only depends on
    the adapter's responses. Each entry carries its absolute path.

    Raises:
        Whatever the adapter raises for any folder. No partial result is
        returned.
    """
    results: list[FileEntry] = []
    queue: deque[str] = deque([strip_trailing(root)])

    while queue:
        folder = queue.popleft()
        for entry in await adapter.list(folder):
            if not entry.path:
                entry = entry.with_path(join_path(folder, entry.name))
            results.append(entry)
            if entry.is_folder:
                queue.append(entry.path)

    logger.debug("Traversed %s: %d entries", root, len(results))
    return results


def match_keywords(entries: Iterable[FileEntry], keywords: Iterable[str]) -> list[FileEntry]:
    """Keep entries whose name contains any keyword, ignoring case."""
    needles = [k.casefold() for k in keywords if k]
    return [e for e in entries if any(n in e.name.casefold() for n in needles)]


async def search(root: str, adapter: ProviderAdapter, keywords: Iterable[str]) -> list[FileEntry]:
    """Traverse root and return entries matching any keyword (case-insensitive)."""
    words = [k for k in keywords if k]
    if not words:
        raise InvalidArgumentError("search needs at least one keyword")
    return match_keywords(await traverse(root, adapter), words)
