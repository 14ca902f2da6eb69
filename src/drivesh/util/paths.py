"""Virtual path resolution for drives.

Every drive keeps its own working path. Paths are plain '/'-separated strings;
the empty string is the root of a freshly created drive.
"""

from __future__ import annotations

import re
from typing import Optional

from drivesh.errors import InvalidPathError

ROOT = "/"

_DRIVE_TOKEN = re.compile(r"^[^/\s:]+:")


def normalize(path: str) -> str:
    """Collapse repeated slashes and '.'/'..' segments of an absolute path."""
    out: list[str] = []
    for seg in path.split("/"):
        if not seg or seg == ".":
            continue
        if seg == "..":
            if out:
                out.pop()
            continue
        out.append(seg)
    return ROOT + "/".join(out)


def resolve(current_path: Optional[str], relative_input: Optional[str]) -> str:
    """
    Resolve relative_input against current_path.

    Rules:
        - '.' and empty input keep the current path.
        - '..' pops one segment; popping past root stays at root.
        - A leading '/' replaces the current path.
        - A trailing '/' on the input survives resolution.

    Raises:
        InvalidPathError: if the input starts with a drive token ("name:").
    """
    current = current_path or ""
    rel = relative_input or ""

    if _DRIVE_TOKEN.match(rel):
        raise InvalidPathError(
            "Drive names are not allowed inside a path",
            details={"path": rel},
        )

    if rel in ("", "."):
        base = current
        trailing = current.endswith("/")
    elif rel.startswith("/"):
        base = rel
        trailing = rel.endswith("/")
    else:
        base = f"{current}/{rel}"
        trailing = rel.endswith("/")

    resolved = normalize(base)
    if trailing and resolved != ROOT:
        resolved += "/"
    return resolved


def strip_trailing(path: str) -> str:
    """Drop a trailing '/' (root stays '/')."""
    return path.rstrip("/") or ROOT


def is_drive_switch(token: str) -> bool:
    """True for a bare 'name:' token (not '::')."""
    return len(token) > 1 and token.endswith(":") and token != "::"


def split_drive_prefix(arg: str) -> tuple[Optional[str], str]:
    """
    Split a 'drive:path' argument.

    Returns (None, arg) when no drive prefix is present. An empty prefix
    (':path') also means "current drive".
    """
    prefix, sep, rest = arg.partition(":")
    if not sep or "/" in prefix or any(ch.isspace() for ch in prefix):
        return None, arg
    return (prefix or None), rest


def split_file_path(current_path: Optional[str], path_input: Optional[str]) -> tuple[str, Optional[str]]:
    """
    Split a user path into (absolute folder, file name).

    A trailing '/', '.', '..' or an empty input names a folder, in which case
    the file name is None.
    """
    raw = path_input or ""
    last = raw.rstrip("/").rpartition("/")[2] if raw else ""
    if not raw or raw.endswith("/") or last in (".", ".."):
        return strip_trailing(resolve(current_path, raw)), None

    folder_part, _, file_name = raw.rpartition("/")
    if raw.startswith("/") and not folder_part:
        folder_part = ROOT
    folder = strip_trailing(resolve(current_path, folder_part or "."))
    return folder, file_name


def join_path(folder: Optional[str], name: str) -> str:
    """Join a folder path and a child name."""
    base = strip_trailing(folder or ROOT)
    if base == ROOT:
        return f"/{name}"
    return f"{base}/{name}"


def parent_path(path: str) -> str:
    """Return the folder that contains path."""
    parent = strip_trailing(normalize(path)).rpartition("/")[0]
    return parent or ROOT


def base_name(path: str) -> str:
    """Return the last segment of path ('' for root)."""
    return strip_trailing(normalize(path)).rpartition("/")[2]


def relative_to(path: str, base: Optional[str]) -> Optional[str]:
    """
    Return path relative to base (no leading '/').

    Returns None when path is not inside base. Segment boundaries are
    respected: '/docsx/a' is not inside '/docs'.
    """
    p = strip_trailing(normalize(path))
    b = strip_trailing(normalize(base or ROOT))
    if b == ROOT:
        return p.lstrip("/")
    if p == b:
        return ""
    if p.startswith(b + "/"):
        return p[len(b) + 1:]
    return None
