from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Optional


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC3339 timestamp string into tz-aware UTC datetime.

    Accepts strings like:
      - 2025-01-01T12:34:56Z
      - 2025-01-01T12:34:56.123Z
      - 2025-01-01T12:34:56+09:00
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)  # raises ValueError if invalid
    if dt.tzinfo is None:
        raise ValueError("naive timestamp is not allowed; offset required")
    return dt.astimezone(timezone.utc)


def to_rfc3339(dt: datetime) -> str:
    """Convert tz-aware datetime to RFC3339 (UTC, with 'Z')."""
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    s = dt.astimezone(timezone.utc).isoformat(timespec="microseconds")
    return s.replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Best-effort timestamp parsing for provider payloads.

    Providers report times as RFC3339 strings, epoch milliseconds, or not at
    all (null/NaN). Anything unparseable becomes None instead of failing the
    whole listing.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        try:
            return parse_rfc3339(value)
        except ValueError:
            return None

    return None


def from_epoch_seconds(value: float) -> datetime:
    """Convert a local filesystem timestamp (seconds) to tz-aware UTC."""
    return datetime.fromtimestamp(value, tz=timezone.utc)
