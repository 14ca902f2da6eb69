from __future__ import annotations

import uuid


def new_fetch_id() -> str:
    """Generate a directory name for one fetch inside the session cache."""
    return uuid.uuid4().hex[:12]
