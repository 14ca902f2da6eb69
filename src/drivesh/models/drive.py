"""Drive: a named provider binding plus a working path."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(slots=True)
class Drive:
    """
    A user-configured drive.

    Notes:
        - current_path is "" for a fresh drive (root) or a '/'-rooted path.
        - auth_state belongs to the provider adapter; the core only stores it.
    """

    name: str
    provider_id: Optional[str]
    current_path: str = ""
    auth_state: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider_id,
            "path": self.current_path,
            "auth": dict(self.auth_state),
        }

    @classmethod
    def from_dict(cls, name: str, data: Any) -> Drive:
        """Tolerant load: a corrupt record yields a drive with no provider."""
        if not isinstance(data, dict):
            return cls(name=name, provider_id=None)

        provider = data.get("provider")
        path = data.get("path")
        auth = data.get("auth")
        return cls(
            name=name,
            provider_id=provider if isinstance(provider, str) and provider else None,
            current_path=path if isinstance(path, str) else "",
            auth_state=dict(auth) if isinstance(auth, dict) else {},
        )
