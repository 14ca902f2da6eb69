"""Drive registry: configured drives and the active drive."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from drivesh.errors import (
    DuplicateDriveError,
    InvalidStateError,
    InvalidNameError,
    NoValidDriveError,
    UnknownDriveError,
)
from drivesh.models import Drive

logger = logging.getLogger(__name__)


def validate_drive_name(name: str) -> None:
    """Raise InvalidNameError if name is empty or contains ':' or whitespace."""
    if not isinstance(name, str) or not name:
        raise InvalidNameError("Drive name must not be empty")
    if ":" in name or any(ch.isspace() for ch in name):
        raise InvalidNameError(
            "Drive name must not contain ':' or whitespace",
            details={"name": name},
        )


class DriveRegistry:
    """
    Set of configured drives plus the name of the active one.

    The active drive is never handed out dangling: active() repairs the
    reference first when it points at a missing or provider-less drive.
    """

    def __init__(
        self,
        drives: Optional[Iterable[Drive]] = None,
        active_name: Optional[str] = None,
        *,
        known_providers: Optional[Iterable[str]] = None,
    ) -> None:
        self._drives: dict[str, Drive] = {}
        for drive in drives or ():
            self._drives[drive.name] = drive
        self._active_name = active_name
        self._known_providers = (
            frozenset(known_providers) if known_providers is not None else None
        )

    # ----------------------------
    # Read APIs
    # ----------------------------
    @property
    def active_name(self) -> Optional[str]:
        return self._active_name

    def names(self) -> list[str]:
        return list(self._drives)

    def __len__(self) -> int:
        return len(self._drives)

    def __contains__(self, name: object) -> bool:
        return name in self._drives

    def get(self, name: str) -> Drive:
        try:
            return self._drives[name]
        except KeyError:
            raise UnknownDriveError(
                f"Invalid drive name - choose one of these - {', '.join(self._drives) or '(none)'}",
                details={"name": name},
            ) from None

    def is_valid(self, drive: Drive) -> bool:
        if not drive.provider_id:
            return False
        if self._known_providers is not None:
            return drive.provider_id in self._known_providers
        return True

    def needs_repair(self) -> bool:
        drive = self._drives.get(self._active_name or "")
        return drive is None or not self.is_valid(drive)

    def active(self) -> Drive:
        """
        Return the active drive, repairing the reference if needed.

        Raises:
            NoValidDriveError: if no drive can become active.
        """
        if self.needs_repair():
            self.repair()
        return self._drives[self._active_name]  # type: ignore[index]

    # ----------------------------
    # Mutations
    # ----------------------------
    def ensure_available(self, name: str) -> None:
        """Validate a name for a new drive without creating it."""
        validate_drive_name(name)
        if name in self._drives:
            raise DuplicateDriveError(
                f"A drive named {name} already exists",
                details={"name": name},
            )

    def create(
        self,
        name: str,
        provider_id: str,
        auth_state: Optional[dict[str, Any]] = None,
    ) -> Drive:
        """Create a drive at root and make it active."""
        self.ensure_available(name)
        drive = Drive(
            name=name,
            provider_id=provider_id,
            current_path="",
            auth_state=dict(auth_state or {}),
        )
        self._require_valid(drive)
        self._drives[name] = drive
        self._active_name = name
        logger.info("Created drive %s (%s)", name, provider_id)
        return drive

    def switch(self, name: str) -> Drive:
        drive = self.get(name)
        self._require_valid(drive)
        self._active_name = name
        return drive

    def repair(self) -> Drive:
        """
        Point the active reference at the first drive with a valid provider.

        Returns:
            The drive that became active (callers report the substitution).

        Raises:
            NoValidDriveError: if no drive has a valid provider.
        """
        for name, drive in self._drives.items():
            if self.is_valid(drive):
                logger.warning(
                    "Active drive %r is not valid; switching to %s",
                    self._active_name,
                    name,
                )
                self._active_name = name
                return drive

        raise NoValidDriveError(
            "No valid drive was found",
            details={"drives": list(self._drives), "active": self._active_name},
        )

    def set_path(self, name: str, path: str) -> None:
        self.get(name).current_path = path

    def update_auth_state(self, name: str, auth_state: dict[str, Any]) -> None:
        self.get(name).auth_state = dict(auth_state)

    def _require_valid(self, drive: Drive) -> None:
        if not self.is_valid(drive):
            raise InvalidStateError(
                f"Drive {drive.name} has no usable provider",
                details={"drive": drive.name, "provider": drive.provider_id},
            )

    # ----------------------------
    # Persistence
    # ----------------------------
    def to_dict(self) -> dict[str, Any]:
        return {
            "drives": {name: d.to_dict() for name, d in self._drives.items()},
            "current_drive": self._active_name,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        known_providers: Optional[Iterable[str]] = None,
    ) -> DriveRegistry:
        raw = data.get("drives")
        drives = (
            [Drive.from_dict(str(name), value) for name, value in raw.items()]
            if isinstance(raw, dict)
            else []
        )
        active = data.get("current_drive")
        return cls(
            drives,
            active if isinstance(active, str) else None,
            known_providers=known_providers,
        )
