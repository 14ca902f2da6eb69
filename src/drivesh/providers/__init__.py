"""Provider adapters and the closed provider registry."""

from __future__ import annotations

from drivesh.config import Settings
from drivesh.errors import InvalidStateError
from drivesh.models import Drive

from .base import AskFn, ProviderAdapter
from .files_api import FilesApiAdapter
from .google_drive import GoogleDriveAdapter
from .hard_drive import HardDriveAdapter

PROVIDERS: dict[str, type[ProviderAdapter]] = {
    HardDriveAdapter.provider_id: HardDriveAdapter,
    FilesApiAdapter.provider_id: FilesApiAdapter,
    GoogleDriveAdapter.provider_id: GoogleDriveAdapter,
}


def provider_ids() -> list[str]:
    return list(PROVIDERS)


def create_adapter(drive: Drive, *, cache_dir: str, settings: Settings) -> ProviderAdapter:
    """Instantiate the adapter registered for the drive's provider."""
    cls = PROVIDERS.get(drive.provider_id or "")
    if cls is None:
        raise InvalidStateError(
            f"Drive {drive.name} has no usable provider",
            details={"drive": drive.name, "provider": drive.provider_id},
        )
    return cls(drive.name, drive.auth_state, cache_dir=cache_dir, settings=settings)


__all__ = [
    "AskFn",
    "ProviderAdapter",
    "HardDriveAdapter",
    "FilesApiAdapter",
    "GoogleDriveAdapter",
    "PROVIDERS",
    "provider_ids",
    "create_adapter",
]
