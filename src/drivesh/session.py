"""Shell session: persisted state, live adapters and the temp cache dir."""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Optional

from drivesh.config import Settings
from drivesh.errors import InvalidArgumentError
from drivesh.models import Drive
from drivesh.providers import PROVIDERS, ProviderAdapter, create_adapter
from drivesh.state import ClipStore, DriveRegistry, StateStore, append_history

logger = logging.getLogger(__name__)

AdapterFactory = Callable[..., ProviderAdapter]


class Session:
    """
    Everything one shell run works with.

    Notes:
        - Registry, clips and history are loaded from the state file on
          construction and written back by flush().
        - Adapters are created lazily, one per drive, and closed with the
          session.
        - Fetched files live in a temp dir removed on close().
    """

    def __init__(
        self,
        settings: Settings,
        *,
        store: Optional[StateStore] = None,
        adapter_factory: AdapterFactory = create_adapter,
        cache_dir: Optional[str] = None,
    ) -> None:
        self.settings = settings
        self.store = store if store is not None else StateStore(settings.state_file)
        self._adapter_factory = adapter_factory
        self._adapters: dict[str, ProviderAdapter] = {}

        self._owns_cache_dir = cache_dir is None
        self.cache_dir = cache_dir if cache_dir is not None else tempfile.mkdtemp(prefix="drivesh-")

        self._load(self.store.load())

    @classmethod
    @asynccontextmanager
    async def open(cls, settings: Settings, **kwargs: Any) -> AsyncIterator[Session]:
        session = cls(settings, **kwargs)
        try:
            yield session
        finally:
            await session.close()

    # ----------------------------
    # State
    # ----------------------------
    @property
    def needs_setup(self) -> bool:
        return not self.setup_done or len(self.registry) == 0

    def record_history(self, line: str) -> None:
        self.history = append_history(self.history, line)

    def mark_setup_done(self) -> None:
        self.setup_done = True

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.registry.to_dict(),
            "history": list(self.history),
            "clips": self.clips.to_dict(),
            "setup_done": self.setup_done,
        }

    def flush(self) -> None:
        """Copy adapter auth state back into the registry and save."""
        for name, adapter in self._adapters.items():
            if name in self.registry and adapter.auth_state != self.registry.get(name).auth_state:
                self.registry.update_auth_state(name, adapter.auth_state)
        self.store.save(self.to_dict())

    async def reset(self) -> None:
        """Discard drives, clips and history (first-time setup runs again)."""
        await self._close_adapters()
        self.store.reset()
        self._load({})

    # ----------------------------
    # Adapters
    # ----------------------------
    def adapter_for(self, drive_name: str) -> ProviderAdapter:
        drive = self.registry.get(drive_name)
        adapter = self._adapters.get(drive_name)
        if adapter is None or adapter.provider_id != drive.provider_id:
            adapter = self._adapter_factory(drive, cache_dir=self.cache_dir, settings=self.settings)
            self._adapters[drive_name] = adapter
        return adapter

    def new_adapter(self, drive_name: str, provider_id: str) -> ProviderAdapter:
        """Build an adapter for a drive that does not exist yet."""
        if provider_id not in PROVIDERS:
            raise InvalidArgumentError(
                f"Unknown provider {provider_id!r}",
                details={"provider": provider_id},
            )
        drive = Drive(name=drive_name, provider_id=provider_id)
        return self._adapter_factory(drive, cache_dir=self.cache_dir, settings=self.settings)

    def attach_adapter(self, drive_name: str, adapter: ProviderAdapter) -> None:
        self._adapters[drive_name] = adapter

    async def close(self) -> None:
        try:
            self.flush()
        finally:
            await self._close_adapters()
            if self._owns_cache_dir:
                shutil.rmtree(self.cache_dir, ignore_errors=True)

    # ----------------------------
    # Internals
    # ----------------------------
    def _load(self, data: dict[str, Any]) -> None:
        self.registry = DriveRegistry.from_dict(data, known_providers=PROVIDERS)
        self.clips = ClipStore.from_dict(data.get("clips"))
        history = data.get("history")
        self.history: list[str] = [h for h in history if isinstance(h, str)] if isinstance(history, list) else []
        self.setup_done = bool(data.get("setup_done"))

    async def _close_adapters(self) -> None:
        adapters, self._adapters = list(self._adapters.values()), {}
        for adapter in adapters:
            await adapter.aclose()
