"""Runtime settings (environment variables, overridable from the CLI)."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

DEFAULT_SERVER = "http://localhost:8080"
DEFAULT_HOME = os.path.join("~", ".config", "drivesh")


@dataclass(frozen=True)
class Settings:
    """
    Settings for one shell session.

    Environment:
        - DRIVESH_HOME: state directory (state.json, Google token files)
        - DRIVESH_SERVER: default address of a files API server
        - DRIVESH_LOG_LEVEL: logging level name (default WARNING)
        - DRIVESH_HTTP_TIMEOUT: seconds for files API requests (default 30)
    """

    home: str
    server: str = DEFAULT_SERVER
    log_level: str = "WARNING"
    http_timeout: float = 30.0

    @property
    def state_file(self) -> str:
        return os.path.join(self.home, "state.json")

    @property
    def tokens_dir(self) -> str:
        return os.path.join(self.home, "tokens")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        env = os.environ if environ is None else environ

        home = env.get("DRIVESH_HOME", "").strip() or DEFAULT_HOME
        server = env.get("DRIVESH_SERVER", "").strip() or DEFAULT_SERVER
        log_level = env.get("DRIVESH_LOG_LEVEL", "").strip().upper() or "WARNING"

        timeout_raw = env.get("DRIVESH_HTTP_TIMEOUT", "").strip()
        try:
            http_timeout = float(timeout_raw) if timeout_raw else 30.0
        except ValueError:
            raise ValueError(f"DRIVESH_HTTP_TIMEOUT must be a number: {timeout_raw!r}") from None

        return cls(
            home=os.path.expanduser(home),
            server=server.rstrip("/"),
            log_level=log_level,
            http_timeout=http_timeout,
        )

    def with_overrides(
        self,
        *,
        home: Optional[str] = None,
        server: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> Settings:
        return replace(
            self,
            home=os.path.expanduser(home) if home else self.home,
            server=server.rstrip("/") if server else self.server,
            log_level=log_level.upper() if log_level else self.log_level,
        )
