"""Runtime settings resolved from constants and environment overrides."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from portal_app.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_HOST,
    DEFAULT_PORT,
    REQUEST_TIMEOUT_SECONDS,
)

_DEFAULT_STORAGE_PATH = Path.home() / ".portalqt" / "storage.json"


@dataclass(slots=True)
class PortalSettings:
    """Where the external API lives and how the local candidate server is exposed."""

    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout_seconds: float = REQUEST_TIMEOUT_SECONDS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    storage_path: Path = _DEFAULT_STORAGE_PATH

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> PortalSettings:
        env = os.environ if environ is None else environ
        try:
            timeout = float(env.get("PORTAL_API_TIMEOUT", REQUEST_TIMEOUT_SECONDS))
            port = int(env.get("PORTAL_PORT", DEFAULT_PORT))
        except ValueError as exc:
            raise ValueError(f"Invalid numeric portal setting: {exc}") from exc
        if timeout <= 0:
            raise ValueError("PORTAL_API_TIMEOUT must be positive.")
        return cls(
            api_base_url=env.get("PORTAL_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
            api_timeout_seconds=timeout,
            host=env.get("PORTAL_HOST", DEFAULT_HOST),
            port=port,
            storage_path=Path(env.get("PORTAL_STORAGE_PATH", str(_DEFAULT_STORAGE_PATH))),
        )
