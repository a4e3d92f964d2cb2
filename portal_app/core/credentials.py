"""Token storage and the credential provider handed to the API client.

Tokens are kept under the ``adminToken`` and ``userToken`` keys of a
``TokenStore``. Callers pass a ``CredentialProvider`` to the client explicitly,
which lets tests inject fake credentials without touching disk.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Protocol

from portal_app.constants.session_constants import ADMIN_TOKEN_KEY, USER_TOKEN_KEY

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    """Anything able to hand out the token for the next request."""

    def get_token(self) -> str | None: ...


class TokenStore:
    """In-memory key/value token storage."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._lock = Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value
            self._persist()

    def remove(self, key: str) -> None:
        with self._lock:
            if self._values.pop(key, None) is not None:
                self._persist()

    def _persist(self) -> None:
        """Hook for subclasses that keep tokens across restarts."""


class FileTokenStore(TokenStore):
    """Token storage backed by a small JSON file in the user's home directory."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self._path = path
        self._values = self._load()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable token storage %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): str(value) for key, value in data.items() if value}

    def _persist(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._values, indent=2), encoding="utf-8")


class StoredCredentials:
    """Admin token if present, else the candidate token."""

    def __init__(self, store: TokenStore) -> None:
        self._store = store

    def get_token(self) -> str | None:
        return self._store.get(ADMIN_TOKEN_KEY) or self._store.get(USER_TOKEN_KEY)


class StaticCredentials:
    """Fixed token, mostly useful for scripts and tests."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token
