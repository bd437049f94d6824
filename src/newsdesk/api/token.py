"""Persistent storage of the login token.

The token lives in a small JSON credentials file under a fixed key. Its
presence is the only authentication check; there is no expiry or refresh.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class TokenStore:
    """Read, write, and clear the stored bearer token."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            logger.warning("Corrupt credentials file at %s, ignoring", self._path)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> str | None:
        token = self._load().get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        data = self._load()
        data[TOKEN_KEY] = token
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        try:
            self._path.chmod(0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", self._path)

    def clear(self) -> None:
        data = self._load()
        if TOKEN_KEY not in data:
            return
        del data[TOKEN_KEY]
        if data:
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        else:
            self._path.unlink(missing_ok=True)

    @property
    def is_authenticated(self) -> bool:
        return self.get() is not None
