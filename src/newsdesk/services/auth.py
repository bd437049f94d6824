"""Login and logout against ``/auth/login``."""

from __future__ import annotations

import logging

from newsdesk.api.client import APIClient
from newsdesk.models import LoginResult

logger = logging.getLogger(__name__)


def login_credentials(identifier: str, password: str) -> dict[str, str]:
    """Build the login payload: an identifier with "@" is an email."""
    if "@" in identifier:
        return {"email": identifier, "password": password}
    return {"username": identifier, "password": password}


class AuthService:
    def __init__(self, client: APIClient) -> None:
        self._client = client

    def login(self, identifier: str, password: str) -> LoginResult:
        """Exchange credentials for a token and persist it."""
        data = self._client.post("/auth/login", login_credentials(identifier, password), auth=False)
        result = LoginResult.from_response(data)
        if self._client.token_store is not None:
            self._client.token_store.set(result.token)
        logger.info("Logged in as %s", result.user.username or result.user.email)
        return result

    def logout(self) -> None:
        if self._client.token_store is not None:
            self._client.token_store.clear()

    @property
    def is_authenticated(self) -> bool:
        store = self._client.token_store
        return store is not None and store.is_authenticated
