"""Login screen."""

from __future__ import annotations

from newsdesk.models import LoginResult
from newsdesk.pages.base import Page

LOGIN_FAILED = "Invalid username/email or password"


class LoginPage(Page):
    """Username-or-email login; the token is persisted by the auth service."""

    result: LoginResult | None = None

    def submit(self, identifier: str, password: str) -> LoginResult | None:
        identifier = identifier.strip()
        ok, result = self._attempt(
            lambda: self.services.auth.login(identifier, password),
            LOGIN_FAILED,
        )
        if ok:
            self.result = result
            self.query.clear()
        return result

    def logout(self) -> None:
        self.services.auth.logout()
        self.query.clear()
