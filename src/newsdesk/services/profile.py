"""The logged-in user's profile against ``/auth/profile``."""

from __future__ import annotations

from typing import Any

from newsdesk.api.client import APIClient
from newsdesk.models import ProfileUpdateResult, UserProfile


class ProfileService:
    def __init__(self, client: APIClient) -> None:
        self._client = client

    def get(self) -> UserProfile:
        return UserProfile.from_response(self._client.get("/auth/profile"))

    def update(self, data: dict[str, Any]) -> ProfileUpdateResult:
        """Send only the changed fields (username, email, currentPassword, newPassword)."""
        return ProfileUpdateResult.from_response(self._client.put("/auth/profile", data) or {})
