"""Site settings against ``/settings``."""

from __future__ import annotations

from newsdesk.api.client import APIClient
from newsdesk.errors import UnexpectedResponseError
from newsdesk.models import PublicSettings, SiteSetting


class SettingsService:
    def __init__(self, client: APIClient) -> None:
        self._client = client

    def get(self) -> dict[str, SiteSetting]:
        data = self._client.get("/settings") or {}
        if not isinstance(data, dict):
            raise UnexpectedResponseError(payload=data)
        return {key: SiteSetting.from_response(value) for key, value in data.items()}

    def update(self, values: dict[str, str]) -> str:
        """Save the whole settings map; returns the backend's message."""
        data = self._client.put("/settings", values) or {}
        return data.get("message", "") if isinstance(data, dict) else ""

    def get_public(self) -> PublicSettings:
        return PublicSettings.from_response(self._client.get("/settings/public") or {})
