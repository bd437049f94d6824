"""Dashboard counters from ``/dashboard/stats``."""

from __future__ import annotations

from newsdesk.api.client import APIClient
from newsdesk.models import DashboardStats


class DashboardService:
    def __init__(self, client: APIClient) -> None:
        self._client = client

    def stats(self) -> DashboardStats:
        return DashboardStats.from_response(self._client.get("/dashboard/stats") or {})
