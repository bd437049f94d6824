"""Dashboard counters."""

from __future__ import annotations

from newsdesk.models import DashboardStats
from newsdesk.pages.base import Page


class DashboardPage(Page):
    stats: DashboardStats | None = None

    def load(self) -> DashboardStats | None:
        ok, stats = self._attempt(
            lambda: self.query.fetch(("dashboard-stats",), self.services.dashboard.stats),
            "Failed to load dashboard",
        )
        if ok:
            self.stats = stats
        return self.stats
