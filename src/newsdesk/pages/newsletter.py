"""Newsletter subscriber list."""

from __future__ import annotations

from newsdesk.models import NewsletterSubscriber
from newsdesk.pages.base import Confirm, Page, always_confirm
from newsdesk.query import QueryClient
from newsdesk.services import Services

QUERY_KEY = ("newsletter-subscribers",)


class NewsletterPage(Page):
    def __init__(
        self,
        services: Services,
        query: QueryClient,
        confirm: Confirm = always_confirm,
    ) -> None:
        super().__init__(services, query, confirm)
        self.subscribers: list[NewsletterSubscriber] = []

    def load(self) -> list[NewsletterSubscriber]:
        ok, subscribers = self._attempt(
            lambda: self.query.fetch(QUERY_KEY, self.services.newsletter.list),
            "Failed to load subscribers",
        )
        if ok:
            self.subscribers = subscribers
        return self.subscribers

    def remove(self, subscriber_id: int) -> bool:
        if not self._confirmed("Are you sure you want to remove this subscriber?"):
            return False
        ok, _ = self._attempt(
            lambda: self.query.mutate(
                lambda: self.services.newsletter.delete(subscriber_id),
                invalidates=(QUERY_KEY,),
            ),
            "Failed to remove subscriber",
        )
        if ok:
            self.load()
        return ok
