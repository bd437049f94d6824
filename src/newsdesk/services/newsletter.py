"""Newsletter subscribers against ``/newsletter/subscribers``."""

from __future__ import annotations

import builtins

from newsdesk.api.client import APIClient
from newsdesk.models import NewsletterSubscriber


class NewsletterService:
    def __init__(self, client: APIClient) -> None:
        self._client = client

    def list(self) -> builtins.list[NewsletterSubscriber]:
        rows = self._client.get("/newsletter/subscribers")
        return NewsletterSubscriber.list_from_response(rows)

    def delete(self, subscriber_id: int) -> None:
        self._client.delete(f"/newsletter/subscribers/{subscriber_id}")
