"""Article CRUD against ``/articles``."""

from __future__ import annotations

from typing import Any

from newsdesk.api.client import APIClient
from newsdesk.models import Article, ArticlePage


class ArticlesService:
    def __init__(self, client: APIClient) -> None:
        self._client = client

    def list(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
        status: str | None = None,
        category: int | None = None,
        search: str | None = None,
    ) -> ArticlePage:
        params = {
            "page": page,
            "limit": limit,
            "status": status,
            "category": category,
            "search": search,
        }
        return ArticlePage.from_response(self._client.get("/articles", params=params))

    def get(self, article_id: int) -> Article:
        return Article.from_response(self._client.get(f"/articles/{article_id}"))

    def create(self, data: dict[str, Any]) -> Article:
        return Article.from_response(self._client.post("/articles", data))

    def update(self, article_id: int, data: dict[str, Any]) -> Article:
        return Article.from_response(self._client.put(f"/articles/{article_id}", data))

    def delete(self, article_id: int) -> None:
        self._client.delete(f"/articles/{article_id}")
