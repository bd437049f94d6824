"""Category CRUD against ``/categories``."""

from __future__ import annotations

import builtins
from typing import Any

from newsdesk.api.client import APIClient
from newsdesk.models import Category


class CategoriesService:
    def __init__(self, client: APIClient) -> None:
        self._client = client

    def list(self) -> builtins.list[Category]:
        return Category.list_from_response(self._client.get("/categories"))

    def get(self, category_id: int) -> Category:
        return Category.from_response(self._client.get(f"/categories/{category_id}"))

    def create(self, data: dict[str, Any]) -> Category:
        return Category.from_response(self._client.post("/categories", data))

    def update(self, category_id: int, data: dict[str, Any]) -> Category:
        return Category.from_response(self._client.put(f"/categories/{category_id}", data))

    def delete(self, category_id: int) -> None:
        self._client.delete(f"/categories/{category_id}")
