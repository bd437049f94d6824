"""Tag CRUD against ``/tags``."""

from __future__ import annotations

import builtins
from typing import Any

from newsdesk.api.client import APIClient
from newsdesk.models import Tag


class TagsService:
    def __init__(self, client: APIClient) -> None:
        self._client = client

    def list(self) -> builtins.list[Tag]:
        return Tag.list_from_response(self._client.get("/tags"))

    def get(self, tag_id: int) -> Tag:
        return Tag.from_response(self._client.get(f"/tags/{tag_id}"))

    def create(self, data: dict[str, Any]) -> Tag:
        return Tag.from_response(self._client.post("/tags", data))

    def update(self, tag_id: int, data: dict[str, Any]) -> Tag:
        return Tag.from_response(self._client.put(f"/tags/{tag_id}", data))

    def delete(self, tag_id: int) -> None:
        self._client.delete(f"/tags/{tag_id}")
