"""Comment moderation against ``/comments``."""

from __future__ import annotations

import builtins

from newsdesk.api.client import APIClient
from newsdesk.models import Comment, CommentStatus


class CommentsService:
    def __init__(self, client: APIClient) -> None:
        self._client = client

    def list(
        self,
        *,
        status: str | None = None,
        article_id: int | None = None,
    ) -> builtins.list[Comment]:
        rows = self._client.get("/comments", params={"status": status, "article_id": article_id})
        return Comment.list_from_response(rows)

    def update_status(self, comment_id: int, status: CommentStatus | str) -> Comment:
        data = self._client.put(f"/comments/{comment_id}", {"status": str(status)})
        return Comment.from_response(data)

    def delete(self, comment_id: int) -> None:
        self._client.delete(f"/comments/{comment_id}")
