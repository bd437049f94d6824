"""Comment moderation screen."""

from __future__ import annotations

from newsdesk.models import Comment, CommentStatus
from newsdesk.pages.base import Confirm, Page, always_confirm
from newsdesk.query import QueryClient
from newsdesk.services import Services


class CommentListPage(Page):
    """Comments filtered by status; any status can move to any other."""

    def __init__(
        self,
        services: Services,
        query: QueryClient,
        confirm: Confirm = always_confirm,
    ) -> None:
        super().__init__(services, query, confirm)
        self.status_filter: CommentStatus | None = None
        self.article_id: int | None = None
        self.comments: list[Comment] = []

    @property
    def query_key(self) -> tuple:
        status = str(self.status_filter) if self.status_filter else None
        return ("comments", status, self.article_id)

    def set_status_filter(self, status: CommentStatus | str | None) -> None:
        self.status_filter = CommentStatus(status) if status else None

    def load(self) -> list[Comment]:
        status = str(self.status_filter) if self.status_filter else None
        ok, comments = self._attempt(
            lambda: self.query.fetch(
                self.query_key,
                lambda: self.services.comments.list(status=status, article_id=self.article_id),
            ),
            "Failed to load comments",
        )
        if ok:
            self.comments = comments
        return self.comments

    @staticmethod
    def available_actions(comment: Comment) -> list[CommentStatus]:
        """Statuses the comment can be moved to (all but its current one)."""
        return [status for status in CommentStatus if status != comment.status]

    def _refresh(self) -> None:
        self.query.invalidate(("comments",))
        self.load()

    def set_status(self, comment_id: int, status: CommentStatus | str) -> bool:
        status = CommentStatus(status)
        ok, _ = self._attempt(
            lambda: self.query.mutate(
                lambda: self.services.comments.update_status(comment_id, status)
            ),
            "Failed to update comment",
        )
        if ok:
            self._refresh()
        return ok

    def delete(self, comment_id: int) -> bool:
        if not self._confirmed("Are you sure you want to delete this comment?"):
            return False
        ok, _ = self._attempt(
            lambda: self.query.mutate(lambda: self.services.comments.delete(comment_id)),
            "Failed to delete comment",
        )
        if ok:
            self._refresh()
        return ok
