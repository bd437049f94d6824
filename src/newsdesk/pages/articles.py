"""Article list: pagination, search, status filter, selection, bulk actions."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from newsdesk.models import Article, ArticlePage, ArticleStatus
from newsdesk.pages.base import Confirm, Page, always_confirm
from newsdesk.query import QueryClient
from newsdesk.services import Services

logger = logging.getLogger(__name__)

PAGE_SIZE = 10
MAX_PARALLEL_REQUESTS = 8


class ArticleListPage(Page):
    """State of the articles screen.

    The selection is a set of ids that survives page changes; it is only
    cleared after a bulk action succeeds.
    """

    def __init__(
        self,
        services: Services,
        query: QueryClient,
        confirm: Confirm = always_confirm,
        *,
        page_size: int = PAGE_SIZE,
    ) -> None:
        super().__init__(services, query, confirm)
        self.page_size = page_size
        self.page = 1
        self.search = ""
        self.status_filter: ArticleStatus | None = None
        self.selected: set[int] = set()
        self.data: ArticlePage | None = None

    @property
    def query_key(self) -> tuple:
        status = str(self.status_filter) if self.status_filter else None
        return ("articles", self.page, self.search, status)

    @property
    def articles(self) -> list[Article]:
        return self.data.articles if self.data else []

    @property
    def total(self) -> int:
        return self.data.total if self.data else 0

    def load(self) -> ArticlePage | None:
        status = str(self.status_filter) if self.status_filter else None

        def read() -> ArticlePage:
            return self.services.articles.list(
                page=self.page,
                limit=self.page_size,
                search=self.search or None,
                status=status,
            )

        self.loading = True
        try:
            ok, data = self._attempt(
                lambda: self.query.fetch(self.query_key, read),
                "Failed to load articles",
            )
        finally:
            self.loading = False
        if ok:
            self.data = data
        return self.data

    # ── Filters and pagination ───────────────────────────────────

    def set_search(self, search: str) -> None:
        self.search = search
        self.page = 1

    def set_status_filter(self, status: ArticleStatus | str | None) -> None:
        self.status_filter = ArticleStatus(status) if status else None
        self.page = 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page * self.page_size < self.total

    def next_page(self) -> None:
        if self.has_next:
            self.page += 1

    def previous_page(self) -> None:
        self.page = max(1, self.page - 1)

    def showing_range(self) -> tuple[int, int]:
        """1-based first/last row numbers shown on the current page."""
        if not self.total:
            return 0, 0
        first = (self.page - 1) * self.page_size + 1
        return first, min(self.page * self.page_size, self.total)

    # ── Selection ────────────────────────────────────────────────

    def toggle_select(self, article_id: int) -> None:
        if article_id in self.selected:
            self.selected.discard(article_id)
        else:
            self.selected.add(article_id)

    def toggle_select_all(self) -> None:
        page_ids = {article.id for article in self.articles}
        if page_ids and len(self.selected) == len(page_ids):
            self.selected = set()
        else:
            self.selected = page_ids

    # ── Mutations ────────────────────────────────────────────────

    def _refresh(self) -> None:
        self.query.invalidate(("articles",))
        self.load()

    def delete(self, article_id: int) -> bool:
        if not self._confirmed("Are you sure you want to delete this article?"):
            return False
        ok, _ = self._attempt(
            lambda: self.query.mutate(lambda: self.services.articles.delete(article_id)),
            "Failed to delete article",
        )
        if ok:
            self.selected.discard(article_id)
            self._refresh()
        return ok

    def _run_bulk(self, action, ids: list[int], fallback: str) -> bool:
        def run_all() -> None:
            with ThreadPoolExecutor(max_workers=min(MAX_PARALLEL_REQUESTS, len(ids))) as pool:
                list(pool.map(action, ids))

        ok, _ = self._attempt(lambda: self.query.mutate(run_all), fallback)
        if ok:
            logger.info("Bulk action applied to %d article(s)", len(ids))
            self.selected = set()
            self._refresh()
        return ok

    def bulk_set_status(self, status: ArticleStatus | str) -> bool:
        """Set ``status`` on every selected article, one request per id."""
        status = ArticleStatus(status)
        ids = sorted(self.selected)
        if not ids:
            return False
        if not self._confirmed(f"Change status of {len(ids)} article(s) to {status}?"):
            return False
        return self._run_bulk(
            lambda article_id: self.services.articles.update(article_id, {"status": str(status)}),
            ids,
            "Failed to update articles",
        )

    def bulk_delete(self) -> bool:
        ids = sorted(self.selected)
        if not ids:
            return False
        if not self._confirmed(f"Are you sure you want to delete {len(ids)} article(s)?"):
            return False
        return self._run_bulk(self.services.articles.delete, ids, "Failed to delete articles")
