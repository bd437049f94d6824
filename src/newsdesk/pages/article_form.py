"""Create/edit form for a single article, including its media gallery."""

from __future__ import annotations

import logging
from typing import Any

from newsdesk.errors import ValidationError
from newsdesk.gallery import MediaGallery
from newsdesk.models import Article, ArticleStatus, Category
from newsdesk.pages.base import Confirm, Page, always_confirm
from newsdesk.query import QueryClient
from newsdesk.schedule import to_input_value, to_payload_value
from newsdesk.services import Services

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title",
    "excerpt",
    "body",
    "category_id",
    "meta_title",
    "meta_description",
    "status",
    "scheduled_publish_date",
)


def _empty_fields() -> dict[str, Any]:
    return {
        "title": "",
        "excerpt": "",
        "body": "",
        "category_id": None,
        "meta_title": "",
        "meta_description": "",
        "status": ArticleStatus.DRAFT,
        "scheduled_publish_date": "",
    }


class ArticleForm(Page):
    """Form state for ``/articles/new`` and ``/articles/<id>/edit``."""

    def __init__(
        self,
        services: Services,
        query: QueryClient,
        confirm: Confirm = always_confirm,
        *,
        article_id: int | None = None,
    ) -> None:
        super().__init__(services, query, confirm)
        self.article_id = article_id
        self.fields: dict[str, Any] = _empty_fields()
        self.featured_image: str | None = None
        self.gallery = MediaGallery(services.media)
        self.categories: list[Category] = []
        self.saved: Article | None = None

    @property
    def is_edit(self) -> bool:
        return self.article_id is not None

    def load(self) -> None:
        ok, categories = self._attempt(
            lambda: self.query.fetch(("categories",), self.services.categories.list),
            "Failed to load categories",
        )
        if ok:
            self.categories = categories
        if not self.is_edit:
            return

        article_id = self.article_id
        ok, article = self._attempt(
            lambda: self.query.fetch(
                ("article", article_id),
                lambda: self.services.articles.get(article_id),
            ),
            "Failed to load article",
        )
        if ok:
            self.fill(article)

    def fill(self, article: Article) -> None:
        """Copy a fetched article into the form fields."""
        self.fields = {
            "title": article.title,
            "excerpt": article.excerpt or "",
            "body": article.body,
            "category_id": article.category_id,
            "meta_title": article.meta_title or "",
            "meta_description": article.meta_description or "",
            "status": article.status,
            "scheduled_publish_date": to_input_value(article.scheduled_publish_date),
        }
        self.featured_image = article.featured_image
        self.gallery = MediaGallery.from_article(article, self.services.media)

    def set(self, field: str, value: Any) -> None:
        if field not in EDITABLE_FIELDS:
            raise KeyError(field)
        if field == "status":
            value = ArticleStatus(value)
        self.fields[field] = value

    def payload(self) -> dict[str, Any]:
        """Body sent to the backend on save."""
        data: dict[str, Any] = {
            "title": self.fields["title"],
            "excerpt": self.fields["excerpt"],
            "body": self.fields["body"],
            "category_id": self.fields["category_id"],
            "meta_title": self.fields["meta_title"],
            "meta_description": self.fields["meta_description"],
            "status": str(self.fields["status"]),
            "scheduled_publish_date": to_payload_value(self.fields["scheduled_publish_date"]),
        }
        if self.featured_image is not None:
            data["featured_image"] = self.featured_image
        return self.gallery.apply_to(data)

    def _validate(self) -> None:
        if not str(self.fields["title"]).strip():
            raise ValidationError("Title is required")
        if not str(self.fields["body"]).strip():
            raise ValidationError("Body is required")

    def submit(self) -> Article | None:
        """Create or update the article; on success invalidate the list."""

        def save() -> Article:
            self._validate()
            data = self.payload()
            if self.is_edit:
                return self.services.articles.update(self.article_id, data)
            return self.services.articles.create(data)

        invalidates: tuple[tuple, ...] = (("articles",),)
        if self.is_edit:
            invalidates += (("article", self.article_id),)
        ok, article = self._attempt(
            lambda: self.query.mutate(save, invalidates=invalidates),
            "Failed to save article",
        )
        if ok:
            self.saved = article
            logger.info("Saved article %s", article.id)
        return article
