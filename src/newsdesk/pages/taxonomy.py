"""Category and tag screens: a list plus a create/edit modal form."""

from __future__ import annotations

import logging
import re
from typing import Any

from newsdesk.errors import ValidationError
from newsdesk.models import Category, Tag
from newsdesk.pages.base import Confirm, Page, always_confirm
from newsdesk.query import QueryClient
from newsdesk.services import Services

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Lowercase and turn whitespace runs into hyphens ("Breaking News" → "breaking-news")."""
    return _WHITESPACE_RE.sub("-", name.lower())


class TaxonomyForm:
    """Modal form for a name/slug pair, optionally with a description.

    Editing the name re-derives the slug; editing the slug afterwards wins
    until the name is edited again.
    """

    def __init__(self, *, with_description: bool = False) -> None:
        self.with_description = with_description
        self.is_open = False
        self.editing_id: int | None = None
        self.name = ""
        self.slug = ""
        self.description = ""

    @property
    def is_edit(self) -> bool:
        return self.editing_id is not None

    def set_name(self, name: str) -> None:
        self.name = name
        self.slug = slugify(name)

    def set_slug(self, slug: str) -> None:
        self.slug = slug

    def set_description(self, description: str) -> None:
        self.description = description

    def open_create(self) -> None:
        self.reset()
        self.is_open = True

    def open_edit(self, row: Category | Tag) -> None:
        self.editing_id = row.id
        self.name = row.name
        self.slug = row.slug
        self.description = getattr(row, "description", None) or ""
        self.is_open = True

    def reset(self) -> None:
        self.editing_id = None
        self.name = ""
        self.slug = ""
        self.description = ""

    def close(self) -> None:
        self.is_open = False
        self.reset()

    def payload(self) -> dict[str, Any]:
        if not self.name.strip():
            raise ValidationError("Name is required")
        data: dict[str, Any] = {"name": self.name, "slug": self.slug}
        if self.with_description:
            data["description"] = self.description
        return data


class _TaxonomyListPage(Page):
    resource = ""
    label = ""
    with_description = False

    def __init__(
        self,
        services: Services,
        query: QueryClient,
        confirm: Confirm = always_confirm,
    ) -> None:
        super().__init__(services, query, confirm)
        self.form = TaxonomyForm(with_description=self.with_description)
        self.rows: list = []

    @property
    def _service(self):
        return getattr(self.services, self.resource)

    def load(self) -> list:
        ok, rows = self._attempt(
            lambda: self.query.fetch((self.resource,), self._service.list),
            f"Failed to load {self.resource}",
        )
        if ok:
            self.rows = rows
        return self.rows

    def _refresh(self) -> None:
        self.query.invalidate((self.resource,))
        self.load()

    def submit(self):
        """Create or update from the modal form, then close it."""
        form = self.form

        def save():
            data = form.payload()
            if form.is_edit:
                return self._service.update(form.editing_id, data)
            return self._service.create(data)

        ok, row = self._attempt(
            lambda: self.query.mutate(save),
            f"Failed to save {self.label}",
        )
        if ok:
            logger.info("Saved %s %s", self.label, row.slug)
            form.close()
            self._refresh()
        return row

    def delete(self, row_id: int) -> bool:
        if not self._confirmed(f"Are you sure you want to delete this {self.label}?"):
            return False
        ok, _ = self._attempt(
            lambda: self.query.mutate(lambda: self._service.delete(row_id)),
            f"Failed to delete {self.label}",
        )
        if ok:
            self._refresh()
        return ok


class CategoryListPage(_TaxonomyListPage):
    resource = "categories"
    label = "category"
    with_description = True


class TagListPage(_TaxonomyListPage):
    resource = "tags"
    label = "tag"
