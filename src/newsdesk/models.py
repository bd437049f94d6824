"""Backend records: pure Pydantic v2 data types.

Every model mirrors one backend resource 1:1. The only client-owned
structure is the ordered media gallery on an article; everything else is
passed through as the backend sends it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from newsdesk.errors import UnexpectedResponseError


class ArticleStatus(StrEnum):
    """Publication status of an article."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class CommentStatus(StrEnum):
    """Moderation status of a reader comment."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class MediaType(StrEnum):
    """Kind of a gallery item."""

    IMAGE = "image"
    VIDEO = "video"


class SettingType(StrEnum):
    """Input type the backend declares for a site setting."""

    TEXT = "text"
    TEXTAREA = "textarea"
    URL = "url"
    EMAIL = "email"
    NUMBER = "number"


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @classmethod
    def from_response(cls, data: Any) -> Self:
        """Validate a backend body; a bad shape becomes an APIError."""
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            raise UnexpectedResponseError(payload=data) from exc

    @classmethod
    def list_from_response(cls, data: Any) -> list[Self]:
        """Validate a JSON array body (an empty body is an empty list)."""
        if data is None:
            return []
        if not isinstance(data, list):
            raise UnexpectedResponseError(payload=data)
        return [cls.from_response(row) for row in data]


# ── Articles ─────────────────────────────────────────────────────────────


class GalleryItem(_Record):
    """One entry of an article's ordered media gallery."""

    url: str
    type: MediaType = MediaType.IMAGE
    order: int = 0


class Article(_Record):
    id: int
    title: str = ""
    excerpt: str | None = ""
    body: str = ""
    featured_image: str | None = None
    media_gallery: list[GalleryItem] | None = None
    category_id: int | None = None
    category_name: str | None = None
    tags: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    status: ArticleStatus = ArticleStatus.DRAFT
    views: int = 0
    author_id: int | None = None
    scheduled_publish_date: str | None = None
    published_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class ArticlePage(_Record):
    """One page of the article list."""

    articles: list[Article] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10


class ArticleSummary(_Record):
    """Short article row used by the dashboard."""

    id: int
    title: str
    views: int | None = None
    status: str | None = None
    created_at: str | None = None
    category_name: str | None = None


# ── Taxonomy ─────────────────────────────────────────────────────────────


class Category(_Record):
    id: int
    name: str
    slug: str
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class Tag(_Record):
    id: int
    name: str
    slug: str
    created_at: str | None = None
    updated_at: str | None = None


# ── Comments, media, newsletter ─────────────────────────────────────────


class Comment(_Record):
    id: int
    article_id: int
    author_name: str = ""
    author_email: str = ""
    content: str = ""
    status: CommentStatus = CommentStatus.PENDING
    created_at: str | None = None


class MediaItem(_Record):
    id: int
    filename: str
    url: str
    size: int = 0
    mime_type: str = ""
    created_at: str | None = None
    updated_at: str | None = None


class UploadResult(_Record):
    """Response of ``POST /media/upload``."""

    id: int | None = None
    filename: str = ""
    url: str
    size: int = 0
    mime_type: str = ""
    message: str = ""


class NewsletterSubscriber(_Record):
    id: int
    email: str
    subscribed_at: str | None = None


# ── Settings and accounts ────────────────────────────────────────────────


class SiteSetting(_Record):
    """A backend-declared setting: its value, input type, and description."""

    value: str | None = ""
    type: SettingType = SettingType.TEXT
    description: str = ""


class PublicSettings(_Record):
    site_name: str = ""
    site_tagline: str = ""
    site_description: str = ""
    site_logo_url: str = ""
    site_favicon_url: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    facebook_url: str = ""
    twitter_url: str = ""
    instagram_url: str = ""
    youtube_url: str = ""
    footer_copyright: str = ""


class AuthUser(_Record):
    id: int
    username: str | None = None
    email: str
    role: str = ""


class LoginResult(_Record):
    token: str
    user: AuthUser


class UserProfile(_Record):
    id: int
    username: str | None = None
    email: str
    role: str = ""
    created_at: str | None = None
    updated_at: str | None = None


class ProfileUpdateResult(_Record):
    message: str = ""
    user: UserProfile | None = None


class DashboardStats(_Record):
    """Counters shown on the dashboard; the backend sends camelCase keys."""

    total_articles: int = Field(0, alias="totalArticles")
    published_articles: int = Field(0, alias="publishedArticles")
    draft_articles: int = Field(0, alias="draftArticles")
    total_categories: int = Field(0, alias="totalCategories")
    total_tags: int = Field(0, alias="totalTags")
    total_comments: int = Field(0, alias="totalComments")
    pending_comments: int = Field(0, alias="pendingComments")
    total_views: int = Field(0, alias="totalViews")
    newsletter_subscribers: int = Field(0, alias="newsletterSubscribers")
    trending_articles: list[ArticleSummary] = Field(default_factory=list, alias="trendingArticles")
    recent_articles: list[ArticleSummary] = Field(default_factory=list, alias="recentArticles")
