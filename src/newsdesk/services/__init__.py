"""Resource services: one thin module per backend resource.

Each service maps a method name to an HTTP verb, a path, and a typed
payload. ``Services`` bundles them over a single configured client.
"""

from __future__ import annotations

from dataclasses import dataclass

from newsdesk.api.client import APIClient
from newsdesk.services.articles import ArticlesService
from newsdesk.services.auth import AuthService, login_credentials
from newsdesk.services.categories import CategoriesService
from newsdesk.services.comments import CommentsService
from newsdesk.services.dashboard import DashboardService
from newsdesk.services.media import MediaService
from newsdesk.services.newsletter import NewsletterService
from newsdesk.services.profile import ProfileService
from newsdesk.services.settings import SettingsService
from newsdesk.services.tags import TagsService


@dataclass
class Services:
    auth: AuthService
    articles: ArticlesService
    categories: CategoriesService
    tags: TagsService
    comments: CommentsService
    media: MediaService
    newsletter: NewsletterService
    settings: SettingsService
    profile: ProfileService
    dashboard: DashboardService

    @classmethod
    def from_client(cls, client: APIClient) -> Services:
        return cls(
            auth=AuthService(client),
            articles=ArticlesService(client),
            categories=CategoriesService(client),
            tags=TagsService(client),
            comments=CommentsService(client),
            media=MediaService(client),
            newsletter=NewsletterService(client),
            settings=SettingsService(client),
            profile=ProfileService(client),
            dashboard=DashboardService(client),
        )


__all__ = [
    "ArticlesService",
    "AuthService",
    "CategoriesService",
    "CommentsService",
    "DashboardService",
    "MediaService",
    "NewsletterService",
    "ProfileService",
    "Services",
    "SettingsService",
    "TagsService",
    "login_credentials",
]
