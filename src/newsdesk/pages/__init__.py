"""Page controllers: one per admin screen.

Each page owns its local state (filters, pagination, selection, form
fields), reads through the shared query cache, invalidates its own keys
after a successful write, and reports failures in ``page.error``.
"""

from newsdesk.pages.article_form import ArticleForm
from newsdesk.pages.articles import ArticleListPage
from newsdesk.pages.base import Confirm, Page, always_confirm
from newsdesk.pages.comments import CommentListPage
from newsdesk.pages.dashboard import DashboardPage
from newsdesk.pages.login import LoginPage
from newsdesk.pages.media import MediaLibraryPage, format_file_size
from newsdesk.pages.newsletter import NewsletterPage
from newsdesk.pages.profile import ProfileForm
from newsdesk.pages.site_settings import SiteSettingsForm
from newsdesk.pages.taxonomy import CategoryListPage, TagListPage, TaxonomyForm, slugify

__all__ = [
    "ArticleForm",
    "ArticleListPage",
    "CategoryListPage",
    "CommentListPage",
    "Confirm",
    "DashboardPage",
    "LoginPage",
    "MediaLibraryPage",
    "NewsletterPage",
    "Page",
    "ProfileForm",
    "SiteSettingsForm",
    "TagListPage",
    "TaxonomyForm",
    "always_confirm",
    "format_file_size",
    "slugify",
]
