"""Tests for the comment, newsletter, media, and dashboard screens."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from newsdesk.errors import APIError
from newsdesk.models import (
    Comment,
    CommentStatus,
    DashboardStats,
    MediaItem,
    NewsletterSubscriber,
    UploadResult,
)
from newsdesk.pages import (
    CommentListPage,
    DashboardPage,
    MediaLibraryPage,
    NewsletterPage,
    format_file_size,
)
from newsdesk.pages import media as media_page
from newsdesk.query import QueryClient


@pytest.fixture
def services() -> MagicMock:
    services = MagicMock()
    services.comments.list.return_value = [
        Comment(id=1, article_id=3, status="pending", content="First!"),
    ]
    services.newsletter.list.return_value = [NewsletterSubscriber(id=4, email="r@x.io")]
    services.media.list.return_value = [MediaItem(id=2, filename="a.png", url="/a.png", size=10)]
    services.media.upload.return_value = UploadResult(url="/uploads/b.png")
    services.dashboard.stats.return_value = DashboardStats(totalArticles=7)
    return services


class TestCommentListPage:
    def test_status_filter(self, services: MagicMock):
        page = CommentListPage(services, QueryClient())
        page.set_status_filter("pending")
        page.load()
        services.comments.list.assert_called_once_with(status="pending", article_id=None)

    def test_any_status_transition(self, services: MagicMock):
        page = CommentListPage(services, QueryClient())
        assert page.set_status(1, "rejected") is True
        assert page.set_status(1, CommentStatus.PENDING) is True
        calls = [c.args for c in services.comments.update_status.call_args_list]
        assert calls == [(1, CommentStatus.REJECTED), (1, CommentStatus.PENDING)]

    def test_available_actions_exclude_current(self):
        comment = Comment(id=1, article_id=3, status="approved")
        assert CommentListPage.available_actions(comment) == [
            CommentStatus.PENDING,
            CommentStatus.REJECTED,
        ]

    def test_delete_failure_sets_banner(self, services: MagicMock):
        services.comments.delete.side_effect = APIError(status=500)
        page = CommentListPage(services, QueryClient())
        assert page.delete(1) is False
        assert page.error == "Failed to delete comment"


class TestNewsletterPage:
    def test_remove_confirmed(self, services: MagicMock):
        confirm = MagicMock(return_value=True)
        page = NewsletterPage(services, QueryClient(), confirm)
        page.load()
        assert page.remove(4) is True
        confirm.assert_called_once_with("Are you sure you want to remove this subscriber?")
        services.newsletter.delete.assert_called_once_with(4)
        assert services.newsletter.list.call_count == 2

    def test_remove_cancelled(self, services: MagicMock):
        page = NewsletterPage(services, QueryClient(), lambda message: False)
        assert page.remove(4) is False
        services.newsletter.delete.assert_not_called()


class TestMediaLibraryPage:
    def test_upload_image(self, services: MagicMock, tmp_path: Path):
        image = tmp_path / "b.png"
        image.write_bytes(b"png")
        page = MediaLibraryPage(services, QueryClient())
        result = page.upload(image)

        assert result.url == "/uploads/b.png"
        services.media.upload.assert_called_once_with(image)
        services.media.list.assert_called_once()

    def test_upload_rejects_other_types(self, services: MagicMock, tmp_path: Path):
        doc = tmp_path / "notes.txt"
        doc.write_text("hi")
        page = MediaLibraryPage(services, QueryClient())

        assert page.upload(doc) is None
        assert page.error == "Please select an image or video file"
        services.media.upload.assert_not_called()

    def test_upload_size_cap(self, services: MagicMock, tmp_path: Path, monkeypatch):
        monkeypatch.setattr(media_page, "MAX_UPLOAD_BYTES", 2)
        image = tmp_path / "big.jpg"
        image.write_bytes(b"12345")
        page = MediaLibraryPage(services, QueryClient())

        assert page.upload(image) is None
        assert page.error == "File size must be less than 100MB"

    def test_delete(self, services: MagicMock):
        page = MediaLibraryPage(services, QueryClient())
        assert page.delete(2) is True
        services.media.delete.assert_called_once_with(2)

    @pytest.mark.parametrize(
        ("size", "expected"),
        [(512, "512 B"), (2048, "2.00 KB"), (5 * 1024 * 1024, "5.00 MB")],
    )
    def test_format_file_size(self, size, expected):
        assert format_file_size(size) == expected


class TestDashboardPage:
    def test_loads_stats(self, services: MagicMock):
        page = DashboardPage(services, QueryClient())
        assert page.load().total_articles == 7
