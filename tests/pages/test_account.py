"""Tests for the login, profile, and site settings screens."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from newsdesk.errors import APIError
from newsdesk.models import AuthUser, LoginResult, ProfileUpdateResult, SiteSetting, UserProfile
from newsdesk.pages import LoginPage, ProfileForm, SiteSettingsForm
from newsdesk.pages.site_settings import setting_label
from newsdesk.query import QueryClient


@pytest.fixture
def services() -> MagicMock:
    services = MagicMock()
    services.auth.login.return_value = LoginResult(
        token="tok", user=AuthUser(id=1, username="admin", email="admin@x.io")
    )
    services.profile.get.return_value = UserProfile(id=1, username="admin", email="admin@x.io")
    services.profile.update.return_value = ProfileUpdateResult(message="Profile updated")
    services.settings.get.return_value = {
        "site_name": SiteSetting(value="Daily"),
        "contact_email": SiteSetting(value="desk@x.io", type="email"),
        "ad_slot": SiteSetting(value="x"),
    }
    services.settings.update.return_value = "Settings saved"
    return services


class TestLoginPage:
    def test_success_clears_cache(self, services: MagicMock):
        query = QueryClient()
        query.fetch(("articles",), lambda: ["old"])
        page = LoginPage(services, query)

        result = page.submit(" admin ", "secret")

        assert result.token == "tok"
        services.auth.login.assert_called_once_with("admin", "secret")
        assert query.get_data(("articles",)) is None

    def test_backend_message_shown(self, services: MagicMock):
        services.auth.login.side_effect = APIError(status=401, payload={"error": "Account locked"})
        page = LoginPage(services, QueryClient())
        assert page.submit("admin", "bad") is None
        assert page.error == "Account locked"

    def test_generic_failure_message(self, services: MagicMock):
        services.auth.login.side_effect = APIError(status=401)
        page = LoginPage(services, QueryClient())
        page.submit("admin@x.io", "bad")
        assert page.error == "Invalid username/email or password"


class TestProfileForm:
    def _loaded(self, services: MagicMock) -> ProfileForm:
        form = ProfileForm(services, QueryClient())
        form.load()
        return form

    def test_only_changed_fields_sent(self, services: MagicMock):
        form = self._loaded(services)
        form.email = "new@x.io"

        form.submit()

        services.profile.update.assert_called_once_with({"email": "new@x.io"})
        assert form.success == "Profile updated"

    def test_no_changes(self, services: MagicMock):
        form = self._loaded(services)
        assert form.submit() is None
        assert form.error == "No changes to save"
        services.profile.update.assert_not_called()

    @pytest.mark.parametrize(
        ("current", "new", "confirm", "message"),
        [
            ("", "abcdef", "abcdef", "Current password is required to change password"),
            ("old", "", "abcdef", "New password is required"),
            ("old", "abc", "abc", "New password must be at least 6 characters"),
            ("old", "abcdef", "abcdeg", "New passwords do not match"),
        ],
    )
    def test_password_validation(self, services: MagicMock, current, new, confirm, message):
        form = self._loaded(services)
        form.current_password = current
        form.new_password = new
        form.confirm_password = confirm

        form.submit()

        assert form.error == message
        services.profile.update.assert_not_called()

    def test_password_change_clears_fields(self, services: MagicMock):
        form = self._loaded(services)
        form.current_password = "old"
        form.new_password = "abcdef"
        form.confirm_password = "abcdef"

        form.submit()

        services.profile.update.assert_called_once_with(
            {"currentPassword": "old", "newPassword": "abcdef"}
        )
        assert (form.current_password, form.new_password, form.confirm_password) == ("", "", "")


class TestSiteSettingsForm:
    def test_groups_hide_unknown_keys(self, services: MagicMock):
        form = SiteSettingsForm(services, QueryClient())
        form.load()

        groups = form.groups()

        assert [g.title for g in groups] == ["Basic Information", "Contact Information"]
        assert groups[1].fields[0].label == "Contact Email"

    def test_submit_sends_whole_map(self, services: MagicMock):
        form = SiteSettingsForm(services, QueryClient())
        form.load()
        form.set("site_name", "Nightly")

        assert form.submit() == "Settings saved"
        services.settings.update.assert_called_once_with(
            {"site_name": "Nightly", "contact_email": "desk@x.io", "ad_slot": "x"}
        )
        assert form.success == "Settings saved"

    def test_label_fallback(self):
        assert setting_label("twitter_url") == "Twitter/X URL"
        assert setting_label("ad_slot_id") == "Ad Slot Id"
