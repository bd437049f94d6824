"""Site settings grouped into fixed sections over the backend's keys."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from newsdesk.models import SiteSetting
from newsdesk.pages.base import Page

logger = logging.getLogger(__name__)

QUERY_KEY = ("settings",)

SETTING_GROUPS: list[tuple[str, list[str]]] = [
    ("Basic Information", ["site_name", "site_tagline", "site_description"]),
    ("Branding", ["site_logo_url", "site_favicon_url"]),
    ("Contact Information", ["contact_email", "contact_phone"]),
    ("Social Media", ["facebook_url", "twitter_url", "instagram_url", "youtube_url"]),
    ("Footer", ["footer_copyright"]),
]

SETTING_LABELS: dict[str, str] = {
    "site_name": "Site Name",
    "site_tagline": "Site Tagline",
    "site_description": "Site Description",
    "site_logo_url": "Logo URL",
    "site_favicon_url": "Favicon URL",
    "contact_email": "Contact Email",
    "contact_phone": "Contact Phone",
    "facebook_url": "Facebook URL",
    "twitter_url": "Twitter/X URL",
    "instagram_url": "Instagram URL",
    "youtube_url": "YouTube URL",
    "footer_copyright": "Footer Copyright Text",
}


def setting_label(key: str) -> str:
    if key in SETTING_LABELS:
        return SETTING_LABELS[key]
    return " ".join(word.capitalize() for word in key.split("_"))


@dataclass
class SettingField:
    key: str
    label: str
    setting: SiteSetting


@dataclass
class SettingGroup:
    title: str
    fields: list[SettingField]


class SiteSettingsForm(Page):
    """Edits the settings map; every save submits the whole map."""

    settings: dict[str, SiteSetting] | None = None
    values: dict[str, str] | None = None
    success: str | None = None

    def load(self) -> dict[str, SiteSetting] | None:
        ok, settings = self._attempt(
            lambda: self.query.fetch(QUERY_KEY, self.services.settings.get),
            "Failed to load settings",
        )
        if ok:
            self.settings = settings
            self.values = {key: setting.value or "" for key, setting in settings.items()}
        return self.settings

    def groups(self) -> list[SettingGroup]:
        """Sections to show; keys outside every section are not shown."""
        settings = self.settings or {}
        groups = []
        for title, keys in SETTING_GROUPS:
            fields = [
                SettingField(key, setting_label(key), settings[key])
                for key in keys
                if key in settings
            ]
            if fields:
                groups.append(SettingGroup(title, fields))
        return groups

    def set(self, key: str, value: str) -> None:
        if self.values is None:
            self.values = {}
        self.values[key] = value

    def submit(self) -> str | None:
        values = dict(self.values or {})
        self.success = None
        ok, message = self._attempt(
            lambda: self.query.mutate(
                lambda: self.services.settings.update(values),
                invalidates=(QUERY_KEY,),
            ),
            "Failed to update settings",
        )
        if ok:
            self.success = message or "Settings updated successfully"
            logger.info("Saved %d settings", len(values))
        return message
