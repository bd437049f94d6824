"""Account settings: username, email, and password change."""

from __future__ import annotations

import logging
from typing import Any

from newsdesk.errors import ValidationError
from newsdesk.models import ProfileUpdateResult, UserProfile
from newsdesk.pages.base import Page

logger = logging.getLogger(__name__)

QUERY_KEY = ("profile",)
MIN_PASSWORD_LENGTH = 6


class ProfileForm(Page):
    """Profile form that submits only what differs from the fetched profile."""

    profile: UserProfile | None = None
    username: str = ""
    email: str = ""
    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""
    success: str | None = None

    def load(self) -> UserProfile | None:
        ok, profile = self._attempt(
            lambda: self.query.fetch(QUERY_KEY, self.services.profile.get),
            "Failed to load profile",
        )
        if ok:
            self.profile = profile
            self.username = profile.username or ""
            self.email = profile.email
        return self.profile

    def changes(self) -> dict[str, Any]:
        """Validate the form and build the update payload.

        Raises:
            ValidationError: On an incomplete or invalid password change, or
                when nothing changed.
        """
        if self.new_password or self.confirm_password or self.current_password:
            if not self.current_password:
                raise ValidationError("Current password is required to change password")
            if not self.new_password:
                raise ValidationError("New password is required")
            if len(self.new_password) < MIN_PASSWORD_LENGTH:
                raise ValidationError(
                    f"New password must be at least {MIN_PASSWORD_LENGTH} characters"
                )
            if self.new_password != self.confirm_password:
                raise ValidationError("New passwords do not match")

        profile = self.profile
        data: dict[str, Any] = {}
        if self.username != ((profile.username if profile else None) or ""):
            data["username"] = self.username
        if self.email != (profile.email if profile else None):
            data["email"] = self.email
        if self.new_password:
            data["currentPassword"] = self.current_password
            data["newPassword"] = self.new_password

        if not data:
            raise ValidationError("No changes to save")
        return data

    def submit(self) -> ProfileUpdateResult | None:
        self.success = None
        ok, result = self._attempt(
            lambda: self.query.mutate(
                lambda: self.services.profile.update(self.changes()),
                invalidates=(QUERY_KEY,),
            ),
            "Failed to update profile",
        )
        if ok:
            self.success = result.message or "Profile updated successfully"
            self.current_password = ""
            self.new_password = ""
            self.confirm_password = ""
            if result.user is not None:
                self.profile = result.user
            logger.info("Profile updated")
        return result
