"""Shared plumbing for page controllers.

A page owns its local UI state, reads through the shared query cache, and
turns any failure into a single banner string instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from newsdesk.errors import NewsdeskError, error_message
from newsdesk.query import QueryClient
from newsdesk.services import Services

logger = logging.getLogger(__name__)

T = TypeVar("T")
Confirm = Callable[[str], bool]


def always_confirm(message: str) -> bool:
    return True


class Page:
    """Base class: services, cache, confirmation prompt, and an error banner."""

    def __init__(
        self,
        services: Services,
        query: QueryClient,
        confirm: Confirm = always_confirm,
    ) -> None:
        self.services = services
        self.query = query
        self.confirm = confirm
        self.error: str | None = None
        self.loading = False

    def _attempt(self, fn: Callable[[], T], fallback: str) -> tuple[bool, T | None]:
        """Run ``fn``; on failure set the banner and report ``(False, None)``."""
        try:
            result = fn()
        except NewsdeskError as exc:
            self.error = error_message(exc, fallback)
            logger.warning("%s: %s", type(self).__name__, self.error)
            return False, None
        self.error = None
        return True, result

    def _confirmed(self, message: str) -> bool:
        if self.confirm(message):
            return True
        logger.debug("Cancelled: %s", message)
        return False
