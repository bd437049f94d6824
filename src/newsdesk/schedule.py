"""Scheduled-publish date normalization.

The backend stores the wall-clock value the editor typed. When it comes back
as an ISO timestamp with a zone suffix, the form shows the same wall-clock
minutes by slicing the string instead of converting to the viewer's zone.
Any other shape falls back to real parsing with conversion to local time.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from email.utils import parsedate_to_datetime

logger = logging.getLogger(__name__)

INPUT_FORMAT = "%Y-%m-%dT%H:%M"

_LOCAL_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}$")
_ISO_MILLIS_ZONE_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d+(Z|[+-]\d{2}:?\d{2})$"
)
_ISO_ZONE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(Z|[+-]\d{2}:?\d{2})$")


def to_input_value(value: str | None) -> str:
    """Convert a backend timestamp to the ``YYYY-MM-DDTHH:MM`` form value.

    Args:
        value: Timestamp as returned by the backend (or None).

    Returns:
        Minute-precision local value, or "" when empty or unparseable.
    """
    if not value:
        return ""
    value = value.strip()
    if _LOCAL_RE.match(value):
        return value
    if _ISO_MILLIS_ZONE_RE.match(value) or _ISO_ZONE_RE.match(value):
        return value[:16]

    parsed = _parse_any(value)
    if parsed is None:
        logger.debug("Unparseable scheduled date %r", value)
        return ""
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime(INPUT_FORMAT)


def to_payload_value(value: str | None) -> str | None:
    """Value to send: an explicit None when cleared, otherwise verbatim."""
    if value is None or not value.strip():
        return None
    return value


def _parse_any(value: str) -> datetime | None:
    candidate = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
