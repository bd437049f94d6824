"""Media library: list, single-file upload, delete."""

from __future__ import annotations

import logging
from pathlib import Path

from newsdesk.errors import ValidationError
from newsdesk.gallery import ERROR_BAD_TYPE, ERROR_UPLOAD_FAILED, guess_mime_type
from newsdesk.models import MediaItem, UploadResult
from newsdesk.pages.base import Confirm, Page, always_confirm
from newsdesk.query import QueryClient
from newsdesk.services import Services

logger = logging.getLogger(__name__)

QUERY_KEY = ("media",)
MAX_UPLOAD_BYTES = 100 * 1024 * 1024
ERROR_FILE_TOO_LARGE = "File size must be less than 100MB"


def format_file_size(size: int) -> str:
    """Human-readable size: bytes, then KB and MB with two decimals."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


class MediaLibraryPage(Page):
    """The append-only media library, independent of article galleries."""

    def __init__(
        self,
        services: Services,
        query: QueryClient,
        confirm: Confirm = always_confirm,
    ) -> None:
        super().__init__(services, query, confirm)
        self.items: list[MediaItem] = []
        self.uploading = False

    def load(self) -> list[MediaItem]:
        ok, items = self._attempt(
            lambda: self.query.fetch(QUERY_KEY, self.services.media.list),
            "Failed to load media",
        )
        if ok:
            self.items = items
        return self.items

    def upload(self, path: Path) -> UploadResult | None:
        """Validate and upload one image or video (at most 100MB)."""

        def send() -> UploadResult:
            mime = guess_mime_type(path)
            if not (mime.startswith("image/") or mime.startswith("video/")):
                raise ValidationError(ERROR_BAD_TYPE)
            try:
                if path.stat().st_size > MAX_UPLOAD_BYTES:
                    raise ValidationError(ERROR_FILE_TOO_LARGE)
                return self.services.media.upload(path)
            except OSError as exc:
                logger.warning("Could not read %s: %s", path, exc)
                raise ValidationError(ERROR_UPLOAD_FAILED) from exc

        self.uploading = True
        try:
            ok, result = self._attempt(
                lambda: self.query.mutate(send, invalidates=(QUERY_KEY,)),
                ERROR_UPLOAD_FAILED,
            )
        finally:
            self.uploading = False
        if ok:
            logger.info("Uploaded %s as %s", path.name, result.url)
            self.load()
        return result

    def delete(self, media_id: int) -> bool:
        if not self._confirmed("Are you sure you want to delete this media file?"):
            return False
        ok, _ = self._attempt(
            lambda: self.query.mutate(
                lambda: self.services.media.delete(media_id),
                invalidates=(QUERY_KEY,),
            ),
            "Failed to delete media",
        )
        if ok:
            self.load()
        return ok
