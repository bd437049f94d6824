"""Ordered media gallery of an article.

An operator assembles up to eight image/video references, by upload or by
URL, and reorders them live while dragging. ``order`` is always the item's
index; it is recomputed after every insert, remove, and move. On submit the
first item doubles as the legacy ``featured_image``.
"""

from __future__ import annotations

import logging
import mimetypes
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from newsdesk.errors import NewsdeskError, error_message
from newsdesk.models import Article, GalleryItem, MediaType, UploadResult
from newsdesk.services.media import MediaService

logger = logging.getLogger(__name__)

MAX_GALLERY_ITEMS = 8
MAX_VIDEO_BYTES = 100 * 1024 * 1024
MAX_PARALLEL_UPLOADS = 4

ERROR_TOO_MANY = f"You can add up to {MAX_GALLERY_ITEMS} media items"
ERROR_BAD_TYPE = "Please select an image or video file"
ERROR_VIDEO_TOO_LARGE = "Video files must be less than 100MB"
ERROR_UPLOAD_FAILED = "Failed to upload file"

_VIDEO_URL_RE = re.compile(r"\.(mp4|webm|mpeg|mov|quicktime|avi|ogg|m4v)(\?.*)?$", re.IGNORECASE)


def infer_media_type(url: str) -> MediaType:
    """Guess image vs video from a URL's extension or a ``video/`` hint."""
    if _VIDEO_URL_RE.search(url) or "video/" in url.lower():
        return MediaType.VIDEO
    return MediaType.IMAGE


def guess_mime_type(path: Path) -> str:
    return mimetypes.guess_type(path.name)[0] or ""


class MediaGallery:
    """Mutable gallery state behind the article form."""

    def __init__(self, media: MediaService | None = None, items: list[GalleryItem] | None = None) -> None:
        self._media = media
        self.items: list[GalleryItem] = []
        self.error: str | None = None
        self.uploading = False
        self._drag_index: int | None = None
        for item in items or []:
            self.items.append(GalleryItem(url=item.url, type=item.type, order=0))
        self._renumber()

    @classmethod
    def from_article(cls, article: Article, media: MediaService | None = None) -> MediaGallery:
        """Seed from the article's gallery, or its legacy featured image."""
        if article.media_gallery:
            items = sorted(article.media_gallery, key=lambda i: i.order)
        elif article.featured_image:
            url = article.featured_image
            items = [GalleryItem(url=url, type=infer_media_type(url))]
        else:
            items = []
        return cls(media, items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def remaining(self) -> int:
        return MAX_GALLERY_ITEMS - len(self.items)

    def _renumber(self) -> None:
        for index, item in enumerate(self.items):
            item.order = index

    # ── Adding ───────────────────────────────────────────────────

    def _validate_file(self, path: Path) -> str | None:
        """Return an error string for a rejected file, else None."""
        mime = guess_mime_type(path)
        if not (mime.startswith("image/") or mime.startswith("video/")):
            return ERROR_BAD_TYPE
        if mime.startswith("video/"):
            try:
                size = path.stat().st_size
            except OSError:
                return ERROR_UPLOAD_FAILED
            if size > MAX_VIDEO_BYTES:
                return ERROR_VIDEO_TOO_LARGE
        return None

    def _upload_one(self, path: Path) -> UploadResult | str:
        try:
            return self._media.upload(path)
        except NewsdeskError as exc:
            logger.warning("Upload of %s failed: %s", path, exc)
            return error_message(exc, ERROR_UPLOAD_FAILED)
        except OSError as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return ERROR_UPLOAD_FAILED

    def add_uploads(self, paths: list[Path]) -> list[GalleryItem]:
        """Validate and upload a batch of files, appending them in input order.

        The whole batch is refused when it would exceed the item cap. Beyond
        that, a rejected or failed file only drops itself; the visible error
        is the last failure seen.

        Args:
            paths: Local files, in the order the operator picked them.

        Returns:
            The gallery items that were added.
        """
        if not paths:
            return []
        self.error = None
        if len(self.items) + len(paths) > MAX_GALLERY_ITEMS:
            self.error = ERROR_TOO_MANY
            return []
        if self._media is None:
            raise RuntimeError("MediaGallery needs a MediaService to upload files")

        valid: list[Path] = []
        for path in paths:
            problem = self._validate_file(path)
            if problem:
                logger.info("Rejected %s: %s", path, problem)
                self.error = problem
            else:
                valid.append(path)
        if not valid:
            return []

        self.uploading = True
        try:
            with ThreadPoolExecutor(max_workers=min(MAX_PARALLEL_UPLOADS, len(valid))) as pool:
                results = list(pool.map(self._upload_one, valid))
        finally:
            self.uploading = False

        added: list[GalleryItem] = []
        for path, result in zip(valid, results):
            if isinstance(result, str):
                self.error = result
                continue
            media_type = MediaType.VIDEO if guess_mime_type(path).startswith("video/") else MediaType.IMAGE
            item = GalleryItem(url=result.url, type=media_type)
            self.items.append(item)
            added.append(item)
        self._renumber()
        return added

    def add_url(self, url: str) -> GalleryItem | None:
        """Append a direct URL; blank input is ignored."""
        url = url.strip()
        if not url:
            return None
        if len(self.items) >= MAX_GALLERY_ITEMS:
            self.error = ERROR_TOO_MANY
            return None
        self.error = None
        item = GalleryItem(url=url, type=infer_media_type(url))
        self.items.append(item)
        self._renumber()
        return item

    # ── Removing and reordering ──────────────────────────────────

    def remove(self, index: int) -> GalleryItem:
        item = self.items.pop(index)
        self._renumber()
        return item

    def move(self, from_index: int, to_index: int) -> None:
        """Splice the item at ``from_index`` into ``to_index``."""
        if from_index == to_index:
            return
        size = len(self.items)
        if not (0 <= from_index < size and 0 <= to_index < size):
            raise IndexError(f"move {from_index}->{to_index} out of range for {size} items")
        item = self.items.pop(from_index)
        self.items.insert(to_index, item)
        self._renumber()

    def drag_start(self, index: int) -> None:
        self._drag_index = index

    def drag_over(self, index: int) -> None:
        """Live reorder: the dragged item follows the hovered position."""
        if self._drag_index is None or index == self._drag_index:
            return
        if not 0 <= index < len(self.items):
            return
        self.move(self._drag_index, index)
        self._drag_index = index

    def drag_end(self) -> None:
        self._drag_index = None

    @property
    def dragging(self) -> int | None:
        return self._drag_index

    # ── Submission ───────────────────────────────────────────────

    def apply_to(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Write the gallery into an article payload.

        Index 0 becomes ``featured_image``; an empty gallery leaves the
        legacy field as it was.
        """
        payload["media_gallery"] = [item.model_dump(mode="json") for item in self.items]
        if self.items:
            payload["featured_image"] = self.items[0].url
        return payload
