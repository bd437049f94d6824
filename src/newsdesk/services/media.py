"""Media library against ``/media``."""

from __future__ import annotations

import builtins
from pathlib import Path

from newsdesk.api.client import APIClient
from newsdesk.models import MediaItem, UploadResult


class MediaService:
    def __init__(self, client: APIClient) -> None:
        self._client = client

    def list(self) -> builtins.list[MediaItem]:
        return MediaItem.list_from_response(self._client.get("/media"))

    def upload(self, file_path: Path) -> UploadResult:
        """Upload one file as multipart field ``file``."""
        return UploadResult.from_response(self._client.upload("/media/upload", file_path))

    def delete(self, media_id: int) -> None:
        self._client.delete(f"/media/{media_id}")
