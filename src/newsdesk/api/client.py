"""REST client for the newsdesk backend.

Handles bearer-token injection, JSON bodies, query strings, and multipart
uploads via urllib. Every non-2xx answer becomes an ``APIError`` carrying
the backend's JSON body, as does a 2xx answer that is not JSON; every
failure to get an answer at all becomes a ``NetworkError``.
"""

from __future__ import annotations

import json
import logging
import mimetypes
import socket
import urllib.error
import urllib.parse
import urllib.request
import uuid
from pathlib import Path
from typing import Any

from newsdesk.api.token import TokenStore
from newsdesk.config import NewsdeskConfig
from newsdesk.errors import (
    APIError,
    NetworkError,
    NotAuthenticatedError,
    UnexpectedResponseError,
)

logger = logging.getLogger(__name__)


class APIClient:
    """Client for the newsdesk REST API (base path ``/api``)."""

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore | None = None,
        *,
        timeout: int = 30,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: NewsdeskConfig) -> APIClient:
        return cls(
            config.api.url,
            TokenStore(config.credentials_path),
            timeout=config.api.timeout,
        )

    def _url(self, path: str, params: dict[str, Any] | None = None) -> str:
        url = f"{self.base_url}{path}"
        if params:
            query = {k: v for k, v in params.items() if v is not None}
            if query:
                url = f"{url}?{urllib.parse.urlencode(query)}"
        return url

    def _headers(self, auth: bool) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if auth:
            token = self.token_store.get() if self.token_store else None
            if not token:
                raise NotAuthenticatedError()
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(self, req: urllib.request.Request) -> Any:
        logger.debug("%s %s", req.get_method(), req.full_url)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                status = getattr(resp, "status", None)
                body = resp.read()
        except urllib.error.HTTPError as exc:
            raise _api_error(exc) from exc
        except (urllib.error.URLError, socket.timeout, ConnectionError) as exc:
            reason = getattr(exc, "reason", exc)
            logger.debug("Network failure for %s: %s", req.full_url, reason)
            raise NetworkError(f"Could not reach {self.base_url}: {reason}") from exc

        if not body.strip():
            return None
        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Non-JSON response from %s", req.full_url)
            raw = body.decode("utf-8", errors="replace")
            raise UnexpectedResponseError(status=status, payload=raw) from exc

    def request(
        self,
        method: str,
        path: str,
        data: dict | None = None,
        *,
        params: dict[str, Any] | None = None,
        auth: bool = True,
    ) -> Any:
        """Make a JSON request and return the decoded body.

        Args:
            method: HTTP verb.
            path: Path below the base URL (e.g. "/articles/3").
            data: Optional JSON body.
            params: Optional query parameters; None values are dropped.
            auth: Attach the stored bearer token (every call except login).

        Returns:
            The decoded JSON body, or None for an empty body.
        """
        headers = self._headers(auth)
        body = None
        if data is not None:
            body = json.dumps(data).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = urllib.request.Request(
            self._url(path, params),
            data=body,
            method=method,
            headers=headers,
        )
        return self._send(req)

    def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: dict | None = None, *, auth: bool = True) -> Any:
        return self.request("POST", path, data, auth=auth)

    def put(self, path: str, data: dict | None = None) -> Any:
        return self.request("PUT", path, data)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def upload(self, path: str, file_path: Path, field: str = "file") -> Any:
        """Upload a file via multipart form POST.

        Args:
            path: API endpoint path (e.g. "/media/upload").
            file_path: Local file to upload.
            field: Form field name for the file.

        Returns:
            Parsed JSON response.
        """
        headers = self._headers(auth=True)
        boundary = f"----NewsdeskUpload{uuid.uuid4().hex}"
        content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"

        disposition = (
            f'Content-Disposition: form-data; name="{field}";'
            f' filename="{file_path.name}"\r\n'
        )
        body = b"".join(
            [
                f"--{boundary}\r\n".encode(),
                disposition.encode(),
                f"Content-Type: {content_type}\r\n\r\n".encode(),
                file_path.read_bytes(),
                f"\r\n--{boundary}--\r\n".encode(),
            ]
        )
        headers["Content-Type"] = f"multipart/form-data; boundary={boundary}"

        req = urllib.request.Request(
            self._url(path),
            data=body,
            method="POST",
            headers=headers,
        )
        return self._send(req)


def _api_error(exc: urllib.error.HTTPError) -> APIError:
    """Build an APIError from an HTTP error response."""
    payload: object = None
    try:
        raw = exc.read().decode("utf-8")
        payload = json.loads(raw) if raw.strip() else None
    except (json.JSONDecodeError, UnicodeDecodeError, OSError, AttributeError):
        payload = None
    error = APIError(f"HTTP {exc.code}", status=exc.code, payload=payload)
    message = error.backend_message
    if message:
        error.message = message
        error.args = (message,)
    logger.debug("API error %s: %s", exc.code, error.message)
    return error
