"""Tests for the REST client: URL building, auth header, errors, uploads."""

from __future__ import annotations

import io
import json
import urllib.error
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from newsdesk.api.client import APIClient
from newsdesk.api.token import TokenStore
from newsdesk.errors import APIError, NetworkError, NotAuthenticatedError, UnexpectedResponseError


def _response(payload: object) -> MagicMock:
    mock_response = MagicMock()
    body = json.dumps(payload).encode() if payload is not None else b""
    mock_response.read.return_value = body
    mock_response.__enter__ = lambda s: s
    mock_response.__exit__ = MagicMock(return_value=False)
    return mock_response


def _http_error(code: int, payload: object) -> urllib.error.HTTPError:
    body = io.BytesIO(json.dumps(payload).encode())
    return urllib.error.HTTPError("https://news.example/api/x", code, "err", {}, body)


@pytest.fixture
def store(tmp_path: Path) -> TokenStore:
    token_store = TokenStore(tmp_path / "credentials.json")
    token_store.set("tok-123")
    return token_store


@pytest.fixture
def client(store: TokenStore) -> APIClient:
    return APIClient("https://news.example/api/", store)


class TestRequests:
    def test_get_sends_bearer_token(self, client: APIClient):
        with patch("urllib.request.urlopen", return_value=_response([{"id": 1}])) as mock_urlopen:
            result = client.get("/categories")

        assert result == [{"id": 1}]
        req = mock_urlopen.call_args[0][0]
        assert req.full_url == "https://news.example/api/categories"
        assert req.method == "GET"
        assert req.get_header("Authorization") == "Bearer tok-123"

    def test_query_params_drop_none(self, client: APIClient):
        with patch("urllib.request.urlopen", return_value=_response({})) as mock_urlopen:
            client.get("/articles", params={"page": 2, "limit": 10, "status": None, "search": "x y"})

        req = mock_urlopen.call_args[0][0]
        assert req.full_url == "https://news.example/api/articles?page=2&limit=10&search=x+y"

    def test_post_json_body(self, client: APIClient):
        with patch("urllib.request.urlopen", return_value=_response({"id": 5})) as mock_urlopen:
            client.post("/tags", {"name": "World", "slug": "world"})

        req = mock_urlopen.call_args[0][0]
        assert req.method == "POST"
        assert req.get_header("Content-type") == "application/json"
        assert json.loads(req.data) == {"name": "World", "slug": "world"}

    def test_login_call_has_no_auth_header(self, tmp_path: Path):
        client = APIClient("https://news.example/api", TokenStore(tmp_path / "c.json"))
        with patch("urllib.request.urlopen", return_value=_response({"token": "t"})) as mock_urlopen:
            client.post("/auth/login", {"email": "a@b.c", "password": "pw"}, auth=False)

        req = mock_urlopen.call_args[0][0]
        assert req.get_header("Authorization") is None

    def test_missing_token_raises_before_request(self, tmp_path: Path):
        client = APIClient("https://news.example/api", TokenStore(tmp_path / "c.json"))
        with patch("urllib.request.urlopen") as mock_urlopen:
            with pytest.raises(NotAuthenticatedError):
                client.get("/articles")
        mock_urlopen.assert_not_called()

    def test_empty_body_returns_none(self, client: APIClient):
        with patch("urllib.request.urlopen", return_value=_response(None)):
            assert client.delete("/tags/3") is None


class TestErrors:
    def test_http_error_carries_backend_message(self, client: APIClient):
        error = _http_error(409, {"message": "Slug already exists"})
        with patch("urllib.request.urlopen", side_effect=error):
            with pytest.raises(APIError) as exc_info:
                client.post("/tags", {"name": "x"})

        assert exc_info.value.status == 409
        assert exc_info.value.message == "Slug already exists"
        assert exc_info.value.backend_message == "Slug already exists"

    def test_http_error_without_message(self, client: APIClient):
        with patch("urllib.request.urlopen", side_effect=_http_error(500, {})):
            with pytest.raises(APIError) as exc_info:
                client.get("/articles")

        assert exc_info.value.status == 500
        assert exc_info.value.backend_message is None

    def test_url_error_becomes_network_error(self, client: APIClient):
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("refused")):
            with pytest.raises(NetworkError):
                client.get("/articles")

    def test_timeout_becomes_network_error(self, client: APIClient):
        with patch("urllib.request.urlopen", side_effect=TimeoutError("slow")):
            with pytest.raises(NetworkError):
                client.get("/articles")

    def test_non_json_success_body(self, client: APIClient):
        html = MagicMock()
        html.read.return_value = b"<html>proxy</html>"
        html.status = 200
        html.__enter__ = lambda s: s
        html.__exit__ = MagicMock(return_value=False)
        with patch("urllib.request.urlopen", return_value=html):
            with pytest.raises(UnexpectedResponseError) as exc_info:
                client.get("/articles")

        assert isinstance(exc_info.value, APIError)
        assert exc_info.value.status == 200
        assert exc_info.value.payload == "<html>proxy</html>"
        assert exc_info.value.backend_message is None


class TestUpload:
    def test_multipart_uses_file_field(self, client: APIClient, tmp_path: Path):
        photo = tmp_path / "photo.png"
        photo.write_bytes(b"\x89PNGdata")
        with patch("urllib.request.urlopen", return_value=_response({"url": "/u/photo.png"})) as mock_urlopen:
            result = client.upload("/media/upload", photo)

        assert result == {"url": "/u/photo.png"}
        req = mock_urlopen.call_args[0][0]
        assert req.full_url == "https://news.example/api/media/upload"
        assert req.get_header("Content-type").startswith("multipart/form-data; boundary=")
        assert req.get_header("Authorization") == "Bearer tok-123"
        assert b'name="file"; filename="photo.png"' in req.data
        assert b"Content-Type: image/png" in req.data
        assert b"\x89PNGdata" in req.data
