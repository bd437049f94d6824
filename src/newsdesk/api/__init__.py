"""HTTP layer: the configured REST client and token storage."""

from newsdesk.api.client import APIClient
from newsdesk.api.token import TokenStore

__all__ = ["APIClient", "TokenStore"]
