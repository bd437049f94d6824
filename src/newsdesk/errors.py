"""Error types shared by the API client, services, and pages.

Every failure is eventually rendered as one human-readable string; there is
no structured taxonomy beyond what callers need to decide on a retry.
"""

from __future__ import annotations

DEFAULT_ERROR_MESSAGE = "Something went wrong"
UNEXPECTED_RESPONSE = "Unexpected response from backend"


class NewsdeskError(Exception):
    """Base error for everything raised by newsdesk."""

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class APIError(NewsdeskError):
    """The backend answered, but with an error status or an unusable body."""

    def __init__(
        self,
        message: str = DEFAULT_ERROR_MESSAGE,
        *,
        status: int | None = None,
        payload: object = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload

    @property
    def backend_message(self) -> str | None:
        """The ``message`` (or ``error``) field of the backend's JSON body."""
        if isinstance(self.payload, dict):
            for key in ("message", "error"):
                value = self.payload.get(key)
                if isinstance(value, str) and value.strip():
                    return value
        return None


class UnexpectedResponseError(APIError):
    """A 2xx answer whose body is not the shape the client expects."""

    def __init__(self, *, status: int | None = None, payload: object = None) -> None:
        super().__init__(UNEXPECTED_RESPONSE, status=status, payload=payload)

    @property
    def backend_message(self) -> str | None:
        return None


class NetworkError(NewsdeskError):
    """The request never produced an HTTP response (refused, timed out)."""


class NotAuthenticatedError(NewsdeskError):
    """No token is stored; the user has to log in first."""

    def __init__(self, message: str = "Not logged in. Run `newsdesk login` first.") -> None:
        super().__init__(message)


class ValidationError(NewsdeskError):
    """A form was rejected client-side before any request was sent."""


def error_message(exc: BaseException, fallback: str = DEFAULT_ERROR_MESSAGE) -> str:
    """Render a failure as the single string shown in a page banner.

    The backend's own message wins; otherwise the caller's fallback.
    Client-side rejections carry their own message.
    """
    if isinstance(exc, APIError):
        return exc.backend_message or fallback
    if isinstance(exc, (ValidationError, NotAuthenticatedError)):
        return exc.message
    return fallback
