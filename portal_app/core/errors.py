"""Exception types raised by the portal core."""

from __future__ import annotations


class PortalApiError(Exception):
    """Base class for failures talking to the external portal API."""


class ApiTransportError(PortalApiError):
    """The request never produced an HTTP response (network failure, timeout)."""


class ApiResponseError(PortalApiError):
    """The server answered with an error status or an embedded error field."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionClosedError(RuntimeError):
    """Raised when a candidate operation targets a session that is no longer active."""


class ApiBusinessError(ApiResponseError):
    """A successful response whose body carries an ``{error}`` field instead of data."""
