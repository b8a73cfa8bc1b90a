"""Errors raised by the API client.

Every failed request surfaces as exactly one of these. Only
AuthorizationFailure has a side effect: the session is cleared before it is
raised.
"""

from typing import Optional


class GatewayError(Exception):
    """Base class for all request failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkFailure(GatewayError):
    """No response was received (connection refused, DNS, timeout)."""


class AuthorizationFailure(GatewayError):
    """The server rejected the credentials (401/403). The session has been cleared."""


class ValidationFailure(GatewayError):
    """The server rejected the request (4xx) with a message for the user."""


class NotFound(ValidationFailure):
    """The requested resource does not exist (404)."""


class ServerFailure(GatewayError):
    """The server failed to handle the request (5xx)."""


class StaleResponse(GatewayError):
    """The response belongs to a session that ended while the request was in flight.

    Callers should drop it without touching any state.
    """
