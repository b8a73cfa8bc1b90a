"""HTTP gateway to the finance backend."""

from api.client import ApiClient
from api.errors import (
    AuthorizationFailure,
    GatewayError,
    NetworkFailure,
    NotFound,
    ServerFailure,
    StaleResponse,
    ValidationFailure,
)

__all__ = [
    "ApiClient",
    "AuthorizationFailure",
    "GatewayError",
    "NetworkFailure",
    "NotFound",
    "ServerFailure",
    "StaleResponse",
    "ValidationFailure",
]
