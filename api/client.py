"""Async HTTP client for the finance backend."""

from typing import Any, Dict, Optional
import httpx
from config import Config
from api.errors import (
    AuthorizationFailure,
    NetworkFailure,
    NotFound,
    ServerFailure,
    StaleResponse,
    ValidationFailure,
)
from logger import get_logger

logger = get_logger()

_AUTHORIZATION_STATUSES = (401, 403)


class ApiClient:
    """Sends requests on behalf of the current session.

    Every request carries the session's Authorization header when there is
    one. Responses are classified into the errors in ``api.errors``; a 401 or
    403 logs the session out. Nothing is retried.

    Args:
        config: Application configuration (base URL and timeout).
        session_store: SessionStore providing the token and generation.
        transport: Optional httpx transport, used by tests to fake the backend.
    """

    def __init__(self, config: Config, session_store, transport=None):
        """Initialize the client.

        Args:
            config: Config object with api_base_url and request_timeout.
            session_store: Session store to read the token from and log out on
                authorization failure.
            transport: Optional httpx.AsyncBaseTransport for dependency injection.
        """
        self.session_store = session_store
        self._client = httpx.AsyncClient(
            base_url=config.api_base_url,
            timeout=config.request_timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> httpx.Response:
        """Send a request and classify the response.

        Args:
            method: HTTP method.
            path: Path relative to the base URL, e.g. "/api/budgets".
            params: Optional query parameters.
            json: Optional JSON body.

        Returns:
            The successful (2xx/3xx) response.

        Raises:
            NetworkFailure: No response was received.
            StaleResponse: The session changed while the request was in flight.
            AuthorizationFailure: 401/403; the session has been logged out.
            NotFound: 404.
            ValidationFailure: Any other 4xx.
            ServerFailure: 5xx.
        """
        generation = self.session_store.generation
        headers = {}
        token = self.session_store.current_token()
        if token:
            headers["Authorization"] = token

        logger.debug(f"{method} {path}")

        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise NetworkFailure(f"Could not reach server: {e}") from e

        if self.session_store.generation != generation:
            logger.debug(
                f"Discarding response to {method} {path}: session ended in flight"
            )
            raise StaleResponse("Session changed before the response arrived")

        status = response.status_code

        if status in _AUTHORIZATION_STATUSES:
            logger.warning(f"{method} {path} rejected with {status}, logging out")
            self.session_store.logout()
            raise AuthorizationFailure(_error_message(response), status)

        if status == 404:
            raise NotFound(_error_message(response), status)

        if 400 <= status < 500:
            raise ValidationFailure(_error_message(response), status)

        if status >= 500:
            logger.error(f"{method} {path} failed with {status}")
            raise ServerFailure(_error_message(response), status)

        return response

    async def get_json(self, path: str, params: Optional[Dict[str, Any]] = None):
        response = await self.request("GET", path, params=params)
        return response.json()

    async def get_text(self, path: str) -> str:
        response = await self.request("GET", path)
        return response.text

    async def post_json(self, path: str, body: Any):
        response = await self.request("POST", path, json=body)
        return response.json()

    async def put_json(self, path: str, body: Any):
        response = await self.request("PUT", path, json=body)
        return response.json()

    async def delete(self, path: str) -> None:
        await self.request("DELETE", path)


def _error_message(response: httpx.Response) -> str:
    """Pull a user-facing message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error"):
            if body.get(key):
                return str(body[key])

    text = response.text.strip()
    if text:
        return text

    return response.reason_phrase or f"HTTP {response.status_code}"
