"""Session store: the single owner of login state."""

import base64
from typing import Callable, List, Optional
from models.session import Session
from storage.manager import AUTH_HEADER_KEY, USERNAME_KEY
from logger import get_logger

logger = get_logger()


def build_basic_auth_header(principal: str, secret: str) -> str:
    """Derive an HTTP Basic authorization header value.

    Args:
        principal: Username.
        secret: Password.

    Returns:
        ``"Basic " + base64(principal:secret)``.
    """
    raw = f"{principal}:{secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


class SessionStore:
    """Holds the current session and keeps durable storage in sync with it.

    The store is the only way to change the session. Login and logout each
    bump ``generation`` so in-flight requests can tell whether the session they
    were issued under is still the current one.

    Args:
        storage: Durable key/value storage (StorageManager or a test double).
    """

    def __init__(self, storage):
        """Initialize the store in the unauthenticated state.

        Args:
            storage: Object with get/set/remove/clear methods.
        """
        self.storage = storage
        self._session = Session.anonymous()
        self._generation = 0
        self._logout_listeners: List[Callable[[], None]] = []

    @property
    def session(self) -> Session:
        return self._session

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def login(self, principal: str, secret: str) -> None:
        """Derive a credential token and persist the session.

        No network round trip happens here; bad credentials are discovered when
        the next request is rejected.

        Args:
            principal: Username.
            secret: Password. Only the derived token is kept.
        """
        token = build_basic_auth_header(principal, secret)

        self.storage.set(AUTH_HEADER_KEY, token)
        self.storage.set(USERNAME_KEY, principal)

        self._session = Session.authenticated(principal, token)
        self._generation += 1
        logger.info(f"Logged in as {principal}")

    def logout(self) -> None:
        """Clear the session and durable storage. Safe to call repeatedly."""
        self.storage.remove(AUTH_HEADER_KEY)
        self.storage.remove(USERNAME_KEY)

        if not self._session.is_authenticated:
            return

        identity = self._session.identity
        self._session = Session.anonymous()
        self._generation += 1
        logger.info(f"Logged out {identity}")

        for listener in self._logout_listeners:
            listener()

    def restore(self) -> Session:
        """Rebuild the session from durable storage.

        Both the token and the username must be present; otherwise the
        session is unauthenticated. An empty username counts as present, the
        same as at login, so any session login creates restores unchanged.

        Returns:
            The restored session.
        """
        token = self.storage.get(AUTH_HEADER_KEY)
        identity = self.storage.get(USERNAME_KEY)

        if token is not None and identity is not None:
            self._session = Session.authenticated(identity, token)
            logger.debug(f"Restored session for {identity}")
        else:
            self._session = Session.anonymous()

        self._generation += 1
        return self._session

    def current_token(self) -> Optional[str]:
        """The credential token for the Authorization header, if logged in."""
        return self._session.credential_token

    def add_logout_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every effective logout."""
        self._logout_listeners.append(listener)
