"""Session model describing who is logged in."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Session:
    """Snapshot of the current authentication state.

    Attributes:
        is_authenticated: True only when both identity and credential_token are set.
        identity: Principal (username) of the logged-in user.
        credential_token: Authorization header value derived at login. The raw
            secret is never kept.
    """

    is_authenticated: bool
    identity: Optional[str] = None
    credential_token: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "Session":
        """The unauthenticated session."""
        return cls(is_authenticated=False)

    @classmethod
    def authenticated(cls, identity: str, credential_token: str) -> "Session":
        return cls(
            is_authenticated=True,
            identity=identity,
            credential_token=credential_token,
        )
