from typing import Protocol

from chosen_arrows.domain.entities import Identity


class IdentityPort(Protocol):
    """The backend's authentication service."""

    def sign_in(self, email: str, password: str) -> Identity | None:
        """Verify credentials. Returns None when they do not match."""
        ...

    def resolve(self, token: str | None) -> Identity | None:
        """Identity behind a session token, or None."""
        ...

    def issue_token(self, identity: Identity) -> str:
        """Create a session token for an identity."""
        ...
