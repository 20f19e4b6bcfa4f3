"""Identity provider protocol."""

from typing import Protocol

from domain.entities.identity import AuthSession, Identity


class IIdentityProvider(Protocol):
    """Hosted authentication service holding accounts and sessions.

    Failures other than "no session" raise StoreError.
    """

    async def get_current_identity(self, access_token: str | None) -> Identity | None:
        """Resolve the identity behind a session token, or None if there is no live session."""
        ...

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Open a session for an existing account."""
        ...

    async def sign_up(self, email: str, password: str) -> None:
        """Create an account."""
        ...

    async def sign_out(self, access_token: str) -> None:
        """Terminate the session behind ``access_token``."""
        ...
