"""Identity and session value objects issued by the identity provider."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Identity:
    """An authenticated account handle. Never mutated by this system."""

    id: UUID
    email: str


@dataclass(frozen=True, slots=True)
class AuthSession:
    """Tokens returned by a successful password sign-in."""

    access_token: str
    refresh_token: str
    expires_in: int
    identity: Identity
