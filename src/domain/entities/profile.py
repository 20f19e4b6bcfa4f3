"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

GRAD_YEAR_MIN = 2000
GRAD_YEAR_MAX = 2100


@dataclass
class Profile:
    """Domain entity for a user profile, keyed by the identity id."""

    id: UUID
    email: str
    full_name: str | None = None
    major: str | None = None
    grad_year: int | None = None
    bio: str | None = None
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def blank(cls, id: UUID, email: str) -> "Profile":
        """The default profile inserted the first time an identity shows up."""
        return cls(
            id=id,
            email=email,
            full_name="",
            major="",
            grad_year=None,
            bio="",
            avatar_url=None,
        )

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True, slots=True)
class PostAuthor:
    """Read-only author summary shown next to posts and on profile pages."""

    id: UUID
    full_name: str | None = None
    avatar_url: str | None = None
