"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import PostAuthor, Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by identity id. ``None`` means no such record."""
        ...

    async def get_author(self, id: UUID) -> PostAuthor | None:
        """Get the public author summary for a profile."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Insert a profile. Raises DuplicateProfileError if the id exists."""
        ...

    async def update_details(
        self,
        id: UUID,
        full_name: str | None,
        major: str | None,
        grad_year: int | None,
        bio: str | None,
    ) -> Profile:
        """Write name, major, grad year and bio only. Raises ProfileNotFoundError."""
        ...

    async def set_avatar_url(self, id: UUID, avatar_url: str) -> Profile:
        """Write the avatar URL only. Raises ProfileNotFoundError."""
        ...
