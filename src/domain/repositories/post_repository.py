"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Post, PostWithAuthor


class IPostRepository(Protocol):
    """Repository interface for Post entities."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def list_recent(self, limit: int) -> list[PostWithAuthor]:
        """Newest posts first, joined with their author profile."""
        ...

    async def list_for_user(self, user_id: UUID, limit: int) -> list[Post]:
        """Newest posts by a single author."""
        ...

    async def count_for_user(self, user_id: UUID) -> int:
        """Number of posts by a single author."""
        ...

    async def create(self, post: Post) -> Post:
        """Insert a post."""
        ...

    async def delete_owned(self, id: UUID, user_id: UUID) -> bool:
        """Delete a post only if ``user_id`` owns it. Returns whether a row went away."""
        ...
