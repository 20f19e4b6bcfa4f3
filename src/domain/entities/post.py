"""Post domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.profile import PostAuthor


@dataclass
class Post:
    """Domain entity for a feed post. Immutable once stored."""

    user_id: UUID
    content: str | None = None
    image_url: str | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class PostWithAuthor:
    """Read-only value object: a Post joined with its author's profile."""

    post: Post
    author: PostAuthor | None
