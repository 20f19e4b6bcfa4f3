"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from domain.entities.post import Post
from domain.entities.profile import PostAuthor
from domain.formatting import display_name, initial, time_ago


class PostAuthorResponse(BaseModel):
    """Author summary embedded in a post."""

    id: UUID
    full_name: str | None = None
    avatar_url: str | None = None
    display_name: str
    initial: str


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "content": "hello",
                "image_url": None,
                "created_at": "2026-01-28T10:00:00",
                "time_ago": "5m",
                "author": {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "full_name": "Alex Coyote",
                    "avatar_url": None,
                    "display_name": "Alex Coyote",
                    "initial": "A",
                },
                "is_mine": True,
            }
        },
    )

    id: UUID
    user_id: UUID
    content: str | None = None
    image_url: str | None = None
    created_at: datetime
    time_ago: str
    author: PostAuthorResponse | None = None
    is_mine: bool = False


class PostListResponse(BaseModel):
    """Schema for list of Posts."""

    data: list[PostResponse]


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    data: PostResponse


def author_response(author: PostAuthor | None) -> PostAuthorResponse | None:
    if author is None:
        return None
    return PostAuthorResponse(
        id=author.id,
        full_name=author.full_name,
        avatar_url=author.avatar_url,
        display_name=display_name(author.full_name),
        initial=initial(author.full_name),
    )


def post_response(
    post: Post,
    author: PostAuthor | None,
    viewer_id: UUID | None = None,
    now: datetime | None = None,
) -> PostResponse:
    """Build the wire shape of a post as seen by ``viewer_id``."""
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        content=post.content,
        image_url=post.image_url,
        created_at=post.created_at,
        time_ago=time_ago(post.created_at, now),
        author=author_response(author),
        is_mine=viewer_id is not None and post.user_id == viewer_id,
    )
