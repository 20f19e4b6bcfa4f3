"""Global feed API routes."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status

from api.dependencies.auth import CurrentIdentity, CurrentSession
from api.dependencies.services import get_feed_service
from api.dependencies.uploads import read_image
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.post import PostDetailResponse, PostListResponse, post_response
from core.config import settings
from core.rate_limit import limiter
from domain.services.feed_service import FeedService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get(
    "",
    response_model=PostListResponse,
    summary="List the global feed",
    responses={401: {"model": ErrorResponse, "description": "Redirect to sign-in"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    identity: CurrentIdentity,
    limit: int = Query(default=settings.feed_limit, ge=1, le=settings.feed_limit),
    service: FeedService = Depends(get_feed_service),
) -> PostListResponse:
    """Most recent posts from everyone, newest first."""
    items = await service.list_feed(limit)
    now = datetime.utcnow()
    return PostListResponse(
        data=[post_response(item.post, item.author, identity.id, now) for item in items]
    )


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={
        201: {"description": "Post created"},
        400: {"model": ErrorResponse, "description": "Empty post, too long, or bad image"},
        401: {"model": ErrorResponse, "description": "Redirect to sign-in"},
        502: {"model": ErrorResponse, "description": "Storage or database failure"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    session: CurrentSession,
    content: str | None = Form(None),
    image: UploadFile | None = File(None),
    service: FeedService = Depends(get_feed_service),
) -> PostDetailResponse:
    """Publish text, a photo, or both. The photo is uploaded before the post is saved."""
    upload = await read_image(image, settings.post_image_max_bytes)
    item = await service.create_post(session.profile, content, upload)
    return PostDetailResponse(data=post_response(item.post, item.author, session.identity.id))


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a post",
    responses={
        204: {"description": "Post deleted"},
        400: {"model": ErrorResponse, "description": "Deletion not confirmed"},
        401: {"model": ErrorResponse, "description": "Redirect to sign-in"},
        404: {"model": ErrorResponse, "description": "Post not found or not yours"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    identity: CurrentIdentity,
    confirm: bool = Query(default=False, description="Must be true to delete"),
    service: FeedService = Depends(get_feed_service),
) -> None:
    """Delete one of your own posts."""
    await service.delete_post(post_id, identity.id, confirmed=confirm)
    return None
