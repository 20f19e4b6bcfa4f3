"""Read-only profile pages."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentIdentity
from api.dependencies.services import get_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.post import author_response, post_response
from api.v1.schemas.profile import PublicProfile, PublicProfileResponse
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/{user_id}",
    response_model=PublicProfileResponse,
    summary="View a user's profile",
    responses={
        401: {"model": ErrorResponse, "description": "Redirect to sign-in"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_user(
    request: Request,
    user_id: UUID,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> PublicProfileResponse:
    """A user's name, avatar and posts, newest first."""
    author, posts = await service.get_public_profile(user_id)
    now = datetime.utcnow()
    return PublicProfileResponse(
        data=PublicProfile(
            profile=author_response(author),  # type: ignore[arg-type]
            posts=[post_response(post, author, identity.id, now) for post in posts],
        )
    )
