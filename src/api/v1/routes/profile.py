"""Own-profile API routes."""

from fastapi import APIRouter, Depends, File, Request, UploadFile

from api.dependencies.auth import CurrentSession
from api.dependencies.services import get_profile_service
from api.dependencies.uploads import read_image
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import ProfileDetailResponse, ProfileResponse, ProfileUpdate
from core.config import settings
from core.exceptions import ValidationError
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "",
    response_model=ProfileDetailResponse,
    summary="Get own profile",
    responses={401: {"model": ErrorResponse, "description": "Redirect to sign-in"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile(request: Request, session: CurrentSession) -> ProfileDetailResponse:
    """Own profile, created with empty fields on the first visit."""
    return ProfileDetailResponse(data=ProfileResponse.model_validate(session.profile))


@router.patch(
    "",
    response_model=ProfileDetailResponse,
    summary="Save own profile",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid field value"},
        401: {"model": ErrorResponse, "description": "Redirect to sign-in"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    body: ProfileUpdate,
    session: CurrentSession,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Save name, major, graduation year and bio."""
    profile = await service.update(
        session.identity,
        full_name=body.full_name,
        major=body.major,
        grad_year=body.grad_year,
        bio=body.bio,
    )
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile), message="Saved")


@router.post(
    "/avatar",
    response_model=ProfileDetailResponse,
    summary="Upload avatar image",
    responses={
        400: {"model": ErrorResponse, "description": "Not an image or too big"},
        401: {"model": ErrorResponse, "description": "Redirect to sign-in"},
        502: {"model": ErrorResponse, "description": "Storage failure"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upload_avatar(
    request: Request,
    session: CurrentSession,
    file: UploadFile = File(...),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Replace the avatar. Square images look best (max 3MB)."""
    image = await read_image(file, settings.avatar_max_bytes)
    if image is None:
        raise ValidationError("Please choose an image file.", field="avatar")
    profile = await service.upload_avatar(session.identity, image)
    return ProfileDetailResponse(
        data=ProfileResponse.model_validate(profile),
        message="Avatar updated",
    )
