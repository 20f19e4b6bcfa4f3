"""Dashboard route."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentSession
from api.dependencies.services import get_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import Dashboard, DashboardResponse, ProfileResponse
from core.rate_limit import limiter
from domain.formatting import display_name
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Dashboard summary",
    responses={401: {"model": ErrorResponse, "description": "Redirect to sign-in"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_dashboard(
    request: Request,
    session: CurrentSession,
    service: ProfileService = Depends(get_profile_service),
) -> DashboardResponse:
    """Own profile card and post count."""
    profile, post_count = await service.get_dashboard(session.identity)
    return DashboardResponse(
        data=Dashboard(
            profile=ProfileResponse.model_validate(profile),
            display_name=display_name(profile.full_name),
            post_count=post_count,
        )
    )
