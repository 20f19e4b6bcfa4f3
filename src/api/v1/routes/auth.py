"""Account API routes: sign-up, sign-in, sign-out."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import AccessToken
from api.dependencies.services import get_account_service
from api.v1.schemas.auth import AuthSessionResponse, Credentials, IdentityResponse
from api.v1.schemas.common import ErrorResponse, MessageResponse
from core.exceptions import SIGN_IN_PATH
from core.rate_limit import limiter
from domain.services.account_service import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/sign-up",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Email not allowed or weak password"},
        502: {"model": ErrorResponse, "description": "Identity provider rejected the request"},
    },
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def sign_up(
    request: Request,
    body: Credentials,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Create an account for an institutional email address."""
    message = await service.sign_up(body.email, body.password)
    return MessageResponse(message=message, redirect_to=SIGN_IN_PATH)


@router.post(
    "/sign-in",
    response_model=AuthSessionResponse,
    summary="Sign in with email and password",
    responses={
        400: {"model": ErrorResponse, "description": "Email not allowed"},
        502: {"model": ErrorResponse, "description": "Invalid credentials or provider failure"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def sign_in(
    request: Request,
    body: Credentials,
    service: AccountService = Depends(get_account_service),
) -> AuthSessionResponse:
    """Open a session. The returned access token goes in the Authorization header."""
    session = await service.sign_in(body.email, body.password)
    return AuthSessionResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
        user=IdentityResponse(id=session.identity.id, email=session.identity.email),
    )


@router.post(
    "/sign-out",
    response_model=MessageResponse,
    summary="Sign out",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def sign_out(
    request: Request,
    access_token: AccessToken,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Terminate the current session."""
    await service.sign_out(access_token)
    return MessageResponse(message="Signed out", redirect_to=SIGN_IN_PATH)
