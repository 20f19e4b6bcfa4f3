"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies.services import get_profile_service, get_session_gate
from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.identity import Identity
from domain.services.profile_service import ProfileService
from domain.services.session_gate import DenialReason, Denied, SessionGate
from domain.views.context import SessionContext, enter_protected_page

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

_DENIAL_MESSAGES = {
    DenialReason.NOT_AUTHENTICATED: "Sign in to continue",
    DenialReason.EMAIL_NOT_ALLOWED: "This account's email is not allowed; signed out",
}


def _denied(outcome: Denied) -> AuthenticationError:
    return AuthenticationError(
        message=_DENIAL_MESSAGES[outcome.reason],
        error_code=ErrorCode(outcome.reason.value),
    )


async def get_access_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
) -> str | None:
    """Bearer token from the Authorization header, if any."""
    return credentials.credentials if credentials else None


async def get_current_identity(
    access_token: Annotated[str | None, Depends(get_access_token)],
    gate: SessionGate = Depends(get_session_gate),
) -> Identity:
    """
    Dependency running the session gate for a protected route.

    Raises:
        AuthenticationError: NOT_AUTHENTICATED or EMAIL_NOT_ALLOWED; the body
            tells the client to redirect to sign-in
    """
    outcome = await gate.resolve(access_token)
    if isinstance(outcome, Denied):
        raise _denied(outcome)
    return outcome


async def get_session_context(
    access_token: Annotated[str | None, Depends(get_access_token)],
    gate: SessionGate = Depends(get_session_gate),
    profiles: ProfileService = Depends(get_profile_service),
) -> SessionContext:
    """Dependency running the session gate and the profile bootstrap."""
    outcome = await enter_protected_page(gate, profiles, access_token)
    if isinstance(outcome, Denied):
        raise _denied(outcome)
    return outcome


async def require_access_token(
    access_token: Annotated[str | None, Depends(get_access_token)],
) -> str:
    """Bearer token that must be present (sign-out)."""
    if not access_token:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.NOT_AUTHENTICATED,
        )
    return access_token


# Type aliases for convenience in route handlers
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
CurrentSession = Annotated[SessionContext, Depends(get_session_context)]
AccessToken = Annotated[str, Depends(require_access_token)]
