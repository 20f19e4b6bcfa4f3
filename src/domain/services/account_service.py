"""Account sign-up, sign-in and sign-out."""

import structlog

from core.config import settings
from core.exceptions import ValidationError
from domain.email_policy import is_allowed_email, normalize_email
from domain.entities.identity import AuthSession
from domain.repositories.identity_provider import IIdentityProvider

logger = structlog.get_logger()

ACCOUNT_CREATED_MESSAGE = "Account created! Now sign in."


class AccountService:
    """Service layer for account entry points.

    The allow-list is checked before the identity provider is ever called, so a
    rejected address never reaches the provider.
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        allowed_domain: str = settings.allowed_email_domain,
        min_password_length: int = settings.min_password_length,
    ) -> None:
        self._identity_provider = identity_provider
        self._allowed_domain = allowed_domain
        self._min_password_length = min_password_length

    async def sign_up(self, email: str, password: str) -> str:
        """Create an account and return the confirmation message."""
        normalized = normalize_email(email)
        if not is_allowed_email(normalized, self._allowed_domain):
            raise ValidationError(
                f"Coyote Connection is restricted to C of I emails ({self._allowed_domain}).",
                field="email",
            )
        if len(password) < self._min_password_length:
            raise ValidationError(
                f"Password must be at least {self._min_password_length} characters.",
                field="password",
            )

        await self._identity_provider.sign_up(normalized, password)
        logger.info("account_created", email_domain=self._allowed_domain)
        return ACCOUNT_CREATED_MESSAGE

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Open a session for an allowed account."""
        normalized = normalize_email(email)
        if not is_allowed_email(normalized, self._allowed_domain):
            raise ValidationError(
                f"You must sign in with a C of I email ({self._allowed_domain}).",
                field="email",
            )

        session = await self._identity_provider.sign_in_with_password(normalized, password)
        logger.info("signed_in", user_id=str(session.identity.id))
        return session

    async def sign_out(self, access_token: str) -> None:
        """Terminate the caller's session."""
        await self._identity_provider.sign_out(access_token)
