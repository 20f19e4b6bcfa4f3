"""Session gate: admits only live sessions whose email passes the allow-list."""

from dataclasses import dataclass
from enum import StrEnum

import structlog

from core.config import settings
from core.exceptions import StoreError
from domain.email_policy import is_allowed_email
from domain.entities.identity import Identity
from domain.repositories.identity_provider import IIdentityProvider

logger = structlog.get_logger()


class DenialReason(StrEnum):
    """Why a protected page may not be shown."""

    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    EMAIL_NOT_ALLOWED = "EMAIL_NOT_ALLOWED"


@dataclass(frozen=True, slots=True)
class Denied:
    """Gate outcome telling the caller to send the user to sign-in."""

    reason: DenialReason


class SessionGate:
    """Resolves the current identity for every protected request.

    Nothing is cached between calls: tokens expire and sessions get revoked
    between navigations, so each page asks the identity provider again.
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        allowed_domain: str = settings.allowed_email_domain,
    ) -> None:
        self._identity_provider = identity_provider
        self._allowed_domain = allowed_domain

    async def resolve(self, access_token: str | None) -> Identity | Denied:
        """Return the signed-in identity, or Denied with the reason."""
        identity = None
        if access_token:
            identity = await self._identity_provider.get_current_identity(access_token)

        if identity is None:
            return Denied(DenialReason.NOT_AUTHENTICATED)

        if not is_allowed_email(identity.email, self._allowed_domain):
            # A session for a disallowed email must not outlive this check
            try:
                await self._identity_provider.sign_out(access_token)  # type: ignore[arg-type]
            except StoreError as exc:
                logger.warning(
                    "session_sign_out_failed",
                    user_id=str(identity.id),
                    error=exc.message,
                )
            logger.info("session_denied", user_id=str(identity.id), reason="email_not_allowed")
            return Denied(DenialReason.EMAIL_NOT_ALLOWED)

        return identity
