"""Per-request session context for protected pages."""

from dataclasses import dataclass

from domain.entities.identity import Identity
from domain.entities.profile import Profile
from domain.services.profile_service import ProfileService
from domain.services.session_gate import Denied, SessionGate


@dataclass(frozen=True, slots=True)
class SessionContext:
    """The signed-in identity and its profile, passed explicitly to each handler."""

    identity: Identity
    profile: Profile


async def enter_protected_page(
    gate: SessionGate,
    profiles: ProfileService,
    access_token: str | None,
) -> SessionContext | Denied:
    """Run the session gate, then bootstrap the profile. Denied skips the bootstrap."""
    outcome = await gate.resolve(access_token)
    if isinstance(outcome, Denied):
        return outcome
    profile = await profiles.get_or_create(outcome)
    return SessionContext(identity=outcome, profile=profile)
