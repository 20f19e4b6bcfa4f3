"""JWT verification for Supabase access tokens.

Supports both Supabase-issued JWTs (ES256 via JWKS, or HS256 with the
project's JWT secret) and locally-created tokens (HS256 for tests).

Supabase JWT payload structure:
    {
        "sub": "user-uuid",
        "email": "user@yotes.collegeofidaho.edu",
        "role": "authenticated",
        "aud": "authenticated",
        "session_id": "session-uuid",
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from domain.entities.identity import Identity

logger = logging.getLogger(__name__)

# Module-level JWKS cache (fetched once, reused across requests)
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys() -> dict[str, Any]:
    """Fetch and cache JWKS keys from Supabase."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = settings.supabase_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=settings.supabase_timeout_seconds)
            response.raise_for_status()
            jwks_data = response.json()
            # Build a kid -> key mapping
            _jwks_cache = {}
            for key_data in jwks_data.get("keys", []):
                kid = key_data.get("kid")
                if kid:
                    _jwks_cache[kid] = key_data
            logger.info("Fetched %d JWKS keys from Supabase", len(_jwks_cache))
            return _jwks_cache
    except Exception:
        logger.exception("Failed to fetch JWKS from %s", jwks_url)
        return {}


class JWTVerifier:
    """Checks access token signature and expiry without a network round trip.

    A token that passes is not proof the session is still alive; the
    identity provider confirms that separately.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def verify(self, token: str) -> Optional[Identity]:
        """
        Validate a JWT and extract the identity it was issued for.

        Detects the signing algorithm from the token header:
        - ES256 (Supabase asymmetric keys): validates via JWKS public key
        - HS256 (Supabase legacy secret / tests): validates via shared secret

        Args:
            token: The JWT to validate

        Returns:
            Identity if valid, None if invalid or expired
        """
        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg", self._algorithm)

            if alg == "ES256":
                payload = await self._validate_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )

            if payload is None:
                return None

            user_id = payload.get("sub")
            email = payload.get("email")

            if not user_id or not email:
                return None

            return Identity(id=UUID(user_id), email=email)

        except (JWTError, ValueError):
            return None

    async def _validate_es256(
        self, token: str, header: dict
    ) -> Optional[dict]:
        """Validate an ES256-signed JWT using JWKS public keys."""
        kid = header.get("kid")
        if not kid:
            return None

        jwks_keys = await _get_jwks_keys()
        key_data = jwks_keys.get(kid)
        if not key_data:
            # Key not found, refetch JWKS in case of key rotation
            global _jwks_cache
            _jwks_cache = None
            jwks_keys = await _get_jwks_keys()
            key_data = jwks_keys.get(kid)
            if not key_data:
                logger.warning("JWKS key not found for kid=%s", kid)
                return None

        ec_key = ECKey(key_data, algorithm="ES256")
        return jwt.decode(
            token,
            ec_key,
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, identity: Identity) -> str:
        """
        Create a JWT for an identity (HS256, used for tests and local development).

        Args:
            identity: The identity to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(identity.id),
            "email": identity.email,
            "aud": "authenticated",
            "role": "authenticated",
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
