"""Supabase Auth (GoTrue) implementation of the identity provider."""

from uuid import UUID

import httpx
import structlog

from core.config import settings
from core.exceptions import StoreError
from domain.entities.identity import AuthSession, Identity
from infrastructure.auth.jwt_provider import JWTVerifier
from infrastructure.supabase_http import raise_for_store_error, send

logger = structlog.get_logger()

SOURCE = "identity_provider"

# GoTrue answers these for expired, revoked or unknown sessions
_NO_SESSION_STATUSES = frozenset({401, 403, 404})


class SupabaseIdentityProvider:
    """IIdentityProvider backed by the Supabase Auth REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        verifier: JWTVerifier,
        auth_url: str = settings.supabase_auth_url,
        api_key: str = settings.supabase_anon_key,
    ) -> None:
        self._client = client
        self._verifier = verifier
        self._auth_url = auth_url.rstrip("/")
        self._api_key = api_key

    async def get_current_identity(self, access_token: str | None) -> Identity | None:
        """Resolve the live session behind ``access_token``.

        The token is verified locally first so garbage and expired tokens never
        leave the process; GoTrue is then asked whether the session still exists,
        which catches sign-outs and revocations.
        """
        if not access_token:
            return None
        if await self._verifier.verify(access_token) is None:
            return None

        request = self._client.build_request(
            "GET",
            f"{self._auth_url}/user",
            headers=self._headers(access_token),
        )
        response = await send(self._client, request, SOURCE)
        if response.status_code in _NO_SESSION_STATUSES:
            return None
        raise_for_store_error(response, SOURCE)
        return _identity_from_user(response.json())

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        request = self._client.build_request(
            "POST",
            f"{self._auth_url}/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            headers=self._headers(),
        )
        response = await send(self._client, request, SOURCE)
        raise_for_store_error(response, SOURCE, keep_client_status=True)

        body = response.json()
        return AuthSession(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token", ""),
            expires_in=int(body.get("expires_in", 0)),
            identity=_identity_from_user(body["user"]),
        )

    async def sign_up(self, email: str, password: str) -> None:
        request = self._client.build_request(
            "POST",
            f"{self._auth_url}/signup",
            json={"email": email, "password": password},
            headers=self._headers(),
        )
        response = await send(self._client, request, SOURCE)
        raise_for_store_error(response, SOURCE, keep_client_status=True)

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session. An already-dead session counts as signed out."""
        request = self._client.build_request(
            "POST",
            f"{self._auth_url}/logout",
            params={"scope": "local"},
            headers=self._headers(access_token),
        )
        response = await send(self._client, request, SOURCE)
        if response.status_code in _NO_SESSION_STATUSES:
            logger.debug("sign_out_session_already_gone", status=response.status_code)
            return
        raise_for_store_error(response, SOURCE)

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        headers = {"apikey": self._api_key}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers


def _identity_from_user(user: dict) -> Identity:
    try:
        return Identity(id=UUID(user["id"]), email=user.get("email") or "")
    except (KeyError, TypeError, ValueError) as exc:
        raise StoreError("Malformed user record from identity provider", source=SOURCE) from exc
