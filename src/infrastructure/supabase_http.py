"""Shared HTTP plumbing for the Supabase REST adapters."""

import httpx

from core.config import settings
from core.exceptions import StoreError


def create_http_client(timeout: float = settings.supabase_timeout_seconds) -> httpx.AsyncClient:
    """Client shared by the auth and storage adapters for the app's lifetime."""
    return httpx.AsyncClient(timeout=timeout)


def error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a Supabase error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("error_description", "msg", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return f"HTTP {response.status_code}"


def raise_for_store_error(
    response: httpx.Response,
    source: str,
    keep_client_status: bool = False,
) -> None:
    """Map a non-2xx Supabase response to StoreError.

    With ``keep_client_status`` a 4xx answer keeps its status instead of 502;
    used where the failure comes from what the user typed.
    """
    if response.is_success:
        return
    status_code = 502
    if keep_client_status and response.is_client_error:
        status_code = response.status_code
    raise StoreError(
        error_message(response),
        source=source,
        upstream_status=response.status_code,
        status_code=status_code,
    )


async def send(client: httpx.AsyncClient, request: httpx.Request, source: str) -> httpx.Response:
    """Send a request, turning transport failures into StoreError."""
    try:
        return await client.send(request)
    except httpx.HTTPError as exc:
        raise StoreError(
            f"Could not reach {source.replace('_', ' ')}: {exc}",
            source=source,
        ) from exc
