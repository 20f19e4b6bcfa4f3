"""Supabase Storage implementation of the blob store."""

from urllib.parse import quote

import httpx

from core.config import settings
from infrastructure.supabase_http import raise_for_store_error, send

SOURCE = "blob_store"


class SupabaseBlobStore:
    """IBlobStore backed by the Supabase Storage REST API.

    Buckets are expected to be public; objects are addressed by
    ``<bucket>/<path>``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        storage_url: str = settings.supabase_storage_url,
        api_key: str = settings.supabase_service_role_key or settings.supabase_anon_key,
    ) -> None:
        self._client = client
        self._storage_url = storage_url.rstrip("/")
        self._api_key = api_key

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> None:
        request = self._client.build_request(
            "POST",
            f"{self._storage_url}/object/{bucket}/{quote(path)}",
            content=data,
            headers={
                "apikey": self._api_key,
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": content_type,
                "x-upsert": "true" if upsert else "false",
            },
        )
        response = await send(self._client, request, SOURCE)
        raise_for_store_error(response, SOURCE)

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self._storage_url}/object/public/{bucket}/{quote(path)}"
