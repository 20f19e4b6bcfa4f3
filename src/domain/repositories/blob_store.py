"""Blob store protocol."""

from typing import Protocol


class IBlobStore(Protocol):
    """Object storage for avatars and post images."""

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> None:
        """Store an object. Raises StoreError on failure."""
        ...

    def get_public_url(self, bucket: str, path: str) -> str:
        """Public retrieval URL for a stored object."""
        ...
