"""Uploaded file payloads."""

from dataclasses import dataclass

DEFAULT_IMAGE_EXTENSION = "jpg"


@dataclass(frozen=True, slots=True)
class ImageUpload:
    """An image payload received from the client."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_image(self) -> bool:
        return self.content_type.lower().startswith("image/")

    @property
    def extension(self) -> str:
        """File extension used to build the storage path."""
        _, dot, ext = self.filename.rpartition(".")
        ext = ext.strip().lower()
        if not dot or not ext.isalnum():
            return DEFAULT_IMAGE_EXTENSION
        return ext
