"""Image validation and storage path rules shared by avatars and post images."""

from uuid import UUID, uuid4

from core.exceptions import ValidationError
from domain.entities.upload import ImageUpload


def validate_image(image: ImageUpload, max_bytes: int, field: str = "image") -> None:
    """Reject non-images and oversized payloads before any upload happens."""
    if not image.is_image:
        raise ValidationError("Please choose an image file.", field=field)
    if image.size > max_bytes:
        raise ValidationError(
            f"Image is too big. Max {_format_megabytes(max_bytes)}.",
            field=field,
        )


def avatar_path(user_id: UUID, image: ImageUpload) -> str:
    """One avatar object per user, overwritten on every upload."""
    return f"{user_id}.{image.extension}"


def post_image_path(user_id: UUID, image: ImageUpload) -> str:
    """Post images live under the author's prefix with a unique name."""
    return f"{user_id}/{uuid4()}.{image.extension}"


def _format_megabytes(num_bytes: int) -> str:
    megabytes = num_bytes / (1024 * 1024)
    if megabytes.is_integer():
        return f"{int(megabytes)}MB"
    return f"{megabytes:.1f}MB"
