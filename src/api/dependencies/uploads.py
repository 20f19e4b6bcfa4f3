"""Multipart upload helpers."""

from fastapi import UploadFile

from domain.entities.upload import ImageUpload


async def read_image(file: UploadFile | None, max_bytes: int) -> ImageUpload | None:
    """Read a multipart file part into an ``ImageUpload``.

    Returns None when no file was chosen (missing part or empty filename).
    At most ``max_bytes + 1`` bytes are read, so an oversized part comes back
    one byte over the limit and is rejected by ``validate_image``.
    """
    if file is None or not file.filename:
        return None
    try:
        data = await file.read(max_bytes + 1)
    finally:
        await file.close()
    return ImageUpload(
        filename=file.filename,
        content_type=file.content_type or "application/octet-stream",
        data=data,
    )
