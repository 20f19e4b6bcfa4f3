"""Global feed: list, create and delete posts."""

from typing import Callable
from uuid import UUID

import structlog

from core.config import settings
from core.exceptions import PostNotFoundError, ValidationError
from domain.entities.post import Post, PostWithAuthor
from domain.entities.profile import PostAuthor, Profile
from domain.entities.upload import ImageUpload
from domain.repositories.blob_store import IBlobStore
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.uploads import post_image_path, validate_image

logger = structlog.get_logger()


class FeedService:
    """Service layer for the shared post feed."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        blob_store: IBlobStore,
        post_images_bucket: str = settings.post_images_bucket,
        post_max_length: int = settings.post_max_length,
        post_image_max_bytes: int = settings.post_image_max_bytes,
        feed_limit: int = settings.feed_limit,
    ) -> None:
        self._uow_factory = uow_factory
        self._blob_store = blob_store
        self._post_images_bucket = post_images_bucket
        self._post_max_length = post_max_length
        self._post_image_max_bytes = post_image_max_bytes
        self._feed_limit = feed_limit

    async def list_feed(self, limit: int | None = None) -> list[PostWithAuthor]:
        """Most recent posts from everyone, newest first."""
        limit = self._feed_limit if limit is None else max(1, min(limit, self._feed_limit))
        async with self._uow_factory() as uow:
            return await uow.posts.list_recent(limit)

    def validate_draft(self, content: str | None, image: ImageUpload | None) -> str:
        """Check a draft without any I/O and return the trimmed text."""
        text = (content or "").strip()
        if not text and image is None:
            raise ValidationError("Write something or add a photo.", field="content")
        if len(text) > self._post_max_length:
            raise ValidationError(
                f"Posts are limited to {self._post_max_length} characters.",
                field="content",
            )
        if image is not None:
            validate_image(image, self._post_image_max_bytes)
        return text

    async def create_post(
        self,
        author: Profile,
        content: str | None,
        image: ImageUpload | None = None,
    ) -> PostWithAuthor:
        """Publish a post, uploading its image first.

        A failed upload aborts before any row is written.
        """
        text = self.validate_draft(content, image)

        image_url = None
        if image is not None:
            path = post_image_path(author.id, image)
            await self._blob_store.upload(
                self._post_images_bucket,
                path,
                image.data,
                content_type=image.content_type,
                upsert=False,
            )
            image_url = self._blob_store.get_public_url(self._post_images_bucket, path)

        post = Post(user_id=author.id, content=text or None, image_url=image_url)
        async with self._uow_factory() as uow:
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info(
            "post_created",
            post_id=str(created.id),
            user_id=str(author.id),
            has_image=image_url is not None,
        )
        return PostWithAuthor(
            post=created,
            author=PostAuthor(
                id=author.id,
                full_name=author.full_name,
                avatar_url=author.avatar_url,
            ),
        )

    async def delete_post(self, post_id: UUID, user_id: UUID, confirmed: bool) -> None:
        """Delete one of the acting user's own posts."""
        if not confirmed:
            raise ValidationError("Confirm deletion to continue.", field="confirm")

        async with self._uow_factory() as uow:
            deleted = await uow.posts.delete_owned(post_id, user_id)
            if not deleted:
                raise PostNotFoundError(str(post_id))
            await uow.commit()
        logger.info("post_deleted", post_id=str(post_id), user_id=str(user_id))
