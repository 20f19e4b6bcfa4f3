"""Profile service: lazy bootstrap, editing, avatars and public profile pages."""

from typing import Callable
from uuid import UUID

import structlog

from core.config import settings
from core.exceptions import (
    DuplicateProfileError,
    ProfileNotFoundError,
    StoreError,
    ValidationError,
)
from domain.entities.identity import Identity
from domain.entities.post import Post
from domain.entities.profile import GRAD_YEAR_MAX, GRAD_YEAR_MIN, PostAuthor, Profile
from domain.entities.upload import ImageUpload
from domain.repositories.blob_store import IBlobStore
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.uploads import avatar_path, validate_image

logger = structlog.get_logger()


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        blob_store: IBlobStore,
        avatars_bucket: str = settings.avatars_bucket,
        avatar_max_bytes: int = settings.avatar_max_bytes,
        feed_limit: int = settings.feed_limit,
    ) -> None:
        self._uow_factory = uow_factory
        self._blob_store = blob_store
        self._avatars_bucket = avatars_bucket
        self._avatar_max_bytes = avatar_max_bytes
        self._feed_limit = feed_limit

    async def get_or_create(self, identity: Identity) -> Profile:
        """Fetch the identity's profile, creating the blank default on first visit.

        Only a missing row triggers creation; any other read failure propagates
        and nothing is inserted. If a concurrent request inserts the same id
        first, the existing row is fetched instead of failing the page.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(identity.id)
        if profile is not None:
            return profile

        try:
            async with self._uow_factory() as uow:
                await uow.profiles.create(Profile.blank(identity.id, identity.email))
                await uow.commit()
            logger.info("profile_bootstrapped", user_id=str(identity.id))
        except DuplicateProfileError:
            logger.warning("profile_bootstrap_conflict", user_id=str(identity.id))

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(identity.id)
        if profile is None:
            raise StoreError(
                "Profile could not be loaded after creation",
                source="record_store",
            )
        return profile

    async def update(
        self,
        identity: Identity,
        full_name: str | None,
        major: str | None,
        grad_year: int | None,
        bio: str | None,
    ) -> Profile:
        """Save the editable profile fields."""
        if grad_year is not None and not GRAD_YEAR_MIN <= grad_year <= GRAD_YEAR_MAX:
            raise ValidationError(
                f"Graduation year must be between {GRAD_YEAR_MIN} and {GRAD_YEAR_MAX}.",
                field="grad_year",
            )

        await self.get_or_create(identity)
        async with self._uow_factory() as uow:
            updated = await uow.profiles.update_details(
                identity.id,
                full_name=full_name,
                major=major,
                grad_year=grad_year,
                bio=bio,
            )
            await uow.commit()
        logger.info("profile_updated", user_id=str(identity.id))
        return updated

    async def upload_avatar(self, identity: Identity, image: ImageUpload) -> Profile:
        """Replace the avatar image. Nothing changes if validation or upload fails."""
        validate_image(image, self._avatar_max_bytes, field="avatar")

        await self.get_or_create(identity)
        path = avatar_path(identity.id, image)
        await self._blob_store.upload(
            self._avatars_bucket,
            path,
            image.data,
            content_type=image.content_type,
            upsert=True,
        )
        avatar_url = self._blob_store.get_public_url(self._avatars_bucket, path)

        async with self._uow_factory() as uow:
            updated = await uow.profiles.set_avatar_url(identity.id, avatar_url)
            await uow.commit()
        logger.info("avatar_updated", user_id=str(identity.id), path=path)
        return updated

    async def get_public_profile(self, user_id: UUID) -> tuple[PostAuthor, list[Post]]:
        """Read-only profile page: author summary plus their posts, newest first."""
        async with self._uow_factory() as uow:
            author = await uow.profiles.get_author(user_id)
            if author is None:
                raise ProfileNotFoundError(str(user_id))
            posts = await uow.posts.list_for_user(user_id, self._feed_limit)
        return author, posts

    async def get_dashboard(self, identity: Identity) -> tuple[Profile, int]:
        """Own profile and how many posts it has authored."""
        profile = await self.get_or_create(identity)
        async with self._uow_factory() as uow:
            post_count = await uow.posts.count_for_user(identity.id)
        return profile, post_count
