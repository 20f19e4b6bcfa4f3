"""SQLAlchemy implementation of Profile repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateProfileError, ProfileNotFoundError
from domain.entities.profile import PostAuthor, Profile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_author(self, id: UUID) -> PostAuthor | None:
        """Get the public author summary for a profile."""
        stmt = select(ProfileModel.id, ProfileModel.full_name, ProfileModel.avatar_url).where(
            ProfileModel.id == id
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return PostAuthor(id=row.id, full_name=row.full_name, avatar_url=row.avatar_url)

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise DuplicateProfileError(str(profile.id)) from exc
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update_details(
        self,
        id: UUID,
        full_name: str | None,
        major: str | None,
        grad_year: int | None,
        bio: str | None,
    ) -> Profile:
        """Update the editable text fields, leaving the avatar untouched."""
        return await self._update_columns(
            id,
            full_name=full_name,
            major=major,
            grad_year=grad_year,
            bio=bio,
        )

    async def set_avatar_url(self, id: UUID, avatar_url: str) -> Profile:
        """Point the profile at a new avatar image, leaving other fields untouched."""
        return await self._update_columns(id, avatar_url=avatar_url)

    async def _update_columns(self, id: UUID, **values: Any) -> Profile:
        stmt = update(ProfileModel).where(ProfileModel.id == id).values(**values)
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ProfileNotFoundError(str(id))

        query = (
            select(ProfileModel)
            .where(ProfileModel.id == id)
            .execution_options(populate_existing=True)
        )
        model = (await self._session.execute(query)).scalar_one()
        return self._to_entity(model)

    async def _get_model(self, id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            email=model.email,
            full_name=model.full_name,
            major=model.major,
            grad_year=model.grad_year,
            bio=model.bio,
            avatar_url=model.avatar_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            email=entity.email,
            full_name=entity.full_name,
            major=entity.major,
            grad_year=entity.grad_year,
            bio=entity.bio,
            avatar_url=entity.avatar_url,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
