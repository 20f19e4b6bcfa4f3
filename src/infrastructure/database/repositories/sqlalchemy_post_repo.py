"""SQLAlchemy implementation of Post repository."""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.post import Post, PostWithAuthor
from domain.entities.profile import PostAuthor
from infrastructure.database.models import PostModel, ProfileModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_recent(self, limit: int) -> list[PostWithAuthor]:
        """Newest posts first, joined with their author profile."""
        stmt = (
            select(
                PostModel,
                ProfileModel.id,
                ProfileModel.full_name,
                ProfileModel.avatar_url,
            )
            .outerjoin(ProfileModel, PostModel.user_id == ProfileModel.id)
            .order_by(PostModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)

        items = []
        for model, author_id, full_name, avatar_url in result:
            author = None
            if author_id is not None:
                author = PostAuthor(id=author_id, full_name=full_name, avatar_url=avatar_url)
            items.append(PostWithAuthor(post=self._to_entity(model), author=author))
        return items

    async def list_for_user(self, user_id: UUID, limit: int) -> list[Post]:
        """Newest posts by a single author."""
        stmt = (
            select(PostModel)
            .where(PostModel.user_id == user_id)
            .order_by(PostModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count_for_user(self, user_id: UUID) -> int:
        """Number of posts by a single author."""
        stmt = select(func.count()).select_from(PostModel).where(PostModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = self._to_model(post)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete_owned(self, id: UUID, user_id: UUID) -> bool:
        """Delete a post if it belongs to ``user_id``."""
        stmt = delete(PostModel).where(PostModel.id == id, PostModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return (result.rowcount or 0) > 0

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            content=model.content,
            image_url=model.image_url,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Post) -> PostModel:
        """Convert domain entity to ORM model."""
        return PostModel(
            id=entity.id,
            user_id=entity.user_id,
            content=entity.content,
            image_url=entity.image_url,
            created_at=entity.created_at,
        )
