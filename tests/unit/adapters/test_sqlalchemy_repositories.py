"""Tests for the SQLAlchemy repositories and unit of work against SQLite."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import DuplicateProfileError, ProfileNotFoundError, StoreError
from domain.entities.post import Post
from domain.entities.profile import Profile
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


@pytest.fixture
def uow_factory(session_factory: async_sessionmaker[AsyncSession]):
    return lambda: SQLAlchemyUnitOfWork(session_factory)


async def _add_profile(uow_factory, full_name: str | None = "Alex") -> Profile:
    profile = Profile(id=uuid4(), email="a@yotes.collegeofidaho.edu", full_name=full_name)
    async with uow_factory() as uow:
        created = await uow.profiles.create(profile)
        await uow.commit()
    return created


class TestProfileRepository:
    async def test_create_and_get(self, uow_factory):
        created = await _add_profile(uow_factory)

        async with uow_factory() as uow:
            fetched = await uow.profiles.get(created.id)

        assert fetched is not None
        assert fetched.full_name == "Alex"

    async def test_get_missing_returns_none(self, uow_factory):
        async with uow_factory() as uow:
            assert await uow.profiles.get(uuid4()) is None
            assert await uow.profiles.get_author(uuid4()) is None

    async def test_duplicate_id_raises_duplicate_profile_error(self, uow_factory):
        created = await _add_profile(uow_factory)

        with pytest.raises(DuplicateProfileError):
            async with uow_factory() as uow:
                await uow.profiles.create(Profile.blank(created.id, created.email))
                await uow.commit()

    async def test_update_details_leaves_avatar_untouched(self, uow_factory):
        created = await _add_profile(uow_factory)
        async with uow_factory() as uow:
            await uow.profiles.set_avatar_url(created.id, "https://x/a.png")
            await uow.commit()

        async with uow_factory() as uow:
            updated = await uow.profiles.update_details(
                created.id, full_name="Alex C", major="Biology", grad_year=2028, bio=None
            )
            await uow.commit()

        assert updated.major == "Biology"
        assert updated.avatar_url == "https://x/a.png"
        async with uow_factory() as uow:
            fetched = await uow.profiles.get(created.id)
        assert fetched is not None
        assert fetched.grad_year == 2028
        assert fetched.avatar_url == "https://x/a.png"

    async def test_set_avatar_url_leaves_details_untouched(self, uow_factory):
        created = await _add_profile(uow_factory, full_name="Alex")

        async with uow_factory() as uow:
            updated = await uow.profiles.set_avatar_url(created.id, "https://x/b.png")
            await uow.commit()

        assert updated.full_name == "Alex"
        async with uow_factory() as uow:
            author = await uow.profiles.get_author(created.id)
        assert author is not None
        assert author.full_name == "Alex"
        assert author.avatar_url == "https://x/b.png"

    async def test_writing_missing_profile_raises_not_found(self, uow_factory):
        missing = uuid4()

        with pytest.raises(ProfileNotFoundError) as exc_info:
            async with uow_factory() as uow:
                await uow.profiles.set_avatar_url(missing, "https://x/c.png")

        assert exc_info.value.status_code == 404
        assert exc_info.value.details == {"user_id": str(missing)}

    async def test_out_of_range_grad_year_is_rejected_by_store(self, uow_factory):
        created = await _add_profile(uow_factory)

        with pytest.raises(StoreError):
            async with uow_factory() as uow:
                await uow.profiles.update_details(
                    created.id, full_name=None, major=None, grad_year=1850, bio=None
                )
                await uow.commit()


class TestPostRepository:
    async def test_list_recent_is_newest_first_with_authors(self, uow_factory):
        author = await _add_profile(uow_factory, full_name="Jo")
        base = datetime(2026, 3, 1, 12, 0, 0)

        async with uow_factory() as uow:
            for minutes, text in [(0, "oldest"), (5, "middle"), (10, "newest")]:
                await uow.posts.create(
                    Post(user_id=author.id, content=text, created_at=base + timedelta(minutes=minutes))
                )
            await uow.commit()

        async with uow_factory() as uow:
            items = await uow.posts.list_recent(2)

        assert [item.post.content for item in items] == ["newest", "middle"]
        assert items[0].author is not None
        assert items[0].author.full_name == "Jo"

    async def test_list_for_user_and_count(self, uow_factory):
        mine = await _add_profile(uow_factory)
        other = await _add_profile(uow_factory)

        async with uow_factory() as uow:
            await uow.posts.create(Post(user_id=mine.id, content="a"))
            await uow.posts.create(Post(user_id=mine.id, image_url="https://x/p.png"))
            await uow.posts.create(Post(user_id=other.id, content="c"))
            await uow.commit()

        async with uow_factory() as uow:
            posts = await uow.posts.list_for_user(mine.id, 50)
            count = await uow.posts.count_for_user(mine.id)

        assert len(posts) == 2
        assert {post.user_id for post in posts} == {mine.id}
        assert count == 2

    async def test_delete_owned_only_removes_own_post(self, uow_factory):
        owner = await _add_profile(uow_factory)
        stranger = await _add_profile(uow_factory)

        async with uow_factory() as uow:
            post = await uow.posts.create(Post(user_id=owner.id, content="mine"))
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.posts.delete_owned(post.id, stranger.id) is False
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.posts.get(post.id) is not None
            assert await uow.posts.delete_owned(post.id, owner.id) is True
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.posts.get(post.id) is None

    async def test_empty_post_is_rejected_by_store(self, uow_factory):
        author = await _add_profile(uow_factory)

        with pytest.raises(StoreError):
            async with uow_factory() as uow:
                await uow.posts.create(Post(user_id=author.id))
                await uow.commit()

    async def test_blank_text_only_post_is_rejected_by_store(self, uow_factory):
        author = await _add_profile(uow_factory)

        with pytest.raises(StoreError):
            async with uow_factory() as uow:
                await uow.posts.create(Post(user_id=author.id, content="   "))
                await uow.commit()

    async def test_image_only_post_is_accepted_by_store(self, uow_factory):
        author = await _add_profile(uow_factory)

        async with uow_factory() as uow:
            created = await uow.posts.create(
                Post(user_id=author.id, content=None, image_url="https://x/p.png")
            )
            await uow.commit()

        assert created.image_url == "https://x/p.png"


class TestUnitOfWork:
    async def test_uncommitted_changes_are_discarded(self, uow_factory):
        profile = Profile(id=uuid4(), email="a@yotes.collegeofidaho.edu")

        async with uow_factory() as uow:
            await uow.profiles.create(profile)

        async with uow_factory() as uow:
            assert await uow.profiles.get(profile.id) is None

    async def test_repositories_require_context(self, session_factory):
        uow = SQLAlchemyUnitOfWork(session_factory)

        with pytest.raises(RuntimeError):
            uow.profiles
