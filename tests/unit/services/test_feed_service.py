"""Unit tests for FeedService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import PostNotFoundError, StoreError, ValidationError
from domain.entities.post import Post, PostWithAuthor
from domain.entities.profile import Profile
from domain.entities.upload import ImageUpload
from domain.services.feed_service import FeedService
from tests.fakes import FakeBlobStore
from tests.unit.conftest import FakeUnitOfWork

MB = 1024 * 1024


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def service(uow: FakeUnitOfWork, blob_store: FakeBlobStore) -> FeedService:
    return FeedService(
        lambda: uow,
        blob_store,
        post_images_bucket="post-images",
        post_max_length=400,
        post_image_max_bytes=5 * MB,
        feed_limit=50,
    )


@pytest.fixture(autouse=True)
def _echo_create(uow: FakeUnitOfWork) -> None:
    async def create(post: Post) -> Post:
        return post

    uow.posts.create.side_effect = create


def _photo(size: int = 10, content_type: str = "image/jpeg") -> ImageUpload:
    return ImageUpload(filename="pic.jpg", content_type=content_type, data=b"x" * size)


# --- list_feed ---


class TestListFeed:
    @pytest.mark.asyncio
    async def test_uses_configured_limit_by_default(self, service: FeedService, uow: FakeUnitOfWork):
        uow.posts.list_recent.return_value = []

        await service.list_feed()

        uow.posts.list_recent.assert_called_once_with(50)

    @pytest.mark.parametrize(("requested", "effective"), [(10, 10), (500, 50), (0, 1)])
    @pytest.mark.asyncio
    async def test_clamps_requested_limit(
        self, service: FeedService, uow: FakeUnitOfWork, requested: int, effective: int
    ):
        uow.posts.list_recent.return_value = []

        await service.list_feed(requested)

        uow.posts.list_recent.assert_called_once_with(effective)

    @pytest.mark.asyncio
    async def test_returns_repository_order(self, service: FeedService, uow: FakeUnitOfWork):
        items = [
            PostWithAuthor(post=Post(user_id=uuid4(), content="newer"), author=None),
            PostWithAuthor(post=Post(user_id=uuid4(), content="older"), author=None),
        ]
        uow.posts.list_recent.return_value = items

        assert await service.list_feed() == items


# --- validate_draft ---


class TestValidateDraft:
    def test_trims_text(self, service: FeedService):
        assert service.validate_draft("  hello  ", None) == "hello"

    @pytest.mark.parametrize("content", [None, "", "   \n\t"])
    def test_rejects_empty_post(self, service: FeedService, content):
        with pytest.raises(ValidationError) as exc_info:
            service.validate_draft(content, None)

        assert exc_info.value.message == "Write something or add a photo."

    def test_accepts_exactly_max_length(self, service: FeedService):
        assert len(service.validate_draft("a" * 400, None)) == 400

    def test_rejects_one_over_max_length(self, service: FeedService):
        with pytest.raises(ValidationError) as exc_info:
            service.validate_draft("a" * 401, None)

        assert exc_info.value.message == "Posts are limited to 400 characters."

    def test_length_counts_trimmed_text(self, service: FeedService):
        assert service.validate_draft("  " + "a" * 400 + "  ", None) == "a" * 400

    def test_image_only_draft_is_valid(self, service: FeedService):
        assert service.validate_draft("   ", _photo()) == ""

    def test_rejects_oversized_photo(self, service: FeedService):
        with pytest.raises(ValidationError) as exc_info:
            service.validate_draft("hi", _photo(size=5 * MB + 1))

        assert exc_info.value.message == "Image is too big. Max 5MB."


# --- create_post ---


class TestCreatePost:
    @pytest.mark.asyncio
    async def test_creates_text_post(
        self, service: FeedService, uow: FakeUnitOfWork, blob_store: FakeBlobStore, profile: Profile
    ):
        result = await service.create_post(profile, "  hello  ")

        assert result.post.content == "hello"
        assert result.post.image_url is None
        assert result.post.user_id == profile.id
        assert result.author is not None
        assert result.author.full_name == "Alex Coyote"
        assert blob_store.uploads == []
        assert uow.committed

    @pytest.mark.asyncio
    async def test_image_only_post_stores_null_content(
        self, service: FeedService, blob_store: FakeBlobStore, profile: Profile
    ):
        result = await service.create_post(profile, "   ", _photo())

        assert result.post.content is None
        bucket, path, content_type, upsert = blob_store.uploads[0]
        assert bucket == "post-images"
        assert path.startswith(f"{profile.id}/")
        assert upsert is False
        assert result.post.image_url == blob_store.get_public_url(bucket, path)

    @pytest.mark.asyncio
    async def test_failed_upload_writes_no_row(
        self, service: FeedService, uow: FakeUnitOfWork, blob_store: FakeBlobStore, profile: Profile
    ):
        blob_store.fail_uploads = True

        with pytest.raises(StoreError):
            await service.create_post(profile, "with photo", _photo())

        uow.posts.create.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_invalid_draft_touches_nothing(
        self, service: FeedService, uow: FakeUnitOfWork, blob_store: FakeBlobStore, profile: Profile
    ):
        with pytest.raises(ValidationError):
            await service.create_post(profile, "x", _photo(content_type="text/plain"))

        assert blob_store.uploads == []
        uow.posts.create.assert_not_called()


# --- delete_post ---


class TestDeletePost:
    @pytest.mark.asyncio
    async def test_deletes_own_post(self, service: FeedService, uow: FakeUnitOfWork, user_id: UUID):
        post_id = uuid4()
        uow.posts.delete_owned.return_value = True

        await service.delete_post(post_id, user_id, confirmed=True)

        uow.posts.delete_owned.assert_called_once_with(post_id, user_id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_requires_confirmation(self, service: FeedService, uow: FakeUnitOfWork, user_id: UUID):
        with pytest.raises(ValidationError) as exc_info:
            await service.delete_post(uuid4(), user_id, confirmed=False)

        assert exc_info.value.details == {"field": "confirm"}
        uow.posts.delete_owned.assert_not_called()

    @pytest.mark.asyncio
    async def test_foreign_or_missing_post_is_not_found(
        self, service: FeedService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.delete_owned.return_value = False

        with pytest.raises(PostNotFoundError):
            await service.delete_post(uuid4(), user_id, confirmed=True)

        assert not uow.committed
