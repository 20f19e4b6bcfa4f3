"""Client-side feed state: loading flags, in-flight guard, optimistic deletes."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable
from uuid import UUID

import structlog

from core.config import settings
from core.exceptions import AppException
from domain.entities.post import PostWithAuthor
from domain.entities.upload import ImageUpload
from domain.services.feed_service import FeedService
from domain.views.context import SessionContext

logger = structlog.get_logger()

POSTED_MESSAGE = "Posted"
DELETED_MESSAGE = "Deleted"


@dataclass(frozen=True, slots=True)
class StatusMessage:
    """Inline message shown near a control.

    Success messages clear themselves after a short delay; errors stay until
    the next attempt replaces them.
    """

    text: str
    is_error: bool = False
    expires_at: datetime | None = None

    @classmethod
    def success(cls, text: str, now: datetime, ttl_seconds: float) -> "StatusMessage":
        return cls(text=text, expires_at=now + timedelta(seconds=ttl_seconds))

    @classmethod
    def error(cls, text: str) -> "StatusMessage":
        return cls(text=text, is_error=True)

    def visible(self, now: datetime) -> bool:
        return self.expires_at is None or now < self.expires_at


class FeedView:
    """State behind the feed page for one signed-in session.

    All mutations come from this session's own completed operations: a full
    replace after load/create and a local removal after delete.
    """

    def __init__(
        self,
        context: SessionContext,
        feed_service: FeedService,
        message_ttl_seconds: float = settings.status_message_ttl_seconds,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self.context = context
        self._feed_service = feed_service
        self._message_ttl_seconds = message_ttl_seconds
        self._clock = clock
        self.posts: list[PostWithAuthor] = []
        self.loading = False
        self.posting = False
        self.status: StatusMessage | None = None

    @property
    def status_text(self) -> str | None:
        """The message to render right now, if any."""
        if self.status is None or not self.status.visible(self._clock()):
            return None
        return self.status.text

    def can_post(self, content: str | None, image: ImageUpload | None = None) -> bool:
        """Whether the Post button is enabled."""
        return not self.posting and (bool((content or "").strip()) or image is not None)

    def is_mine(self, item: PostWithAuthor) -> bool:
        """Only the author sees the delete action."""
        return item.post.user_id == self.context.identity.id

    async def load(self) -> None:
        """Fetch the feed and replace the local list."""
        self.loading = True
        try:
            self.posts = await self._feed_service.list_feed()
        except AppException as exc:
            self.status = StatusMessage.error(exc.message)
        finally:
            self.loading = False

    async def submit(self, content: str | None, image: ImageUpload | None = None) -> bool:
        """Create a post from the composer. Returns whether it was published.

        A second submit while one is in flight is ignored.
        """
        if self.posting:
            return False

        self.posting = True
        self.status = None
        try:
            await self._feed_service.create_post(self.context.profile, content, image)
        except AppException as exc:
            self.status = StatusMessage.error(exc.message)
            logger.info("post_submit_failed", error_code=exc.error_code.value)
            return False
        finally:
            self.posting = False

        await self.load()
        if self.status is None or not self.status.is_error:
            self.status = StatusMessage.success(
                POSTED_MESSAGE, self._clock(), self._message_ttl_seconds
            )
        return True

    async def delete(self, post_id: UUID, confirmed: bool) -> bool:
        """Delete one of our posts and drop it from the list without re-fetching."""
        if not confirmed:
            return False

        self.status = None
        try:
            await self._feed_service.delete_post(
                post_id, self.context.identity.id, confirmed=True
            )
        except AppException as exc:
            self.status = StatusMessage.error(exc.message)
            return False

        self.posts = [item for item in self.posts if item.post.id != post_id]
        self.status = StatusMessage.success(
            DELETED_MESSAGE, self._clock(), self._message_ttl_seconds
        )
        return True
