"""Client-side state for the own-profile editor."""

from datetime import datetime
from typing import Callable

from core.config import settings
from core.exceptions import AppException
from domain.entities.upload import ImageUpload
from domain.services.profile_service import ProfileService
from domain.views.context import SessionContext
from domain.views.feed_view import StatusMessage

SAVED_MESSAGE = "Saved"
AVATAR_UPDATED_MESSAGE = "Avatar updated"


class ProfileView:
    """Editor state: the working profile copy, the upload flag and the status line."""

    def __init__(
        self,
        context: SessionContext,
        profile_service: ProfileService,
        message_ttl_seconds: float = settings.status_message_ttl_seconds,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self.context = context
        self.profile = context.profile
        self._profile_service = profile_service
        self._message_ttl_seconds = message_ttl_seconds
        self._clock = clock
        self.uploading = False
        self.status: StatusMessage | None = None

    @property
    def status_text(self) -> str | None:
        if self.status is None or not self.status.visible(self._clock()):
            return None
        return self.status.text

    async def save(
        self,
        full_name: str | None,
        major: str | None,
        grad_year: int | None,
        bio: str | None,
    ) -> bool:
        self.status = None
        try:
            self.profile = await self._profile_service.update(
                self.context.identity, full_name, major, grad_year, bio
            )
        except AppException as exc:
            self.status = StatusMessage.error(exc.message)
            return False
        self.status = StatusMessage.success(
            SAVED_MESSAGE, self._clock(), self._message_ttl_seconds
        )
        return True

    async def upload_avatar(self, image: ImageUpload) -> bool:
        if self.uploading:
            return False

        self.uploading = True
        self.status = None
        try:
            self.profile = await self._profile_service.upload_avatar(
                self.context.identity, image
            )
        except AppException as exc:
            self.status = StatusMessage.error(exc.message)
            return False
        finally:
            self.uploading = False

        self.status = StatusMessage.success(
            AVATAR_UPDATED_MESSAGE, self._clock(), self._message_ttl_seconds
        )
        return True
