"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Session gate (401)
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    EMAIL_NOT_ALLOWED = "EMAIL_NOT_ALLOWED"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Collaborator failures (502)
    STORE_ERROR = "STORE_ERROR"

    # Conflict errors (409)
    PROFILE_CONFLICT = "PROFILE_CONFLICT"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


SIGN_IN_PATH = "/sign-in"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """The session gate denied the request; the client must go to sign-in."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.NOT_AUTHENTICATED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
            details={"redirect_to": SIGN_IN_PATH},
        )


class ValidationError(AppException):
    """User input was rejected before reaching any collaborator."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details={"field": field} if field else None,
        )


class StoreError(AppException):
    """An external collaborator (auth, records, blobs) reported a failure."""

    def __init__(
        self,
        message: str,
        source: str,
        upstream_status: int | None = None,
        error_code: ErrorCode = ErrorCode.STORE_ERROR,
        status_code: int = 502,
    ) -> None:
        details: dict[str, Any] = {"source": source}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status_code,
            details=details,
        )


class DuplicateProfileError(StoreError):
    """A profile row with this id already exists."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            message=f"Profile already exists: {profile_id}",
            source="record_store",
            error_code=ErrorCode.PROFILE_CONFLICT,
            status_code=409,
        )
        self.profile_id = profile_id


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="User not found.",
            status_code=404,
            details={"user_id": user_id},
        )


class PostNotFoundError(AppException):
    """Post not found (or not owned by the acting user)."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message=f"Post not found: {post_id}",
            status_code=404,
            details={"post_id": post_id},
        )
