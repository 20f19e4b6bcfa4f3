"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.post import PostAuthorResponse, PostResponse
from domain.entities.profile import GRAD_YEAR_MAX, GRAD_YEAR_MIN


class ProfileUpdate(BaseModel):
    """Schema for saving the profile form. Omitted fields are cleared."""

    full_name: str | None = Field(None, max_length=100)
    major: str | None = Field(None, max_length=100)
    grad_year: int | None = Field(None, ge=GRAD_YEAR_MIN, le=GRAD_YEAR_MAX)
    bio: str | None = Field(None, max_length=1000)


class ProfileResponse(BaseModel):
    """Schema for the owner's full profile."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "a@yotes.collegeofidaho.edu",
                "full_name": "Alex Coyote",
                "major": "Biology",
                "grad_year": 2028,
                "bio": "Pre-med, climbing, coffee.",
                "avatar_url": None,
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    email: str
    full_name: str | None = None
    major: str | None = None
    grad_year: int | None = None
    bio: str | None = None
    avatar_url: str | None = None
    created_at: datetime


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile with an optional status message."""

    data: ProfileResponse
    message: str | None = None


class PublicProfile(BaseModel):
    """Read-only profile page body."""

    profile: PostAuthorResponse
    posts: list[PostResponse]


class PublicProfileResponse(BaseModel):
    """Schema for the read-only profile page."""

    data: PublicProfile


class Dashboard(BaseModel):
    """Dashboard body."""

    profile: ProfileResponse
    display_name: str
    post_count: int


class DashboardResponse(BaseModel):
    """Schema for the dashboard."""

    data: Dashboard
