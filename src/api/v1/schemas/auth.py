"""Pydantic schemas for account API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Email/password pair for sign-up and sign-in."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class IdentityResponse(BaseModel):
    """Schema for the signed-in account."""

    id: UUID
    email: str


class AuthSessionResponse(BaseModel):
    """Schema for a newly opened session."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIs...",
                "refresh_token": "v1.MRjVPm...",
                "token_type": "bearer",
                "expires_in": 3600,
                "user": {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "email": "a@yotes.collegeofidaho.edu",
                },
                "redirect_to": "/dashboard",
            }
        },
    )

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    user: IdentityResponse
    redirect_to: str = "/dashboard"
