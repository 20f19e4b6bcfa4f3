"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Status message for the form that triggered the request."""

    message: str
    redirect_to: str | None = None
