"""User profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mindbloom.models.enums import Theme


class UserResponse(BaseModel):
    """Public-safe user projection. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None
    profile_image_url: str | None = None
    theme: str
    language: str
    created_at: datetime


class UserProfileUpdate(BaseModel):
    """Profile fields a user may change about themselves.

    Only fields present in the request are changed; an explicit null clears
    the name or profile image.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, max_length=255)
    profile_image_url: str | None = Field(None, max_length=2048)
    theme: Theme | None = None
    language: str | None = Field(None, min_length=2, max_length=10)

    @field_validator("theme", "language")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("cannot be null")
        return value


class AuthorResponse(BaseModel):
    """Minimal author info shown next to public content."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None
    profile_image_url: str | None = None
