"""Journal entry schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JournalEntryCreate(BaseModel):
    """Create a new journal entry."""

    title: str | None = Field(None, max_length=255)
    content: str = Field(..., min_length=1, max_length=50000)
    tags: list[str] = Field(default_factory=list, max_length=20)


class JournalEntryUpdate(BaseModel):
    """Update a journal entry.

    Only fields present in the request are changed; an explicit null clears
    the title.
    """

    title: str | None = Field(None, max_length=255)
    content: str | None = Field(None, min_length=1, max_length=50000)
    tags: list[str] | None = Field(None, max_length=20)

    @field_validator("content", "tags")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("cannot be null")
        return value


class JournalEntryResponse(BaseModel):
    """Journal entry response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str | None
    content: str
    mood: str | None
    tags: list[str]
    created_at: datetime
    updated_at: datetime
