"""Mood entry schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mindbloom.models.enums import Mood


class MoodEntryCreate(BaseModel):
    """Log a mood by hand."""

    mood: Mood
    notes: str | None = Field(None, max_length=2000)


class MoodEntryUpdate(BaseModel):
    """Update a mood entry. An explicit null clears the notes."""

    mood: Mood | None = None
    notes: str | None = Field(None, max_length=2000)

    @field_validator("mood")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("cannot be null")
        return value


class MoodEntryResponse(BaseModel):
    """Mood entry response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    mood: str
    notes: str | None
    source: str
    journal_entry_id: str | None
    created_at: datetime


class MoodSummaryResponse(BaseModel):
    """Mood counts over a trailing window."""

    days: int
    total: int
    counts: dict[str, int]
