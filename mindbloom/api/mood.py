"""Mood tracking API endpoints."""

from datetime import UTC, datetime, timedelta

from fastapi import APIRouter, Query, status
from sqlalchemy import func

from mindbloom.api.dependencies import CurrentUserId, DbSession
from mindbloom.api.ownership import get_owned, owned_query
from mindbloom.models.enums import Mood, MoodSource
from mindbloom.models.mood import MoodEntry
from mindbloom.schemas.mood import (
    MoodEntryCreate,
    MoodEntryResponse,
    MoodEntryUpdate,
    MoodSummaryResponse,
)

router = APIRouter(prefix="/api/v1/mood", tags=["mood"])


def window_start(days: int) -> datetime:
    return datetime.now(UTC) - timedelta(days=days)


@router.get("", response_model=list[MoodEntryResponse])
def get_mood_entries(
    current_user_id: CurrentUserId,
    db: DbSession,
    days: int = Query(default=7, ge=1, le=365, description="Trailing window in days"),
):
    """Get the caller's mood entries within the window, newest first."""
    return (
        owned_query(db, MoodEntry, current_user_id)
        .filter(MoodEntry.created_at >= window_start(days))
        .order_by(MoodEntry.created_at.desc())
        .all()
    )


@router.get("/summary", response_model=MoodSummaryResponse)
def get_mood_summary(
    current_user_id: CurrentUserId,
    db: DbSession,
    days: int = Query(default=7, ge=1, le=365),
):
    """Count the caller's moods over the window."""
    rows = (
        db.query(MoodEntry.mood, func.count(MoodEntry.id))
        .filter(
            MoodEntry.user_id == current_user_id,
            MoodEntry.created_at >= window_start(days),
        )
        .group_by(MoodEntry.mood)
        .all()
    )
    counts = {mood.value: 0 for mood in Mood}
    counts.update(dict(rows))
    return MoodSummaryResponse(days=days, total=sum(counts.values()), counts=counts)


@router.post("", response_model=MoodEntryResponse, status_code=status.HTTP_201_CREATED)
def create_mood_entry(
    mood_data: MoodEntryCreate,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Log a mood."""
    entry = MoodEntry(
        user_id=current_user_id,
        mood=mood_data.mood.value,
        notes=mood_data.notes,
        source=MoodSource.MANUAL.value,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


@router.patch("/{mood_id}", response_model=MoodEntryResponse)
def update_mood_entry(
    mood_id: str,
    mood_data: MoodEntryUpdate,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Update a mood entry."""
    entry = get_owned(db, MoodEntry, mood_id, current_user_id, "Mood entry not found")

    for field, value in mood_data.model_dump(mode="json", exclude_unset=True).items():
        setattr(entry, field, value)

    db.commit()
    db.refresh(entry)
    return entry


@router.delete("/{mood_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_mood_entry(
    mood_id: str,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Delete a mood entry."""
    entry = get_owned(db, MoodEntry, mood_id, current_user_id, "Mood entry not found")
    db.delete(entry)
    db.commit()
