"""Journal API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mindbloom.api.dependencies import CurrentUserId, DbSession, get_mood_analysis_service
from mindbloom.api.ownership import get_owned, owned_query
from mindbloom.models.enums import MoodSource
from mindbloom.models.journal import JournalEntry
from mindbloom.models.mood import MoodEntry
from mindbloom.schemas.journal import JournalEntryCreate, JournalEntryResponse, JournalEntryUpdate
from mindbloom.services.mood_analysis import MoodAnalysisService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/journal", tags=["journal"])


def record_derived_mood(db: Session, entry: JournalEntry) -> MoodEntry | None:
    """Add the entry's mood to the mood history.

    Written in its own commit after the entry is saved; losing it only loses
    a history point, so failures are logged and swallowed.
    """
    mood_entry = MoodEntry(
        user_id=entry.user_id,
        mood=entry.mood,
        notes=f"From journal: {entry.title or 'Untitled entry'}",
        source=MoodSource.JOURNAL.value,
        journal_entry_id=entry.id,
    )
    try:
        db.add(mood_entry)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to record derived mood for journal entry {entry.id}: {e}")
        return None
    return mood_entry


@router.get("", response_model=list[JournalEntryResponse])
def get_entries(
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Get the caller's journal entries, newest first."""
    return (
        owned_query(db, JournalEntry, current_user_id)
        .order_by(JournalEntry.created_at.desc())
        .all()
    )


@router.post("", response_model=JournalEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_data: JournalEntryCreate,
    current_user_id: CurrentUserId,
    db: DbSession,
    mood_service: Annotated[MoodAnalysisService, Depends(get_mood_analysis_service)],
):
    """Create a journal entry and classify its mood."""
    analysis = await mood_service.analyze(entry_data.content)

    entry = JournalEntry(
        user_id=current_user_id,
        title=entry_data.title,
        content=entry_data.content,
        tags=entry_data.tags,
        mood=analysis["mood"],
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)

    record_derived_mood(db, entry)
    db.refresh(entry)
    return entry


@router.get("/{entry_id}", response_model=JournalEntryResponse)
def get_entry(
    entry_id: str,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Get a single journal entry."""
    return get_owned(db, JournalEntry, entry_id, current_user_id, "Journal entry not found")


@router.patch("/{entry_id}", response_model=JournalEntryResponse)
async def update_entry(
    entry_id: str,
    entry_data: JournalEntryUpdate,
    current_user_id: CurrentUserId,
    db: DbSession,
    mood_service: Annotated[MoodAnalysisService, Depends(get_mood_analysis_service)],
):
    """Update a journal entry. Changed content is re-classified."""
    entry = get_owned(db, JournalEntry, entry_id, current_user_id, "Journal entry not found")

    updates = entry_data.model_dump(exclude_unset=True)
    content_changed = "content" in updates and updates["content"] != entry.content

    for field, value in updates.items():
        setattr(entry, field, value)

    if content_changed:
        analysis = await mood_service.analyze(entry.content)
        entry.mood = analysis["mood"]

    db.commit()
    db.refresh(entry)

    if content_changed:
        record_derived_mood(db, entry)
        db.refresh(entry)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    entry_id: str,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Delete a journal entry. Mood history derived from it is kept."""
    entry = get_owned(db, JournalEntry, entry_id, current_user_id, "Journal entry not found")
    db.delete(entry)
    db.commit()
