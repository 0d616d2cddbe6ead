"""Mood entry model."""

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from mindbloom.database import Base
from mindbloom.models.mixins import IdMixin, TimestampMixin


class MoodEntry(Base, IdMixin, TimestampMixin):
    """Mood history record, either logged by hand or derived from a journal entry."""

    __tablename__ = "mood_entries"

    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    mood = Column(String(20), nullable=False)  # see enums.Mood
    notes = Column(Text, nullable=True)
    source = Column(String(20), nullable=False, default="manual")  # 'manual', 'journal'
    journal_entry_id = Column(
        String(36), ForeignKey("journal_entries.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    owner = relationship("User", back_populates="mood_entries")
    journal_entry = relationship("JournalEntry", back_populates="derived_moods")
