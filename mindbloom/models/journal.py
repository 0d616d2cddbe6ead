"""Journal entry model."""

from sqlalchemy import JSON, Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from mindbloom.database import Base
from mindbloom.models.mixins import IdMixin, TimestampMixin


class JournalEntry(Base, IdMixin, TimestampMixin):
    """A private journal entry, tagged with the mood its text was classified as."""

    __tablename__ = "journal_entries"

    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    mood = Column(String(20), nullable=True)
    tags = Column(JSON, nullable=False, default=list)

    # Relationships
    owner = relationship("User", back_populates="journal_entries")
    derived_moods = relationship("MoodEntry", back_populates="journal_entry", passive_deletes=True)
