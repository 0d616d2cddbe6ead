"""User model."""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from mindbloom.database import Base
from mindbloom.models.mixins import IdMixin, TimestampMixin


class User(Base, IdMixin, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    # Null for accounts that only ever signed in through Google
    password_hash = Column(String(255), nullable=True)
    name = Column(String(255), nullable=True)
    profile_image_url = Column(Text, nullable=True)
    theme = Column(String(20), nullable=False, default="dark")
    language = Column(String(10), nullable=False, default="en")

    # Owned rows go with the account
    journal_entries = relationship(
        "JournalEntry", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
    mood_entries = relationship(
        "MoodEntry", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
    posts = relationship(
        "CommunityPost", back_populates="author", cascade="all, delete-orphan", passive_deletes=True
    )
    post_likes = relationship(
        "PostLike", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    post_comments = relationship(
        "PostComment", back_populates="author", cascade="all, delete-orphan", passive_deletes=True
    )
    ai_conversations = relationship(
        "AiConversation", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
