"""SQLAlchemy models."""

from mindbloom.models.ai_conversation import AiConversation
from mindbloom.models.community import CommunityPost, PostComment, PostLike
from mindbloom.models.journal import JournalEntry
from mindbloom.models.mood import MoodEntry
from mindbloom.models.user import User

__all__ = [
    "User",
    "JournalEntry",
    "MoodEntry",
    "CommunityPost",
    "PostLike",
    "PostComment",
    "AiConversation",
]
