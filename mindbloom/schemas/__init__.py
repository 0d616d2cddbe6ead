"""Pydantic schemas for API requests and responses."""

from mindbloom.schemas.ai import ChatRequest, ChatResponse, ConversationResponse, QuoteResponse
from mindbloom.schemas.auth import AuthResponse, GoogleLogin, UserLogin, UserRegister
from mindbloom.schemas.community import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
)
from mindbloom.schemas.journal import JournalEntryCreate, JournalEntryResponse, JournalEntryUpdate
from mindbloom.schemas.mood import (
    MoodEntryCreate,
    MoodEntryResponse,
    MoodEntryUpdate,
    MoodSummaryResponse,
)
from mindbloom.schemas.user import AuthorResponse, UserProfileUpdate, UserResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "GoogleLogin",
    "AuthResponse",
    "UserResponse",
    "UserProfileUpdate",
    "AuthorResponse",
    "JournalEntryCreate",
    "JournalEntryUpdate",
    "JournalEntryResponse",
    "MoodEntryCreate",
    "MoodEntryUpdate",
    "MoodEntryResponse",
    "MoodSummaryResponse",
    "PostCreate",
    "PostUpdate",
    "PostResponse",
    "LikeResponse",
    "CommentCreate",
    "CommentResponse",
    "ChatRequest",
    "ChatResponse",
    "ConversationResponse",
    "QuoteResponse",
]
