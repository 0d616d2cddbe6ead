"""Community feed schemas."""

import base64
import binascii
import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mindbloom.schemas.user import AuthorResponse

DATA_URL_RE = re.compile(r"^data:image/(png|jpe?g|gif|webp);base64,(?P<payload>.+)$", re.DOTALL)


class PostCreate(BaseModel):
    """Create a community post, optionally with an inline image."""

    content: str = Field(..., min_length=1, max_length=5000)
    image_url: str | None = Field(None, max_length=2048)
    # Camera captures arrive as data URLs and are stored as-is
    image_base64: str | None = Field(None, max_length=7_000_000)

    @field_validator("image_base64")
    @classmethod
    def validate_image_base64(cls, value: str | None) -> str | None:
        if value is None:
            return value
        match = DATA_URL_RE.match(value)
        if not match:
            raise ValueError("image_base64 must be a base64 image data URL")
        try:
            base64.b64decode(match.group("payload"), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("image_base64 is not valid base64") from e
        return value


class PostUpdate(BaseModel):
    """Edit a community post."""

    content: str = Field(..., min_length=1, max_length=5000)


class PostResponse(BaseModel):
    """Community post with read-time aggregates.

    ``user_liked`` is relative to the caller and is always false for
    anonymous requests.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    content: str
    image_url: str | None
    created_at: datetime
    updated_at: datetime
    author: AuthorResponse | None = None
    likes_count: int = 0
    comments_count: int = 0
    user_liked: bool = False


class LikeResponse(BaseModel):
    """Result of a like or unlike."""

    post_id: str
    liked: bool
    likes_count: int


class CommentCreate(BaseModel):
    """Comment on a post."""

    content: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    """Comment response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    user_id: str
    content: str
    created_at: datetime
    author: AuthorResponse | None = None
