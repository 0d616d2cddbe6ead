"""Community feed models."""

from sqlalchemy import Column, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from mindbloom.database import Base
from mindbloom.models.mixins import CreatedAtMixin, IdMixin, TimestampMixin


class CommunityPost(Base, IdMixin, TimestampMixin):
    """A post on the public community feed."""

    __tablename__ = "community_posts"

    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)

    # Relationships
    author = relationship("User", back_populates="posts")
    likes = relationship(
        "PostLike", back_populates="post", cascade="all, delete-orphan", passive_deletes=True
    )
    comments = relationship(
        "PostComment", back_populates="post", cascade="all, delete-orphan", passive_deletes=True
    )


class PostLike(Base, IdMixin, CreatedAtMixin):
    """A user's like on a post. At most one per (user, post)."""

    __tablename__ = "post_likes"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_post_likes_user_post"),)

    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    post_id = Column(
        String(36), ForeignKey("community_posts.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    user = relationship("User", back_populates="post_likes")
    post = relationship("CommunityPost", back_populates="likes")


class PostComment(Base, IdMixin, TimestampMixin):
    """A comment on a post, owned by the commenter."""

    __tablename__ = "post_comments"

    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    post_id = Column(
        String(36), ForeignKey("community_posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(Text, nullable=False)

    # Relationships
    author = relationship("User", back_populates="post_comments")
    post = relationship("CommunityPost", back_populates="comments")
