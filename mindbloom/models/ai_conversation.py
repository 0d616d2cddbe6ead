"""AI companion conversation model."""

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from mindbloom.database import Base
from mindbloom.models.mixins import CreatedAtMixin, IdMixin


class AiConversation(Base, IdMixin, CreatedAtMixin):
    """One message/reply exchange with the companion."""

    __tablename__ = "ai_conversations"

    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    message = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    tone = Column(String(20), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="ai_conversations")
