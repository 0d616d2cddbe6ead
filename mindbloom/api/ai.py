"""AI companion API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from mindbloom.api.dependencies import CurrentUserId, DbSession, get_companion_service
from mindbloom.api.ownership import get_owned, owned_query
from mindbloom.models.ai_conversation import AiConversation
from mindbloom.schemas.ai import ChatRequest, ChatResponse, ConversationResponse
from mindbloom.services.companion import CompanionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ai", tags=["ai"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    chat_data: ChatRequest,
    current_user_id: CurrentUserId,
    db: DbSession,
    companion: Annotated[CompanionService, Depends(get_companion_service)],
):
    """Send a message to the Genie and store the exchange."""
    reply = await companion.chat(chat_data.message, chat_data.context)

    if reply["is_fallback"]:
        # Nothing worth keeping; the client can retry
        return ChatResponse(**reply)

    conversation = AiConversation(
        user_id=current_user_id,
        message=chat_data.message,
        response=reply["message"],
        tone=reply["tone"],
    )
    db.add(conversation)
    db.commit()

    return ChatResponse(**reply)


@router.get("/conversations", response_model=list[ConversationResponse])
def get_conversations(
    current_user_id: CurrentUserId,
    db: DbSession,
    limit: int = Query(default=50, ge=1, le=200),
):
    """Get the caller's chat history, newest first."""
    return (
        owned_query(db, AiConversation, current_user_id)
        .order_by(AiConversation.created_at.desc())
        .limit(limit)
        .all()
    )


@router.delete("/conversations/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_conversation(
    conversation_id: str,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Delete one stored exchange."""
    conversation = get_owned(
        db, AiConversation, conversation_id, current_user_id, "Conversation not found"
    )
    db.delete(conversation)
    db.commit()
