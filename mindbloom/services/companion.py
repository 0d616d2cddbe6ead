"""Genie companion chat and daily quotes."""

import logging
from typing import Any

from mindbloom.config import get_settings
from mindbloom.models.enums import GenieTone
from mindbloom.services.llm import LLMService
from mindbloom.services.llm_prompts import (
    GENIE_RESPONSE_SCHEMA,
    GENIE_SYSTEM_PROMPT,
    QUOTE_PROMPT,
    QUOTE_SCHEMA,
    QUOTE_SYSTEM_PROMPT,
    get_genie_prompt,
)

logger = logging.getLogger(__name__)

FALLBACK_REPLY = {
    "message": (
        "I'm here to support you, though I'm having a magical moment of silence right now. "
        "How are you feeling today? ✨"
    ),
    "tone": GenieTone.SUPPORTIVE.value,
    "suggestions": [],
    "is_fallback": True,
}

FALLBACK_QUOTE = {
    "quote": "Every moment is a fresh beginning.",
    "author": "T.S. Eliot",
    "theme": "New beginnings",
}


class CompanionService:
    """Talks to the model on behalf of the chat and content endpoints."""

    def __init__(
        self,
        chat_llm: LLMService | None = None,
        quote_llm: LLMService | None = None,
    ):
        settings = get_settings()
        self.chat_llm = chat_llm or LLMService(model=settings.gemini_chat_model)
        self.quote_llm = quote_llm or LLMService(model=settings.gemini_fast_model)

    async def chat(self, message: str, context: str | None = None) -> dict[str, Any]:
        """Get a Genie reply. Falls back to a canned reply flagged ``is_fallback``."""
        try:
            result = await self.chat_llm.generate_json(
                prompt=get_genie_prompt(message, context),
                system_prompt=GENIE_SYSTEM_PROMPT,
                temperature=0.7,
                response_schema=GENIE_RESPONSE_SCHEMA,
            )
        except Exception as e:
            logger.error(f"Genie chat failed: {e}")
            return dict(FALLBACK_REPLY)

        reply = result.get("message")
        if not isinstance(reply, str) or not reply.strip():
            logger.warning("Genie returned an empty message")
            return dict(FALLBACK_REPLY)

        tone = result.get("tone")
        if tone not in {t.value for t in GenieTone}:
            tone = GenieTone.SUPPORTIVE.value

        suggestions = result.get("suggestions") or []
        return {
            "message": reply.strip(),
            "tone": tone,
            "suggestions": [str(s) for s in suggestions] if isinstance(suggestions, list) else [],
            "is_fallback": False,
        }

    async def quote(self) -> dict[str, str]:
        """Get a motivational quote, or a fixed one if the model is unavailable."""
        try:
            result = await self.quote_llm.generate_json(
                prompt=QUOTE_PROMPT,
                system_prompt=QUOTE_SYSTEM_PROMPT,
                temperature=0.9,
                response_schema=QUOTE_SCHEMA,
            )
        except Exception as e:
            logger.warning(f"Quote generation failed: {e}")
            return dict(FALLBACK_QUOTE)

        if not all(isinstance(result.get(k), str) and result[k] for k in ("quote", "author", "theme")):
            return dict(FALLBACK_QUOTE)
        return {"quote": result["quote"], "author": result["author"], "theme": result["theme"]}
