"""Mood classification of journal text, with a neutral fallback."""

import logging
from typing import Any

from mindbloom.config import get_settings
from mindbloom.models.enums import Mood
from mindbloom.services.llm import LLMService
from mindbloom.services.llm_prompts import (
    MOOD_ANALYSIS_SCHEMA,
    MOOD_ANALYSIS_SYSTEM_PROMPT,
    get_mood_analysis_prompt,
)

logger = logging.getLogger(__name__)

NEUTRAL_RESULT = {
    "mood": Mood.NEUTRAL.value,
    "confidence": 0.5,
    "insights": ["Unable to analyze mood at this time"],
    "source": "fallback",
}


class MoodAnalysisService:
    """Classifies the emotional tone of text.

    Classification is an enrichment: it never raises. Any failure, timeout
    or unusable model output yields the neutral result.
    """

    def __init__(self, llm_service: LLMService | None = None):
        self.llm_service = llm_service or LLMService(model=get_settings().gemini_fast_model)

    async def analyze(self, text: str) -> dict[str, Any]:
        """Classify text.

        Returns:
            {
                "mood": one of enums.Mood values,
                "confidence": float,
                "insights": list[str],
                "source": "llm" | "fallback"
            }
        """
        try:
            result = await self.llm_service.generate_json(
                prompt=get_mood_analysis_prompt(text),
                system_prompt=MOOD_ANALYSIS_SYSTEM_PROMPT,
                temperature=0.1,
                response_schema=MOOD_ANALYSIS_SCHEMA,
            )
        except Exception as e:
            logger.warning(f"Mood analysis failed, using neutral: {e}")
            return dict(NEUTRAL_RESULT)

        mood = result.get("mood")
        if mood not in {m.value for m in Mood}:
            logger.warning(f"Mood analysis returned unknown mood {mood!r}, using neutral")
            return dict(NEUTRAL_RESULT)

        confidence = result.get("confidence", 0.0)
        if not isinstance(confidence, int | float):
            confidence = 0.0

        insights = result.get("insights") or []
        return {
            "mood": mood,
            "confidence": max(0.0, min(1.0, float(confidence))),
            "insights": [str(i) for i in insights] if isinstance(insights, list) else [],
            "source": "llm",
        }
