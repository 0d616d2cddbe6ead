"""LLM service for Google Gemini integration."""

import asyncio
import json
import logging
from typing import Any

import httpx

from mindbloom.config import get_settings

logger = logging.getLogger(__name__)


class LLMUnavailable(Exception):
    """Raised when the model cannot be called or returns nothing usable."""


class LLMService:
    """Service for calling Gemini's generateContent endpoint."""

    def __init__(self, model: str | None = None, timeout: float | None = None) -> None:
        self.settings = get_settings()
        self.base_url = self.settings.gemini_base_url
        self.api_key = self.settings.gemini_api_key
        self.model = model or self.settings.gemini_chat_model
        self.timeout = timeout if timeout is not None else self.settings.llm_timeout_seconds

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        response_schema: dict[str, Any] | None = None,
    ) -> str:
        """Generate a response from the LLM."""
        if not self.api_key:
            raise LLMUnavailable("GEMINI_API_KEY is not configured")

        body: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": temperature},
        }
        if system_prompt:
            body["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        if response_schema:
            body["generationConfig"]["responseMimeType"] = "application/json"
            body["generationConfig"]["responseSchema"] = response_schema

        # httpx timeouts apply per phase; the deadline bounds the whole call
        try:
            async with asyncio.timeout(self.timeout):
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(
                        f"{self.base_url}/models/{self.model}:generateContent",
                        headers={"x-goog-api-key": self.api_key},
                        json=body,
                    )
                    response.raise_for_status()
                    data = response.json()
        except TimeoutError as e:
            raise LLMUnavailable(f"Gemini did not answer within {self.timeout}s") from e

        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMUnavailable("Empty response from model") from e

    async def generate_json(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.2,
        response_schema: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Generate structured JSON response from the LLM."""
        result = ""
        try:
            result = await self.generate(
                prompt=prompt,
                system_prompt=system_prompt,
                temperature=temperature,
                response_schema=response_schema,
            )
            # Clean up response - remove markdown code blocks if present
            result = result.strip()
            if result.startswith("```json"):
                result = result[7:]
            if result.startswith("```"):
                result = result[3:]
            if result.endswith("```"):
                result = result[:-3]
            result = result.strip()

            parsed = json.loads(result)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse LLM response as JSON: {e}")
            logger.warning(f"Raw response: {result or 'N/A'}")
            raise
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Gemini: {e}")
            raise

        if not isinstance(parsed, dict):
            raise LLMUnavailable("Model returned JSON that is not an object")
        return parsed
