"""LLM prompt templates and response schemas for the companion, mood analysis and quotes."""

GENIE_SYSTEM_PROMPT = """You are a supportive AI companion called "Ur Genie" in the MindBloom wellness app.
You embody the wisdom and magical support of a caring genie friend. Your role is to:

- Provide empathetic, supportive responses to users sharing their thoughts and feelings
- Offer gentle encouragement and practical wellness suggestions
- Use magical, mystical language occasionally but keep it natural and helpful
- Be warm, understanding, and non-judgmental
- Suggest breathing exercises, mindfulness practices, or positive activities when appropriate
- Keep responses concise but meaningful (2-4 sentences)
- Use emojis sparingly and appropriately

Respond ONLY with valid JSON:
{
  "message": "Your supportive response",
  "tone": "supportive" | "encouraging" | "empathetic" | "motivational",
  "suggestions": ["optional helpful suggestions"]
}"""

GENIE_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "message": {"type": "string"},
        "tone": {
            "type": "string",
            "enum": ["supportive", "encouraging", "empathetic", "motivational"],
        },
        "suggestions": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["message", "tone"],
}


def get_genie_prompt(message: str, context: str | None = None) -> str:
    """Generate prompt for a companion chat turn."""
    if context:
        return f"""Previous context: {context}

User message: {message}"""
    return f"User message: {message}"


MOOD_ANALYSIS_SYSTEM_PROMPT = """Analyze the emotional tone and mood of the given journal text.
Determine the primary mood and provide brief insights.

Respond ONLY with valid JSON:
{
  "mood": "very_happy" | "happy" | "neutral" | "sad" | "very_sad",
  "confidence": 0.0-1.0,
  "insights": ["short emotional insights"]
}"""

MOOD_ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "mood": {
            "type": "string",
            "enum": ["very_happy", "happy", "neutral", "sad", "very_sad"],
        },
        "confidence": {"type": "number"},
        "insights": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["mood", "confidence", "insights"],
}


def get_mood_analysis_prompt(text: str) -> str:
    """Generate prompt for classifying journal text."""
    return f"""Journal text:
---
{text}
---

Respond with JSON only."""


QUOTE_SYSTEM_PROMPT = """Generate an inspiring, uplifting motivational quote.
The quote should be positive, encouraging, and suitable for a wellness app.

Respond ONLY with valid JSON:
{
  "quote": "The inspirational quote text",
  "author": "Author name or 'Unknown' if original",
  "theme": "Brief theme description"
}"""

QUOTE_SCHEMA = {
    "type": "object",
    "properties": {
        "quote": {"type": "string"},
        "author": {"type": "string"},
        "theme": {"type": "string"},
    },
    "required": ["quote", "author", "theme"],
}

QUOTE_PROMPT = "Generate a motivational quote for today"
