"""Enums for model fields."""

from enum import Enum


class Mood(str, Enum):
    """Mood scale shared by manual check-ins and journal classification."""

    VERY_HAPPY = "very_happy"
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    VERY_SAD = "very_sad"


class MoodSource(str, Enum):
    """Where a mood entry came from."""

    MANUAL = "manual"
    JOURNAL = "journal"


class GenieTone(str, Enum):
    """Tone of a companion reply."""

    SUPPORTIVE = "supportive"
    ENCOURAGING = "encouraging"
    EMPATHETIC = "empathetic"
    MOTIVATIONAL = "motivational"


class Theme(str, Enum):
    """UI theme preference."""

    LIGHT = "light"
    DARK = "dark"
