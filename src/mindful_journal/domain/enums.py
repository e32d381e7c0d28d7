from __future__ import annotations

from enum import Enum


class Mood(str, Enum):
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    EXCITED = "excited"
    CALM = "calm"

    @classmethod
    def coerce(cls, value: object) -> "Mood":
        """Map loose input onto a mood, falling back to ``NEUTRAL``."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.NEUTRAL
        return cls.NEUTRAL


class Role(str, Enum):
    USER = "user"
    MODEL = "model"
