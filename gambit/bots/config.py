"""
Bot Configuration - Difficulty presets and validated settings.

Difficulty adjusts:
- Whether to search (search_depth 0 leaves the decision to the heuristic ladder)
- Time limit for one search, in milliseconds
- Randomness (chance to replace the searched action with a random one)

Config values are validated by pydantic on construction and on every
update through BotEngine.set_config.
"""

from __future__ import annotations
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


class BotConfig(BaseModel):
    """Settings read by BotEngine. Never mutated during a decision."""
    difficulty: Difficulty = Difficulty.MEDIUM
    search_depth: int = Field(1, ge=0, description="0 plays the heuristic ladder only, any positive value searches")
    time_limit_ms: int = Field(2000, ge=0)
    randomness: float = Field(0.15, ge=0.0, le=1.0)
    skill_preference: float = Field(
        0.7, ge=0.0, le=1.0, description="Chance the heuristic ladder casts a ready skill"
    )

    model_config = {"validate_assignment": True}

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty | str, **overrides: Any) -> BotConfig:
        difficulty = Difficulty(difficulty)
        values = {"difficulty": difficulty, **DIFFICULTY_PRESETS[difficulty]}
        values.update(overrides)
        return cls(**values)


# ============================================================================
# Presets
# ============================================================================

DIFFICULTY_PRESETS: dict[Difficulty, dict[str, Any]] = {
    Difficulty.EASY: {
        "search_depth": 0,
        "randomness": 0.35,
        "time_limit_ms": 1000,
    },
    Difficulty.MEDIUM: {
        "search_depth": 1,
        "randomness": 0.15,
        "time_limit_ms": 2000,
    },
    Difficulty.HARD: {
        "search_depth": 2,
        "randomness": 0.05,
        "time_limit_ms": 3000,
    },
    Difficulty.EXPERT: {
        "search_depth": 3,
        "randomness": 0.0,
        "time_limit_ms": 5000,
    },
}
