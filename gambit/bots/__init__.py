"""
Bots module - The tactical bot facade.

Provides:
- BotEngine: turn decisions, draft and shop helpers
- BotConfig: validated settings with difficulty presets
- BotDecision: an action plus how it was chosen
"""

from .config import BotConfig, Difficulty, DIFFICULTY_PRESETS
from .engine import BotEngine, BotDecision, DecisionPhase

__all__ = [
    "BotConfig",
    "Difficulty",
    "DIFFICULTY_PRESETS",
    "BotEngine",
    "BotDecision",
    "DecisionPhase",
]
