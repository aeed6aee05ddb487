"""
Evaluation module - Pure scoring of game states.

Provides:
- MaterialEvaluator: piece values
- ThreatEvaluator: attacks and skills a side could make now
- LineOfSightEvaluator: clear versus blocked ranged lanes
- ChampionEvaluator: per-unit strength and team composition
- PositionEvaluator: the weighted combination used by search
"""

from .material import MaterialEvaluator, MaterialWeights
from .threat import ThreatEvaluator, ThreatInfo
from .line_of_sight import LineOfSightEvaluator, BlockedLane, LoSAnalysis, LoSClearingMove
from .champion import ChampionEvaluator, ChampionValue, TeamComposition
from .position import PositionEvaluator, PositionWeights, EvaluationResult, WIN_SCORE

__all__ = [
    "MaterialEvaluator",
    "MaterialWeights",
    "ThreatEvaluator",
    "ThreatInfo",
    "LineOfSightEvaluator",
    "BlockedLane",
    "LoSAnalysis",
    "LoSClearingMove",
    "ChampionEvaluator",
    "ChampionValue",
    "TeamComposition",
    "PositionEvaluator",
    "PositionWeights",
    "EvaluationResult",
    "WIN_SCORE",
]
