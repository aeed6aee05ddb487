"""
Position Evaluator - Combines every axis into one score per side.

    score = 1.0 * material + 0.3 * position + 0.4 * threats + 0.35 * line_of_sight

Each term is signed: the player's value minus the opponent's. The
breakdown is diagnostic only; decisions use the weighted sum.

Positional heuristic per living unit:
- Center files: (4 - |x - 3.5|) * 2
- Advancement toward the enemy back rank: 2 per rank, 1.5 more for champions
- King: +100 castled (back rank, wing file), +15 on the back rank, else -15
- Minions: +25 when a diagonal-behind square holds a friend, -20 on an
  outer file without one
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..data.champions import ChampionTable
from ..data.units import is_champion, is_king, is_minion
from ..engine_core.state import BOARD_MAX_Y, BOARD_MIN_Y, GameState, Unit
from .line_of_sight import LineOfSightEvaluator
from .material import MaterialEvaluator
from .threat import ThreatEvaluator

if TYPE_CHECKING:
    from ..engine_core.interface import GameEngine

WIN_SCORE = 100000.0


@dataclass
class PositionWeights:
    material: float = 1.0
    position: float = 0.3
    threats: float = 0.4
    line_of_sight: float = 0.35


@dataclass
class EvaluationResult:
    """
    Result of evaluating a game state.
    """
    score: float
    breakdown: dict[str, float] = field(default_factory=dict)


class PositionEvaluator:
    """
    Evaluates game states from one player's perspective.

    Used by search for static evaluation of every node and by the bot
    facade for reporting:
    1. Material difference
    2. Positional heuristic difference
    3. Threat score difference
    4. Line-of-sight difference
    """

    def __init__(
        self,
        engine: GameEngine,
        champions: ChampionTable | None = None,
        weights: PositionWeights | None = None,
    ):
        self.engine = engine
        self.champions = champions or ChampionTable.default()
        self.weights = weights or PositionWeights()
        self.material = MaterialEvaluator()
        self.threats = ThreatEvaluator(self.material)
        self.line_of_sight = LineOfSightEvaluator(self.champions, engine)

    def evaluate(self, state: GameState, player_id: str) -> EvaluationResult:
        """
        Evaluate a game state from a player's perspective.

        Positive is good for the player.
        """
        opponent_id = state.opponent_id(player_id)

        material = self._signed(self.material.evaluate, state, player_id, opponent_id)
        position = self._signed(self.positional_score, state, player_id, opponent_id)
        threats = self._signed(self.threats.evaluate_threat_score, state, player_id, opponent_id)
        line_of_sight = self._signed(self.line_of_sight.evaluate_los, state, player_id, opponent_id)

        w = self.weights
        score = (
            w.material * material
            + w.position * position
            + w.threats * threats
            + w.line_of_sight * line_of_sight
        )
        return EvaluationResult(
            score=score,
            breakdown={
                "material": material,
                "position": position,
                "threats": threats,
                "line_of_sight": line_of_sight,
            },
        )

    def quick_evaluate(self, state: GameState, player_id: str) -> float:
        """Material and threats only, for cheap node scoring."""
        opponent_id = state.opponent_id(player_id)
        material = self._signed(self.material.evaluate, state, player_id, opponent_id)
        threats = self._signed(self.threats.evaluate_threat_score, state, player_id, opponent_id)
        return self.weights.material * material + self.weights.threats * threats

    def get_terminal_score(self, state: GameState, player_id: str) -> float | None:
        """+WIN_SCORE for a win, -WIN_SCORE for a loss, 0 for a draw, None if still playing."""
        if not self.engine.is_game_over(state):
            return None
        winner = self.engine.get_winner(state)
        if winner is None:
            return 0.0
        return WIN_SCORE if winner == state.side_of(player_id) else -WIN_SCORE

    # ========================================================================
    # Positional heuristic
    # ========================================================================

    def positional_score(self, state: GameState, player_id: str) -> float:
        score = 0.0
        for unit in state.player_units(player_id):
            score += self._unit_positional_score(state, unit)
        return score

    def _unit_positional_score(self, state: GameState, unit: Unit) -> float:
        x, y = unit.position.x, unit.position.y
        score = (4 - abs(x - 3.5)) * 2

        advancement = unit.advancement()
        score += advancement * 2
        if is_champion(unit.name):
            score += advancement * 1.5

        if is_king(unit.name):
            back_rank = BOARD_MIN_Y if unit.blue else BOARD_MAX_Y
            if y == back_rank and (x < 2 or x > 5):
                score += 100
            elif y == back_rank:
                score += 15
            else:
                score -= 15
        elif is_minion(unit.name):
            if self._is_supported(state, unit):
                score += 25
            elif x in (0, 7):
                score -= 20

        return score

    def _is_supported(self, state: GameState, unit: Unit) -> bool:
        """A friendly unit stands diagonally behind, relative to forward."""
        behind = -unit.forward
        for dx in (-1, 1):
            friend = state.unit_at(unit.position.offset(dx, behind))
            if friend is not None and friend.owner_id == unit.owner_id:
                return True
        return False

    @staticmethod
    def _signed(fn, state: GameState, player_id: str, opponent_id: str | None) -> float:
        mine = fn(state, player_id)
        theirs = fn(state, opponent_id) if opponent_id else 0
        return float(mine - theirs)
