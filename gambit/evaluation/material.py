"""
Material Evaluator - Piece-value scoring.

A piece is worth its gold value plus a type base value, plus stat,
skill, item and shield contributions. The whole sum is scaled by
remaining health so damaged pieces are worth proportionally less.
Dead pieces are worth nothing.
"""

from __future__ import annotations
import math
from dataclasses import dataclass

from ..data.units import base_value, is_king, is_minion
from ..engine_core.state import GameState, Unit


@dataclass
class MaterialWeights:
    """Per-stat weights for non-minion pieces."""
    ad: float = 0.4
    ap: float = 0.4
    physical_resistance: float = 0.15
    magic_resistance: float = 0.1
    skill_ready: float = 15.0
    per_item: float = 20.0
    shield: float = 0.3


class MaterialEvaluator:
    """Scores the material each side has on the board."""

    def __init__(self, weights: MaterialWeights | None = None):
        self.weights = weights or MaterialWeights()

    def evaluate(self, state: GameState, player_id: str) -> int:
        """Total material of a player's living units."""
        return sum(self.evaluate_piece(u) for u in state.player_units(player_id))

    def evaluate_difference(self, state: GameState, player_id: str, opponent_id: str) -> int:
        return self.evaluate(state, player_id) - self.evaluate(state, opponent_id)

    def evaluate_piece(self, unit: Unit) -> int:
        """
        Value of a single piece.

        Non-decreasing in hp for fixed other stats; zero when hp <= 0.
        """
        if unit.stats.hp <= 0:
            return 0

        w = self.weights
        stats = unit.stats
        value = float(stats.gold_value) + base_value(unit.name)

        if not is_minion(unit.name) and not is_king(unit.name):
            value += (
                w.ad * stats.ad
                + w.ap * stats.ap
                + w.physical_resistance * stats.physical_resistance
                + w.magic_resistance * stats.magic_resistance
            )

        if unit.skill and unit.skill.is_ready:
            value += w.skill_ready
        value += w.per_item * len(unit.items)
        value += w.shield * unit.total_shield

        hp_fraction = min(1.0, unit.hp_fraction)
        return math.floor(value * (0.5 + 0.5 * hp_fraction))

    def get_pieces_by_value(self, state: GameState, player_id: str) -> list[Unit]:
        """A player's living units, most valuable first, ties by name."""
        return sorted(
            state.player_units(player_id),
            key=lambda u: (-self.evaluate_piece(u), u.name),
        )
