"""
Line of Sight Evaluator - Firing lanes of ranged carries.

Friendly units block ranged attacks along straight lines. For each
ranged carry (range >= 2, marksman or mage) and each direction its
attack range allows:
1. Find the first enemy within range along the ray
2. Look for a friendly unit strictly between carry and enemy
3. A blocker makes a BlockedLane (penalty); otherwise the lane is clear (bonus)

Only the eight straight directions are analysed. L-shaped attacks jump
over pieces and are never blocked.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..data.champions import ChampionTable, Role
from ..data.units import is_king, is_minion
from ..engine_core.state import GameState, Square, Unit
from ..engine_core.targeting import allowed_directions, move_targets, points_between, ray

if TYPE_CHECKING:
    from ..engine_core.interface import GameEngine

CARRY_ROLES = frozenset({Role.MARKSMAN, Role.MAGE})
MIN_CARRY_RANGE = 2


@dataclass
class BlockedLane:
    carry: Unit
    blocker: Unit
    target: Unit
    direction: tuple[int, int]
    target_value: float


@dataclass
class LoSAnalysis:
    ranged_carries: list[Unit] = field(default_factory=list)
    blocked_lanes: list[BlockedLane] = field(default_factory=list)
    clear_lane_score: float = 0.0
    blocked_lane_score: float = 0.0

    @property
    def total_score(self) -> float:
        return self.clear_lane_score - self.blocked_lane_score


@dataclass
class LoSClearingMove:
    """A blocker move that would open a carry's lane."""
    blocker: Unit
    carry: Unit
    target: Unit
    move_from: Square
    move_to: Square
    target_value: float


class LineOfSightEvaluator:
    """
    Scores clear versus blocked firing lanes.

    Champion roles come from the table; units missing from it are simply
    not treated as carries.
    """

    def __init__(
        self,
        champions: ChampionTable | None = None,
        engine: GameEngine | None = None,
    ):
        self.champions = champions or ChampionTable.default()
        self.engine = engine

    def is_ranged_carry(self, unit: Unit) -> bool:
        if unit.stats.attack_range.range < MIN_CARRY_RANGE:
            return False
        return self.champions.role_of(unit.name) in CARRY_ROLES

    def analyze(self, state: GameState, player_id: str) -> LoSAnalysis:
        analysis = LoSAnalysis()
        opponent_id = state.opponent_id(player_id)
        if opponent_id is None:
            return analysis

        for carry in state.player_units(player_id):
            if not self.is_ranged_carry(carry):
                continue
            analysis.ranged_carries.append(carry)

            reach = carry.stats.attack_range
            for dx, dy in allowed_directions(reach):
                target = self._first_enemy(state, carry, dx, dy, reach.range, opponent_id)
                if target is None:
                    continue

                value = self.target_value(target)
                blocker = self._find_blocker(state, carry, target)
                if blocker is not None:
                    analysis.blocked_lanes.append(
                        BlockedLane(carry, blocker, target, (dx, dy), value)
                    )
                    analysis.blocked_lane_score += value
                else:
                    analysis.clear_lane_score += value

        return analysis

    def evaluate_los(self, state: GameState, player_id: str) -> float:
        """Clear lane score minus blocked lane score."""
        return self.analyze(state, player_id).total_score

    def evaluate_los_difference(self, state: GameState, player_id: str, opponent_id: str) -> float:
        """Own LoS score minus the opponent's; swapping the players negates it."""
        return self.evaluate_los(state, player_id) - self.evaluate_los(state, opponent_id)

    def get_blocked_lanes(self, state: GameState, player_id: str) -> list[BlockedLane]:
        return self.analyze(state, player_id).blocked_lanes

    def get_los_clearing_moves(self, state: GameState, player_id: str) -> list[LoSClearingMove]:
        """
        Blocker destinations that leave the carry-target line.

        A destination clears the lane iff it is not one of the squares
        strictly between carry and target. Most valuable lanes first.
        """
        moves: list[LoSClearingMove] = []
        for lane in self.get_blocked_lanes(state, player_id):
            path = points_between(lane.carry.position, lane.target.position)
            for destination in self._legal_moves(state, lane.blocker):
                if destination in path:
                    continue
                moves.append(
                    LoSClearingMove(
                        blocker=lane.blocker,
                        carry=lane.carry,
                        target=lane.target,
                        move_from=lane.blocker.position,
                        move_to=destination,
                        target_value=lane.target_value,
                    )
                )
        moves.sort(key=lambda m: m.target_value, reverse=True)
        return moves

    @staticmethod
    def target_value(target: Unit) -> float:
        value = float(target.stats.gold_value or 20)
        value += (1 - target.hp_fraction) * 30
        if is_king(target.name):
            value += 200
        elif not is_minion(target.name):
            value += 30
        return value

    def _first_enemy(
        self,
        state: GameState,
        carry: Unit,
        dx: int,
        dy: int,
        length: int,
        opponent_id: str,
    ) -> Unit | None:
        for square in ray(carry.position, dx, dy, length):
            occupant = state.unit_at(square)
            if occupant is not None and occupant.owner_id == opponent_id:
                return occupant
        return None

    def _find_blocker(self, state: GameState, carry: Unit, target: Unit) -> Unit | None:
        for square in points_between(carry.position, target.position):
            occupant = state.unit_at(square)
            if occupant is not None and occupant.owner_id == carry.owner_id:
                return occupant
        return None

    def _legal_moves(self, state: GameState, unit: Unit) -> list[Square]:
        if self.engine is not None:
            return self.engine.get_valid_moves(state, unit.id)
        return move_targets(state, unit)
