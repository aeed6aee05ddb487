"""
Move Ordering - Heuristic pre-sort of candidate actions.

Ordering is not needed for correctness. It lets a caller bound the
branching factor (get_top_moves) before handing candidates to search.

Rough tiers:
- Attacks: 100, +1000 on the king, +500 + gold value when lethal
- Skills: 80, more when aimed at an enemy, much more at the king
- Moves: 20, +10 going forward, plus a center-file bonus
- Purchases: 10
"""

from __future__ import annotations
from dataclasses import dataclass

from ..data.units import is_king
from ..engine_core.action import Action, ActionType
from ..engine_core.state import GameState
from ..evaluation.threat import ThreatEvaluator


@dataclass
class ScoredAction:
    action: Action
    score: float
    is_killer: bool = False
    is_capture: bool = False


class MoveOrdering:
    """Ranks actions for a player. Stable for equal scores."""

    def __init__(self, threats: ThreatEvaluator | None = None):
        self.threats = threats or ThreatEvaluator()

    def order_actions(self, state: GameState, actions: list[Action], player_id: str) -> list[ScoredAction]:
        scored = [self.score_action(state, a, player_id) for a in actions]
        return sorted(scored, key=lambda s: s.score, reverse=True)

    def order_combat_actions(
        self,
        state: GameState,
        actions: list[Action],
        player_id: str,
    ) -> list[ScoredAction]:
        """Only attacks and skills, best first."""
        combat = [a for a in actions if a.action_type in (ActionType.ATTACK, ActionType.SKILL)]
        return self.order_actions(state, combat, player_id)

    def get_top_moves(
        self,
        state: GameState,
        actions: list[Action],
        player_id: str,
        n: int,
    ) -> list[Action]:
        return [s.action for s in self.order_actions(state, actions, player_id)[:n]]

    def get_top_combat_moves(
        self,
        state: GameState,
        actions: list[Action],
        player_id: str,
        n: int,
    ) -> list[Action]:
        return [s.action for s in self.order_combat_actions(state, actions, player_id)[:n]]

    def get_killer_moves(self, state: GameState, actions: list[Action], player_id: str) -> list[ScoredAction]:
        """Attacks that kill their target."""
        return [s for s in self.order_actions(state, actions, player_id) if s.is_killer]

    def get_capture_moves(self, state: GameState, actions: list[Action], player_id: str) -> list[ScoredAction]:
        """Attacks and enemy-targeted skills."""
        return [s for s in self.order_actions(state, actions, player_id) if s.is_capture]

    def score_action(self, state: GameState, action: Action, player_id: str) -> ScoredAction:
        if action.action_type == ActionType.ATTACK:
            return self._score_attack(state, action)
        if action.action_type == ActionType.SKILL:
            return self._score_skill(state, action, player_id)
        if action.action_type == ActionType.MOVE:
            return self._score_move(state, action)
        return ScoredAction(action, 10.0)

    def _score_attack(self, state: GameState, action: Action) -> ScoredAction:
        scored = ScoredAction(action, 100.0, is_capture=True)
        caster = state.unit_at(action.caster)
        target = state.unit_at(action.target)
        if caster is None or target is None:
            return scored

        if is_king(target.name):
            scored.score += 1000
        if target.stats.hp <= self.threats.calculate_damage(caster, target):
            scored.is_killer = True
            scored.score += 500 + target.stats.gold_value
        scored.score += (1 - target.hp_fraction) * 50
        scored.score += target.stats.gold_value * 0.5
        return scored

    def _score_skill(self, state: GameState, action: Action, player_id: str) -> ScoredAction:
        scored = ScoredAction(action, 80.0)
        target = state.unit_at(action.target)
        if target is None or target.owner_id == player_id:
            return scored

        scored.is_capture = True
        scored.score += 30
        if is_king(target.name):
            scored.score += 500
        scored.score += (1 - target.hp_fraction) * 40
        scored.score += target.stats.gold_value * 0.3
        return scored

    def _score_move(self, state: GameState, action: Action) -> ScoredAction:
        scored = ScoredAction(action, 20.0)
        mover = state.unit_at(action.caster)
        dy = action.target.y - action.caster.y
        if mover is not None and dy * mover.forward > 0:
            scored.score += 10
        scored.score += (4 - abs(action.target.x - 3.5)) * 2
        return scored
