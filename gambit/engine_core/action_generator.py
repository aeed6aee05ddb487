"""
Action Generator - Enumerates candidate actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. Search to expand nodes
3. Threat analysis (what could this side do next?)

Design: enumeration walks the same targeting rays the reference engine
validates against, but it is a fast path, not the authority. Anything
it proposes must still pass GameEngine.validate_action before a caller
trusts it; is_valid_action and filter_valid do exactly that.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..data.champions import ChampionTable
from ..data.items import ItemTable
from ..data.units import is_champion
from .state import GameState, Unit
from .action import (
    Action,
    ActionType,
    AttackAction,
    BuyItemAction,
    MoveAction,
    SkillAction,
)
from .targeting import attack_targets, is_mobility_skill, move_targets, skill_targets

if TYPE_CHECKING:
    from .interface import GameEngine


@dataclass
class ActionGenerator:
    """
    Generates candidate actions for a player.

    Uses the item table to price purchases, the champion table to find
    ranged carries, and the engine to validate.
    """
    engine: GameEngine
    items: ItemTable = field(default_factory=ItemTable.default)
    champions: ChampionTable = field(default_factory=ChampionTable.default)

    def generate_all(self, state: GameState, player_id: str) -> list[Action]:
        """
        Generate every candidate action for a player.

        Order: per unit moves, attacks, skills; purchases last.
        """
        if state.is_over() or state.has_performed_action_this_turn:
            return []

        actions: list[Action] = []
        for unit in self._active_units(state, player_id):
            actions.extend(self._unit_moves(state, unit, player_id))
            if not unit.cannot_attack:
                actions.extend(self._unit_attacks(state, unit, player_id))
            actions.extend(self._unit_skills(state, unit, player_id))

        actions.extend(self.generate_purchases(state, player_id))
        return actions

    def generate_moves(self, state: GameState, player_id: str) -> list[Action]:
        """Only move actions."""
        if state.is_over() or state.has_performed_action_this_turn:
            return []
        actions: list[Action] = []
        for unit in self._active_units(state, player_id):
            actions.extend(self._unit_moves(state, unit, player_id))
        return actions

    def generate_attacks(self, state: GameState, player_id: str) -> list[Action]:
        """Only attack actions, for quick tactical checks."""
        if state.is_over() or state.has_performed_action_this_turn:
            return []
        actions: list[Action] = []
        for unit in self._active_units(state, player_id):
            if not unit.cannot_attack:
                actions.extend(self._unit_attacks(state, unit, player_id))
        return actions

    def generate_skills(self, state: GameState, player_id: str) -> list[Action]:
        """Only skill actions."""
        if state.is_over() or state.has_performed_action_this_turn:
            return []
        actions: list[Action] = []
        for unit in self._active_units(state, player_id):
            actions.extend(self._unit_skills(state, unit, player_id))
        return actions

    def generate_purchases(self, state: GameState, player_id: str) -> list[Action]:
        """
        Purchases of affordable basic shop items for eligible champions.

        A champion is eligible while alive with fewer than three items.
        """
        if state.has_performed_action_this_turn or state.has_bought_item_this_turn:
            return []
        player = state.get_player(player_id)
        if player is None or player.gold <= 0:
            return []

        eligible = [
            u for u in state.player_units(player_id)
            if is_champion(u.name) and not u.inventory_full
        ]

        actions: list[Action] = []
        for item_id in state.shop_items:
            item = self.items.find(item_id)
            if item is None or not item.is_basic or item.cost > player.gold:
                continue
            for unit in eligible:
                actions.append(BuyItemAction(player_id, item_id, unit.id))
        return actions

    def generate_los_clearing_moves(self, state: GameState, player_id: str) -> list[Action]:
        """
        Moves that step a friendly blocker out of a carry's firing lane.

        Ranked by the value of the lane they would open. Each proposal
        is validated by the engine before it is returned.
        """
        if state.has_performed_action_this_turn:
            return []

        from ..evaluation.line_of_sight import LineOfSightEvaluator

        evaluator = LineOfSightEvaluator(champions=self.champions, engine=self.engine)
        actions: list[Action] = []
        for clearing in evaluator.get_los_clearing_moves(state, player_id):
            if clearing.blocker.is_stunned:
                continue
            action = MoveAction(player_id, clearing.blocker.position, clearing.move_to)
            if action not in actions and self.is_valid_action(state, action):
                actions.append(action)
        return actions

    # ========================================================================
    # Validation
    # ========================================================================

    def is_valid_action(self, state: GameState, action: Action) -> bool:
        """Delegates to the engine."""
        return self.engine.validate_action(state, action)

    def filter_valid(self, state: GameState, actions: list[Action]) -> list[Action]:
        return [a for a in actions if self.is_valid_action(state, a)]

    # ========================================================================
    # Classification
    # ========================================================================

    def is_free_action(self, state: GameState, action: Action) -> bool:
        """Whether an action leaves the turn open: purchases and mobility skills."""
        if action.action_type == ActionType.BUY_ITEM:
            return True
        if action.action_type == ActionType.SKILL:
            caster = state.unit_at(action.caster)
            return caster is not None and is_mobility_skill(caster)
        return False

    # ========================================================================
    # Per-unit enumeration
    # ========================================================================

    def _active_units(self, state: GameState, player_id: str) -> list[Unit]:
        return [u for u in state.player_units(player_id) if not u.is_stunned]

    def _unit_moves(self, state: GameState, unit: Unit, player_id: str) -> list[Action]:
        return [MoveAction(player_id, unit.position, t) for t in move_targets(state, unit)]

    def _unit_attacks(self, state: GameState, unit: Unit, player_id: str) -> list[Action]:
        return [AttackAction(player_id, unit.position, t) for t in attack_targets(state, unit)]

    def _unit_skills(self, state: GameState, unit: Unit, player_id: str) -> list[Action]:
        return [SkillAction(player_id, unit.position, t) for t in skill_targets(state, unit)]


def legal_actions(engine: GameEngine, state: GameState, player_id: str) -> list[Action]:
    """
    Convenience function: candidates that the engine accepts.

    Creates an ActionGenerator, generates and filters.
    """
    generator = ActionGenerator(engine=engine)
    return generator.filter_valid(state, generator.generate_all(state, player_id))
