"""
Reducer - Reference rules engine that applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state, the input is cloned first
- Validates before applying, against the same targeting rules the
  action generator enumerates with
- Returns ActionResult with success/failure, never raises for bad input

Turn structure:
- Move, attack and non-mobility skills commit the turn: the round
  advances, per-turn flags reset and the next player earns income
- Purchases and blink skills are free and leave the turn open
- Killing the enemy king ends the game
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field

from ..data.champions import TargetType
from ..data.items import EffectKind, ItemTable
from ..data.units import is_champion, is_king
from ..errors import InvalidActionError
from .state import BLUE, RED, Debuff, GamePhase, GameState, Item, Shield, Unit
from .action import (
    Action,
    ActionResult,
    ActionType,
    AttackAction,
    BuyItemAction,
    MoveAction,
    SkillAction,
)
from .combat import attack_damage, skill_damage, skill_power
from .interface import GameEngine
from .targeting import attack_targets, move_targets, skill_targets

logger = logging.getLogger(__name__)

# Gold granted to a player at the start of each of their turns
TURN_INCOME = 5

# Rounds a skill-granted shield lasts
SHIELD_DURATION = 2


@dataclass
class Reducer(GameEngine):
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The item table prices and resolves purchases.
    """
    items: ItemTable = field(default_factory=ItemTable.default)

    def apply_action(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code="INVALID_ACTION")

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        new_state = state.clone()
        try:
            changes = handler(new_state, action)
        except InvalidActionError as e:
            return ActionResult.failure(str(e), error_code=e.error_code)
        except Exception as e:
            logger.warning("Handler for %s failed", action, exc_info=True)
            return ActionResult.failure(str(e), error_code="HANDLER_ERROR")

        new_state.last_action = action
        return ActionResult.success_with_state(new_state, changes)

    def _validate_action(self, state: GameState, action: Action) -> str | None:
        """
        Validate turn-level preconditions.

        Returns error message if invalid, None if valid. Per-action
        rules are checked by the handlers.
        """
        if state.phase == GamePhase.GAME_OVER:
            return "Game is over - no actions allowed"
        if state.get_player(action.player_id) is None:
            return f"Unknown player: {action.player_id}"
        if action.player_id != state.current_player_id:
            return f"Not {action.player_id}'s turn"
        if state.has_performed_action_this_turn and action.action_type != ActionType.BUY_ITEM:
            return "Action already performed this turn"
        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.MOVE: self._handle_move,
            ActionType.ATTACK: self._handle_attack,
            ActionType.SKILL: self._handle_skill,
            ActionType.BUY_ITEM: self._handle_buy_item,
        }
        return handlers.get(action_type)

    # ========================================================================
    # Handlers. Each mutates the cloned state and returns change lines.
    # ========================================================================

    def _handle_move(self, state: GameState, action: MoveAction) -> list[str]:
        unit = self._caster(state, action.player_id, action.caster)
        if action.target not in move_targets(state, unit):
            raise InvalidActionError(f"{unit.name} cannot move to {action.target}")

        unit.position = action.target
        unit.has_moved_before = True
        changes = [f"{unit.name} moved {action.caster} -> {action.target}"]
        changes.extend(self._end_turn(state))
        return changes

    def _handle_attack(self, state: GameState, action: AttackAction) -> list[str]:
        unit = self._caster(state, action.player_id, action.caster)
        if unit.cannot_attack:
            raise InvalidActionError(f"{unit.name} cannot attack")
        if action.target not in attack_targets(state, unit):
            raise InvalidActionError(f"{unit.name} cannot attack {action.target}")

        victim = state.unit_at(action.target)
        damage = attack_damage(unit, victim, include_shields=False)
        changes = self._deal_damage(state, unit, victim, damage)

        if unit.stats.lifesteal > 0:
            unit.stats.hp = min(
                unit.stats.max_hp,
                unit.stats.hp + math.floor(damage * unit.stats.lifesteal / 100),
            )

        if state.phase != GamePhase.GAME_OVER:
            changes.extend(self._end_turn(state))
        return changes

    def _handle_skill(self, state: GameState, action: SkillAction) -> list[str]:
        unit = self._caster(state, action.player_id, action.caster)
        skill = unit.skill
        if skill is None or not skill.is_ready:
            raise InvalidActionError(f"{unit.name} has no skill ready")
        if action.target not in skill_targets(state, unit):
            raise InvalidActionError(f"{unit.name} cannot cast on {action.target}")

        changes = [f"{unit.name} cast {skill.name}"]
        power = math.floor(skill_power(unit))
        target_type = skill.target_type

        if target_type == TargetType.ENEMY:
            victim = state.unit_at(action.target)
            damage = skill_damage(unit, victim, include_shields=False)
            changes.extend(self._deal_damage(state, unit, victim, damage))
            if skill.stun_turns and victim.is_alive:
                victim.debuffs.append(Debuff(id="stun", duration=skill.stun_turns, stun=True))
                changes.append(f"{victim.name} is stunned")
        elif target_type == TargetType.ALLY:
            ally = state.unit_at(action.target)
            ally.stats.hp = min(ally.stats.max_hp, ally.stats.hp + power)
            changes.append(f"{ally.name} healed for {power}")
        elif target_type in (TargetType.ALLY_MINION, TargetType.NONE):
            shielded = state.unit_at(action.target)
            shielded.shields.append(Shield(power, SHIELD_DURATION, source=skill.name))
            changes.append(f"{shielded.name} shielded for {power}")
        elif target_type in (TargetType.SQUARE, TargetType.SQUARE_IN_RANGE):
            unit.position = action.target
            unit.has_moved_before = True
            changes.append(f"{unit.name} repositioned to {action.target}")

        skill.current_cooldown = _scaled_cooldown(skill.cooldown, unit.stats.cooldown_reduction)

        if target_type != TargetType.SQUARE_IN_RANGE and state.phase != GamePhase.GAME_OVER:
            changes.extend(self._end_turn(state))
        return changes

    def _handle_buy_item(self, state: GameState, action: BuyItemAction) -> list[str]:
        if state.has_bought_item_this_turn:
            raise InvalidActionError("Item already bought this turn")
        if action.item_id not in state.shop_items:
            raise InvalidActionError(f"{action.item_id} is not in the shop")

        item = self.items.find(action.item_id)
        if item is None or not item.is_basic:
            raise InvalidActionError(f"{action.item_id} cannot be bought")

        player = state.get_player(action.player_id)
        if player.gold < item.cost:
            raise InvalidActionError("Not enough gold", error_code="INSUFFICIENT_GOLD")

        unit = state.get_unit(action.target_unit_id)
        if unit is None or not unit.is_alive or unit.owner_id != action.player_id:
            raise InvalidActionError(f"No living unit {action.target_unit_id} for this player")
        if not is_champion(unit.name):
            raise InvalidActionError(f"{unit.name} cannot hold items")
        if unit.inventory_full:
            raise InvalidActionError(f"{unit.name} has no free item slot")

        for effect in item.effects:
            current = getattr(unit.stats, effect.stat)
            if effect.kind == EffectKind.MULTIPLY:
                updated = math.floor(current * effect.value)
            else:
                updated = math.floor(current + effect.value)
            setattr(unit.stats, effect.stat, updated)
            if effect.stat == "max_hp":
                unit.stats.hp += updated - current

        unit.items.append(Item(id=item.id, name=item.name))
        player.gold -= item.cost
        state.has_bought_item_this_turn = True
        return [f"{unit.name} bought {item.name}"]

    # ========================================================================
    # Helpers
    # ========================================================================

    def _caster(self, state: GameState, player_id: str, square) -> Unit:
        unit = state.unit_at(square)
        if unit is None:
            raise InvalidActionError(f"No unit at {square}")
        if unit.owner_id != player_id:
            raise InvalidActionError(f"{unit.name} does not belong to {player_id}")
        if unit.is_stunned:
            raise InvalidActionError(f"{unit.name} is stunned")
        return unit

    def _deal_damage(self, state: GameState, attacker: Unit, victim: Unit, damage: int) -> list[str]:
        """Shields absorb first, the remainder hits hp."""
        remaining = damage
        for shield in victim.shields:
            absorbed = min(shield.amount, remaining)
            shield.amount -= absorbed
            remaining -= absorbed
        victim.shields = [s for s in victim.shields if s.amount > 0]
        victim.stats.hp -= remaining

        changes = [f"{attacker.name} dealt {damage} to {victim.name}"]
        if victim.is_alive:
            return changes

        victim.dead_at_round = state.current_round
        changes.append(f"{victim.name} was slain")

        killer = state.get_player(attacker.owner_id)
        if killer is not None:
            killer.gold += victim.stats.gold_value

        if is_king(victim.name) and killer is not None:
            state.phase = GamePhase.GAME_OVER
            state.winner = killer.side
            changes.append(f"{killer.side} wins")
        return changes

    def _end_turn(self, state: GameState) -> list[str]:
        """Close the mover's turn and open the next player's."""
        mover = state.current_player
        for unit in state.player_units(mover.player_id):
            for debuff in unit.debuffs:
                debuff.duration -= 1
            unit.debuffs = [d for d in unit.debuffs if d.duration > 0]

        state.current_round += 1
        state.has_performed_action_this_turn = False
        state.has_bought_item_this_turn = False

        next_player = state.current_player
        next_player.gold += TURN_INCOME
        for unit in state.player_units(next_player.player_id):
            if unit.skill and unit.skill.current_cooldown > 0:
                unit.skill.current_cooldown -= 1
            for shield in unit.shields:
                shield.duration -= 1
            unit.shields = [s for s in unit.shields if s.duration > 0]
            if unit.stats.hp_regen:
                unit.stats.hp = min(unit.stats.max_hp, unit.stats.hp + unit.stats.hp_regen)

        return [f"round {state.current_round}: {next_player.side} to move"]

    # ========================================================================
    # GameEngine queries
    # ========================================================================

    def get_valid_moves(self, state: GameState, unit_id: str):
        unit = state.get_unit(unit_id)
        if unit is None or not unit.is_alive or unit.is_stunned:
            return []
        return move_targets(state, unit)

    def get_valid_attacks(self, state: GameState, unit_id: str):
        unit = state.get_unit(unit_id)
        if unit is None or not unit.is_alive or unit.is_stunned or unit.cannot_attack:
            return []
        return attack_targets(state, unit)

    def get_valid_skill_targets(self, state: GameState, unit_id: str):
        unit = state.get_unit(unit_id)
        if unit is None or not unit.is_alive or unit.is_stunned:
            return []
        return skill_targets(state, unit)

    def is_game_over(self, state: GameState) -> bool:
        return state.phase == GamePhase.GAME_OVER

    def get_winner(self, state: GameState) -> str | None:
        if state.winner in (BLUE, RED):
            return state.winner
        return None


def _scaled_cooldown(cooldown: int, reduction: int) -> int:
    """Cooldown after percent reduction, never below one round."""
    return max(1, math.ceil(cooldown * (100 - min(reduction, 90)) / 100))


def apply_action(state: GameState, action: Action, items: ItemTable | None = None) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(items=items or ItemTable.default())
    return reducer.apply_action(state, action)
