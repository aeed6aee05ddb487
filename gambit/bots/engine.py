"""
Bot Engine - Facade that turns a game state into one action.

One call walks IDLE -> GENERATING -> (SEARCHING | HEURISTIC) -> DONE:
1. Generate candidates and keep only those the engine accepts
2. With search_depth > 0, search the whole turn; a found action may be
   swapped for a random candidate with probability `randomness`
3. Otherwise, or if search found nothing, walk the heuristic ladder:
   lethal attack, ready skill (skill_preference), any attack, forward
   move, recommended purchase, any move, random candidate

At zero randomness the ladder never consults the rng: coin flips are
taken whenever their chance is positive and ties between candidates go
to the best move-ordering score, so equal states give equal actions.

The bot also fronts draft, shop and evaluation helpers so a turn
orchestrator only needs one object.

Every returned action has passed GameEngine.validate_action against the
state it was chosen for.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from ..data.champions import ChampionTable
from ..data.items import ItemTable
from ..data.units import is_king
from ..engine_core.action import Action, ActionType, BuyItemAction
from ..engine_core.action_generator import ActionGenerator
from ..engine_core.interface import GameEngine
from ..engine_core.state import BLUE, GameState
from ..evaluation.champion import ChampionEvaluator
from ..evaluation.position import EvaluationResult, PositionEvaluator
from ..evaluation.threat import ThreatEvaluator
from ..search.move_ordering import MoveOrdering
from ..search.search import MAX_CHAIN_LENGTH, Search, SearchResult
from ..strategy.ban_pick import BanPickStrategy
from ..strategy.items import ItemStrategy
from .config import BotConfig

logger = logging.getLogger(__name__)


class DecisionPhase(Enum):
    IDLE = "idle"
    GENERATING = "generating"
    SEARCHING = "searching"
    HEURISTIC = "heuristic"
    RANDOM = "random"
    DONE = "done"


@dataclass
class BotDecision:
    """
    A decision made by the bot.

    phase is the step that produced the action: SEARCHING, HEURISTIC or
    RANDOM. action is None only when there were no legal candidates.
    """
    action: Action | None
    phase: DecisionPhase
    explanation: str = ""
    search_result: SearchResult | None = None
    candidates: int = 0


class BotEngine:
    """
    Tactical bot for one player seat.

    Usage:
        bot = BotEngine(Reducer(), BotConfig.for_difficulty("hard"))
        action = bot.get_action(state, "p1")
    """

    def __init__(
        self,
        engine: GameEngine,
        config: BotConfig | None = None,
        champions: ChampionTable | None = None,
        items: ItemTable | None = None,
        rng: random.Random | None = None,
    ):
        self.engine = engine
        self.config = config or BotConfig()
        self.champions = champions or ChampionTable.default()
        self.items = items or ItemTable.default()
        self.rng = rng or random.Random()
        self.phase = DecisionPhase.IDLE

        self.generator = ActionGenerator(engine=engine, items=self.items, champions=self.champions)
        self.position_evaluator = PositionEvaluator(engine, self.champions)
        self.threat_evaluator = ThreatEvaluator()
        self.champion_evaluator = ChampionEvaluator(self.champions)
        self.searcher = Search(engine, self.generator, self.position_evaluator)
        self.move_ordering = MoveOrdering(self.threat_evaluator)
        self.ban_pick = BanPickStrategy(self.champions, self.rng)
        self.item_strategy = ItemStrategy(self.items, self.champions)

    # ========================================================================
    # Turn decisions
    # ========================================================================

    def get_action(self, state: GameState, player_id: str) -> Action | None:
        """The action to play, or None when no legal action exists."""
        return self.decide(state, player_id).action

    def decide(self, state: GameState, player_id: str) -> BotDecision:
        self.phase = DecisionPhase.GENERATING
        candidates = self.get_all_actions(state, player_id)
        if not candidates:
            self.phase = DecisionPhase.DONE
            logger.debug("No legal actions for %s", player_id)
            return BotDecision(None, DecisionPhase.DONE, "No legal actions")

        decision = None
        if self.config.search_depth > 0:
            decision = self._decide_by_search(state, player_id, candidates)
        if decision is None:
            self.phase = DecisionPhase.HEURISTIC
            decision = self._decide_by_heuristics(state, player_id, candidates)

        decision.candidates = len(candidates)
        self.phase = DecisionPhase.DONE
        logger.debug("%s chose %s via %s: %s", player_id, decision.action,
                     decision.phase.value, decision.explanation)
        return decision

    def _decide_by_search(
        self,
        state: GameState,
        player_id: str,
        candidates: list[Action],
    ) -> BotDecision | None:
        self.phase = DecisionPhase.SEARCHING
        result = self.search(state, player_id)
        if result.best_action is None or not self.validate_action(state, result.best_action):
            logger.debug("Search produced no usable action, falling back to heuristics")
            return None

        if self.config.randomness > 0 and self.rng.random() < self.config.randomness:
            return BotDecision(
                self.rng.choice(candidates),
                DecisionPhase.RANDOM,
                f"Random candidate instead of searched {result.best_action}",
                search_result=result,
            )

        return BotDecision(
            result.best_action,
            DecisionPhase.SEARCHING,
            f"Best of {result.nodes_searched} nodes, score {result.score:.1f}",
            search_result=result,
        )

    def _decide_by_heuristics(
        self,
        state: GameState,
        player_id: str,
        candidates: list[Action],
    ) -> BotDecision:
        """Priority ladder over validated candidates. First rung that fires wins."""
        attacks = [a for a in candidates if a.action_type == ActionType.ATTACK]
        skills = [a for a in candidates if a.action_type == ActionType.SKILL]
        moves = [a for a in candidates if a.action_type == ActionType.MOVE]
        purchases = [a for a in candidates if a.action_type == ActionType.BUY_ITEM]

        lethal = [a for a in attacks if self._is_lethal(state, a)]
        if lethal:
            return self._heuristic(self._best_attack(state, lethal), "Lethal attack")

        if skills and self._roll(self.config.skill_preference):
            return self._heuristic(self._best_skill(state, skills, player_id), "Skill")

        if attacks:
            return self._heuristic(self._best_attack(state, attacks), "Best attack")

        forward = [m for m in moves if self._is_forward(state, m, player_id)]
        if forward:
            return self._heuristic(self._pick(state, forward, player_id), "Forward move")

        if purchases:
            recommended = self.get_item_recommendation(state, player_id)
            if recommended is not None and recommended in purchases:
                return self._heuristic(recommended, "Recommended purchase")
            return self._heuristic(self._pick(state, purchases, player_id), "Purchase")

        if moves:
            return self._heuristic(self._pick(state, moves, player_id), "Any move")

        if self.config.randomness > 0:
            return BotDecision(self.rng.choice(candidates), DecisionPhase.RANDOM, "Random candidate")
        return self._heuristic(self._pick(state, candidates, player_id), "Top-ranked candidate")

    @staticmethod
    def _heuristic(action: Action, explanation: str) -> BotDecision:
        return BotDecision(action, DecisionPhase.HEURISTIC, explanation)

    def _roll(self, chance: float) -> bool:
        """Coin flip. At zero randomness any positive chance counts as taken."""
        if self.config.randomness == 0:
            return chance > 0
        return self.rng.random() < chance

    def _pick(self, state: GameState, actions: list[Action], player_id: str) -> Action:
        """
        Choose among equally acceptable actions.

        Random when the config allows randomness, otherwise the
        highest move-ordering score with ties kept in candidate order.
        """
        if self.config.randomness > 0:
            return self.rng.choice(actions)
        return self.move_ordering.order_actions(state, actions, player_id)[0].action

    def _is_lethal(self, state: GameState, action: Action) -> bool:
        caster = state.unit_at(action.caster)
        target = state.unit_at(action.target)
        if caster is None or target is None:
            return False
        return target.stats.hp <= self.threat_evaluator.calculate_damage(caster, target)

    def _best_attack(self, state: GameState, actions: list[Action]) -> Action:
        """
        Highest target score. Kills, then the king, then wounded and
        valuable targets. Ties keep the earlier candidate.
        """
        best_action = actions[0]
        best_score = float("-inf")
        for action in actions:
            caster = state.unit_at(action.caster)
            target = state.unit_at(action.target)
            if caster is None or target is None:
                continue

            score = 0.0
            if target.stats.hp <= self.threat_evaluator.calculate_damage(caster, target):
                score += 1000 + target.stats.gold_value
            if is_king(target.name):
                score += 5000
            score += (1 - target.hp_fraction) * 100
            score += self.champion_evaluator.evaluate_champion(target, state).total * 0.5

            if score > best_score:
                best_score = score
                best_action = action
        return best_action

    def _best_skill(self, state: GameState, skills: list[Action], player_id: str) -> Action:
        at_enemies = []
        for action in skills:
            target = state.unit_at(action.target)
            if target is not None and target.owner_id != player_id:
                at_enemies.append(action)
        if at_enemies:
            return self._best_attack(state, at_enemies)
        return self._pick(state, skills, player_id)

    @staticmethod
    def _is_forward(state: GameState, action: Action, player_id: str) -> bool:
        dy = action.target.y - action.caster.y
        return dy > 0 if state.side_of(player_id) == BLUE else dy < 0

    # ========================================================================
    # Draft
    # ========================================================================

    def get_ban_choice(self, banned_champions: Iterable[str]) -> str | None:
        return self.ban_pick.get_ban(banned_champions)

    def get_pick_choice(
        self,
        banned_champions: Iterable[str],
        already_picked: Iterable[str],
        bot_picks: Iterable[str],
    ) -> str | None:
        return self.ban_pick.get_pick(banned_champions, already_picked, bot_picks)

    def get_champion_order(self, champion_names: Iterable[str]) -> list[str]:
        return self.ban_pick.get_order(champion_names)

    # ========================================================================
    # Evaluation and search
    # ========================================================================

    def evaluate_position(self, state: GameState, player_id: str) -> EvaluationResult:
        return self.position_evaluator.evaluate(state, player_id)

    def quick_evaluate(self, state: GameState, player_id: str) -> float:
        return self.position_evaluator.quick_evaluate(state, player_id)

    def search(
        self,
        state: GameState,
        player_id: str,
        depth: int | None = None,
        time_limit_ms: float | None = None,
    ) -> SearchResult:
        """
        Run search with the configured time limit unless overridden.

        Chains run until the turn passes or the deadline hits. depth caps
        chain length only when given.
        """
        return self.searcher.find_best_action(
            state,
            player_id,
            time_limit_ms=self.config.time_limit_ms if time_limit_ms is None else time_limit_ms,
            max_depth=MAX_CHAIN_LENGTH if depth is None else depth,
        )

    # ========================================================================
    # Shop
    # ========================================================================

    def get_item_recommendation(self, state: GameState, player_id: str) -> BuyItemAction | None:
        return self.item_strategy.recommend_purchase(state, player_id)

    def should_buy_item(self, state: GameState, player_id: str, min_gold: int = 0) -> bool:
        return self.item_strategy.should_buy_item(state, player_id, min_gold)

    # ========================================================================
    # Utilities
    # ========================================================================

    def get_all_actions(self, state: GameState, player_id: str) -> list[Action]:
        """Every generated candidate the engine accepts."""
        return self.generator.filter_valid(state, self.generator.generate_all(state, player_id))

    def validate_action(self, state: GameState, action: Action) -> bool:
        return self.engine.validate_action(state, action)

    def get_config(self) -> BotConfig:
        return self.config.model_copy()

    def set_config(self, **updates: Any) -> BotConfig:
        """Merge updates into the config. Invalid values raise pydantic's ValidationError."""
        merged = {**self.config.model_dump(), **updates}
        self.config = BotConfig.model_validate(merged)
        return self.get_config()
