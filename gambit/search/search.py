"""
Search - Best action for one turn over chains of free actions.

A turn is zero or more free actions (purchases, blink skills) followed
by at most one committing action. Search explores those chains
breadth-first and returns the ROOT action of the best-scoring chain:
the first action taken from the real state, never a deeper one.

Design principles:
- Every simulated child comes from GameEngine.apply_action; a rejected
  or faulting branch is dropped and never retried
- Visited states live in an arena list; the work queue carries indices
- Time-boxed: the deadline is polled before every child is simulated,
  so the overrun is at most one apply plus one evaluation
- Chains end when the turn passes or the game ends; max_depth is only a
  safety cap, since purchases and blinks run out on their own
"""

from __future__ import annotations
import logging
import time
from collections import deque
from dataclasses import dataclass

from ..engine_core.action import Action
from ..engine_core.action_generator import ActionGenerator
from ..engine_core.interface import GameEngine
from ..engine_core.state import GameState
from ..evaluation.position import PositionEvaluator

logger = logging.getLogger(__name__)

DEFAULT_TIME_LIMIT_MS = 2000

# Upper bound on actions per chain when the caller sets none
MAX_CHAIN_LENGTH = 16


@dataclass
class SearchResult:
    best_action: Action | None
    score: float
    nodes_searched: int
    depth: int
    time_ms: float


class Search:
    """
    Breadth-first search over one turn.

    max_depth bounds how many actions a chain may contain. A chain stops
    as soon as the turn passes to the other player or the game ends.
    """

    def __init__(
        self,
        engine: GameEngine,
        generator: ActionGenerator | None = None,
        evaluator: PositionEvaluator | None = None,
    ):
        self.engine = engine
        self.generator = generator or ActionGenerator(engine=engine)
        self.evaluator = evaluator or PositionEvaluator(engine, self.generator.champions)

    def find_best_action(
        self,
        state: GameState,
        player_id: str,
        time_limit_ms: float = DEFAULT_TIME_LIMIT_MS,
        max_depth: int = MAX_CHAIN_LENGTH,
    ) -> SearchResult:
        start = time.monotonic()
        deadline = start + time_limit_ms / 1000

        # Arena of simulated states; queue entries point into it
        arena: list[GameState] = [state]
        queue: deque[tuple[int, Action | None, int]] = deque([(0, None, 0)])

        best_action: Action | None = None
        best_score = float("-inf")
        nodes = 0
        deepest = 0

        timed_out = False
        while queue and not timed_out:
            if nodes > 0 and time.monotonic() > deadline:
                timed_out = True
                break

            index, root, depth = queue.popleft()
            node = arena[index]

            for action in self.generator.generate_all(node, player_id):
                if nodes > 0 and time.monotonic() > deadline:
                    timed_out = True
                    break

                child = self._apply(node, action)
                if child is None:
                    continue

                nodes += 1
                chain_root = root if root is not None else action
                score = self._score(child, player_id)
                if score > best_score:
                    best_score = score
                    best_action = chain_root

                child_depth = depth + 1
                deepest = max(deepest, child_depth)
                if (
                    child_depth < max_depth
                    and not self.engine.is_game_over(child)
                    and child.current_player_id == player_id
                ):
                    arena.append(child)
                    queue.append((len(arena) - 1, chain_root, child_depth))

        if timed_out:
            logger.debug("Search deadline hit after %d nodes, %d left in queue", nodes, len(queue))

        elapsed = (time.monotonic() - start) * 1000
        return SearchResult(
            best_action=best_action,
            score=best_score if best_action is not None else 0.0,
            nodes_searched=nodes,
            depth=deepest,
            time_ms=elapsed,
        )

    def _apply(self, state: GameState, action: Action) -> GameState | None:
        try:
            result = self.engine.apply_action(state, action)
        except Exception:
            logger.warning("Simulating %s failed", action, exc_info=True)
            return None
        if not result.success:
            logger.debug("Engine rejected %s: %s", action, result.error)
            return None
        return result.new_state

    def _score(self, state: GameState, player_id: str) -> float:
        terminal = self.evaluator.get_terminal_score(state, player_id)
        if terminal is not None:
            return terminal
        try:
            return self.evaluator.evaluate(state, player_id).score
        except Exception:
            logger.warning("Evaluation failed, scoring node as neutral", exc_info=True)
            return 0.0
