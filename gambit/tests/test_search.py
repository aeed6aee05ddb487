"""
Tests for search and move ordering.

Tests:
- Search returns engine-accepted root actions
- Chains of free actions run until the turn passes, within the deadline
- Rejected and faulting branches are dropped
- Move ordering tiers and filters
"""

from ..engine_core.action import (
    ActionType,
    AttackAction,
    BuyItemAction,
    MoveAction,
    SkillAction,
)
from ..engine_core.reducer import Reducer
from ..engine_core.state import GamePhase, Square
from ..evaluation import WIN_SCORE
from ..search import MoveOrdering, Search


class ExplodingMoveEngine(Reducer):
    """Reducer that raises for every move, to exercise branch isolation."""

    def apply_action(self, state, action):
        if action.action_type == ActionType.MOVE:
            raise RuntimeError("simulated engine fault")
        return super().apply_action(state, action)


def _weak_king_state(make_champion, make_state):
    ezreal = make_champion("Ezreal", "blue", 1, 2)
    state = make_state([ezreal])
    state.board[-1].stats.hp = 5  # red king
    return state


class TestSearch:
    """Tests for the turn search."""

    def test_opening_search_returns_legal_action(self, engine, opening_state):
        result = Search(engine).find_best_action(opening_state, "blue", time_limit_ms=5000, max_depth=1)

        assert result.best_action is not None
        assert engine.validate_action(opening_state, result.best_action)
        assert result.nodes_searched >= 1
        assert result.depth == 1
        assert result.time_ms >= 0

    def test_zero_time_still_scores_a_node(self, engine, opening_state):
        result = Search(engine).find_best_action(opening_state, "blue", time_limit_ms=0, max_depth=3)

        assert result.nodes_searched >= 1
        assert result.best_action is not None

    def test_finds_immediate_king_kill(self, engine, make_unit, make_state):
        state = make_state([make_unit("Brute", "blue", 4, 6, ad=500)])

        result = Search(engine).find_best_action(state, "blue", time_limit_ms=5000, max_depth=1)

        assert result.best_action == AttackAction("blue", Square(4, 6), Square(4, 7))
        assert result.score == WIN_SCORE

    def test_returns_root_of_free_action_chain(self, engine, make_champion, make_state):
        """Blink then shoot: the blink is what gets returned."""
        state = _weak_king_state(make_champion, make_state)

        result = Search(engine).find_best_action(state, "blue", time_limit_ms=10000, max_depth=2)

        assert result.best_action == SkillAction("blue", Square(1, 2), Square(1, 4))
        assert result.score == WIN_SCORE
        assert result.depth == 2

    def test_chain_followed_without_depth_cap(self, engine, make_champion, make_state):
        state = _weak_king_state(make_champion, make_state)

        result = Search(engine).find_best_action(state, "blue", time_limit_ms=10000)

        assert result.best_action == SkillAction("blue", Square(1, 2), Square(1, 4))
        assert result.score == WIN_SCORE

    def test_deadline_overrun_is_bounded(self, engine, opening_state):
        """A tight budget stops within a few evaluations of the deadline."""
        result = Search(engine).find_best_action(opening_state, "blue", time_limit_ms=20)

        assert result.best_action is not None
        # One apply plus one evaluation is a few milliseconds on the opening
        assert result.time_ms < 20 + 250

    def test_depth_bound_stops_chain(self, engine, make_champion, make_state):
        state = _weak_king_state(make_champion, make_state)

        result = Search(engine).find_best_action(state, "blue", time_limit_ms=10000, max_depth=1)

        assert result.score < WIN_SCORE

    def test_no_actions_when_game_over(self, engine, opening_state):
        over = opening_state._copy_with(phase=GamePhase.GAME_OVER, winner="red")

        result = Search(engine).find_best_action(over, "blue")

        assert result.best_action is None
        assert result.nodes_searched == 0

    def test_faulting_branches_are_dropped(self, opening_state):
        engine = ExplodingMoveEngine()

        result = Search(engine).find_best_action(opening_state, "blue", time_limit_ms=5000, max_depth=1)

        assert result.best_action is not None
        assert result.best_action.action_type != ActionType.MOVE


class TestMoveOrdering:
    """Tests for heuristic ordering."""

    def _state(self, make_unit, make_state):
        return make_state([
            make_unit("A", "blue", 3, 3, ad=50),
            make_unit("Low", "red", 3, 4, hp=10),
            make_unit("Tough", "red", 2, 3, hp=500),
        ])

    def test_tiers(self, make_unit, make_state):
        state = self._state(make_unit, make_state)
        lethal = AttackAction("blue", Square(3, 3), Square(3, 4))
        plain = AttackAction("blue", Square(3, 3), Square(2, 3))
        move = MoveAction("blue", Square(3, 3), Square(4, 4))
        buy = BuyItemAction("blue", "bf_sword", state.board[0].id)

        ordered = MoveOrdering().order_actions(state, [buy, move, plain, lethal], "blue")

        assert [s.action for s in ordered] == [lethal, plain, move, buy]
        assert ordered[0].is_killer and ordered[0].is_capture
        assert not ordered[1].is_killer

    def test_king_attack_first(self, make_unit, make_state):
        state = make_state([
            make_unit("A", "blue", 4, 6, ad=30),
            make_unit("Low", "red", 3, 6, hp=5),
        ])
        king = AttackAction("blue", Square(4, 6), Square(4, 7))
        kill = AttackAction("blue", Square(4, 6), Square(3, 6))

        top = MoveOrdering().get_top_moves(state, [kill, king], "blue", 1)

        assert top == [king]

    def test_forward_move_preferred(self, make_unit, make_state):
        state = make_state([make_unit("A", "blue", 3, 3)])
        forward = MoveAction("blue", Square(3, 3), Square(3, 4))
        backward = MoveAction("blue", Square(3, 3), Square(3, 2))

        ordered = MoveOrdering().order_actions(state, [backward, forward], "blue")

        assert ordered[0].action == forward

    def test_killer_and_capture_filters(self, make_unit, make_state):
        state = self._state(make_unit, make_state)
        lethal = AttackAction("blue", Square(3, 3), Square(3, 4))
        plain = AttackAction("blue", Square(3, 3), Square(2, 3))
        move = MoveAction("blue", Square(3, 3), Square(4, 4))
        ordering = MoveOrdering()

        killers = ordering.get_killer_moves(state, [move, plain, lethal], "blue")
        captures = ordering.get_capture_moves(state, [move, plain, lethal], "blue")

        assert [s.action for s in killers] == [lethal]
        assert [s.action for s in captures] == [lethal, plain]

    def test_combat_ordering_skips_moves(self, make_unit, make_state):
        state = self._state(make_unit, make_state)
        plain = AttackAction("blue", Square(3, 3), Square(2, 3))
        move = MoveAction("blue", Square(3, 3), Square(4, 4))

        top = MoveOrdering().get_top_combat_moves(state, [move, plain], "blue", 5)

        assert top == [plain]
