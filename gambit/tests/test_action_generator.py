"""
Tests for action generation.

Tests:
- Every generated action is accepted by the engine
- Category generators
- Purchases gating
- Free-action classification
- Line-of-sight clearing moves
"""

from ..engine_core.action import ActionType, BuyItemAction, MoveAction, SkillAction
from ..engine_core.action_generator import ActionGenerator, legal_actions
from ..engine_core.state import AttackRange, GamePhase, Square


class TestGenerateAll:
    """Tests for full enumeration."""

    def test_opening_actions_are_all_legal(self, opening_state, engine):
        generator = ActionGenerator(engine=engine)

        actions = generator.generate_all(opening_state, "blue")

        assert actions
        for action in actions:
            assert engine.validate_action(opening_state, action), str(action)

    def test_opening_has_moves_and_purchases(self, opening_state, engine):
        actions = ActionGenerator(engine=engine).generate_all(opening_state, "blue")
        kinds = {a.action_type for a in actions}

        assert ActionType.MOVE in kinds
        assert ActionType.BUY_ITEM in kinds
        # Nobody is in range of an enemy yet
        assert ActionType.ATTACK not in kinds

    def test_nothing_after_game_over(self, make_unit, make_state, engine):
        state = make_state([make_unit("Garen", "blue", 3, 3)])
        state.phase = GamePhase.GAME_OVER

        assert ActionGenerator(engine=engine).generate_all(state, "blue") == []

    def test_stunned_units_are_skipped(self, make_unit, make_state, engine):
        from ..engine_core.state import Debuff

        garen = make_unit("Garen", "blue", 3, 3)
        garen.debuffs.append(Debuff(id="stun", duration=1, stun=True))
        state = make_state([garen], kings=False)

        assert ActionGenerator(engine=engine).generate_moves(state, "blue") == []

    def test_legal_actions_helper(self, opening_state, engine):
        actions = legal_actions(engine, opening_state, "blue")

        assert actions == ActionGenerator(engine=engine).generate_all(opening_state, "blue")

    def test_wrong_player_gets_no_legal_actions(self, opening_state, engine):
        assert legal_actions(engine, opening_state, "red") == []


class TestCategoryGenerators:
    """Tests for the per-kind generators."""

    def test_attacks_only(self, make_unit, make_state, engine):
        state = make_state([
            make_unit("Garen", "blue", 3, 3, ad=30),
            make_unit("Victim", "red", 3, 4),
            make_unit("Far", "red", 0, 6),
        ])

        attacks = ActionGenerator(engine=engine).generate_attacks(state, "blue")

        assert [a.target for a in attacks] == [Square(3, 4)]
        assert all(a.action_type == ActionType.ATTACK for a in attacks)

    def test_skills_only(self, make_champion, make_state, engine):
        state = make_state([make_champion("Rammus", "blue", 3, 3)])

        skills = ActionGenerator(engine=engine).generate_skills(state, "blue")

        # Self-cast shield targets the caster's own square
        assert skills == [SkillAction("blue", Square(3, 3), Square(3, 3))]

    def test_l_shape_attack_jumps(self, make_unit, make_state, engine):
        state = make_state([
            make_unit("Jumper", "blue", 3, 3, ad=30,
                      attack_range=AttackRange(range=1, l_shape=True)),
            make_unit("Wall", "blue", 3, 4),
            make_unit("Victim", "red", 4, 5),
        ])

        attacks = ActionGenerator(engine=engine).generate_attacks(state, "blue")

        assert Square(4, 5) in [a.target for a in attacks]


class TestPurchases:
    """Tests for purchase generation."""

    def test_purchases_need_gold(self, make_champion, make_state, engine):
        state = make_state([make_champion("Garen", "blue", 3, 3)], blue_gold=0)

        assert ActionGenerator(engine=engine).generate_purchases(state, "blue") == []

    def test_purchases_only_for_champions(self, make_champion, make_minion, make_state, engine):
        garen = make_champion("Garen", "blue", 3, 3)
        state = make_state([garen, make_minion("Melee Minion", "blue", 2, 1)])

        purchases = ActionGenerator(engine=engine).generate_purchases(state, "blue")

        assert purchases
        assert {p.target_unit_id for p in purchases} == {garen.id}

    def test_no_purchase_after_buying(self, make_champion, make_state, engine):
        garen = make_champion("Garen", "blue", 3, 3)
        state = make_state([garen], blue_gold=50)
        after = engine.apply_action(state, BuyItemAction("blue", "bf_sword", garen.id)).new_state

        assert ActionGenerator(engine=engine).generate_purchases(after, "blue") == []

    def test_full_inventory_excluded(self, make_champion, make_state, engine):
        from ..engine_core.state import Item

        garen = make_champion("Garen", "blue", 3, 3)
        garen.items = [Item(id="bf_sword", name="B.F. Sword")] * 3
        state = make_state([garen])

        assert ActionGenerator(engine=engine).generate_purchases(state, "blue") == []


class TestFreeActions:
    """Tests for free-action classification."""

    def test_purchase_and_blink_are_free(self, make_champion, make_state, engine):
        ezreal = make_champion("Ezreal", "blue", 3, 3)
        state = make_state([ezreal])
        generator = ActionGenerator(engine=engine)

        assert generator.is_free_action(state, BuyItemAction("blue", "bf_sword", ezreal.id))
        assert generator.is_free_action(state, SkillAction("blue", Square(3, 3), Square(3, 5)))
        assert not generator.is_free_action(state, MoveAction("blue", Square(3, 3), Square(3, 4)))

    def test_damage_skill_is_not_free(self, make_champion, make_state, engine):
        state = make_state([make_champion("Ahri", "blue", 3, 3)])

        action = SkillAction("blue", Square(3, 3), Square(3, 5))

        assert not ActionGenerator(engine=engine).is_free_action(state, action)


class TestLoSClearingMoves:
    """Tests for moves that open a carry's lane."""

    def test_blocker_steps_aside(self, make_champion, make_unit, make_state, engine):
        state = make_state([
            make_champion("Ashe", "blue", 3, 2),
            make_unit("Blocker", "blue", 3, 3),
            make_unit("Target", "red", 3, 4),
        ])

        moves = ActionGenerator(engine=engine).generate_los_clearing_moves(state, "blue")

        assert moves
        for move in moves:
            assert move.caster == Square(3, 3)
            assert move.target != Square(3, 3)
            assert engine.validate_action(state, move)

    def test_no_moves_without_blocked_lane(self, make_champion, make_unit, make_state, engine):
        state = make_state([
            make_champion("Ashe", "blue", 3, 2),
            make_unit("Target", "red", 3, 4),
        ])

        assert ActionGenerator(engine=engine).generate_los_clearing_moves(state, "blue") == []
