"""
Tests for the reference reducer (state transitions).

Tests:
- Action application
- Turn structure and income
- Combat, kills and game over
- Purchases and free actions
- Validation and error handling
"""

from ..engine_core.action import AttackAction, BuyItemAction, MoveAction, SkillAction
from ..engine_core.reducer import TURN_INCOME, Reducer, apply_action
from ..engine_core.state import AttackRange, GamePhase, Shield, Square


class TestMoveAction:
    """Tests for move actions."""

    def test_move_commits_turn(self, make_unit, make_state):
        """A move relocates the unit and hands the turn to red."""
        state = make_state([make_unit("Garen", "blue", 3, 3)])

        result = apply_action(state, MoveAction("blue", Square(3, 3), Square(3, 4)))

        assert result.success
        new_state = result.new_state
        assert new_state.unit_at(Square(3, 4)).name == "Garen"
        assert new_state.unit_at(Square(3, 3)) is None
        assert new_state.current_round == 2
        assert new_state.current_player_id == "red"
        assert new_state.red_player.gold == 10 + TURN_INCOME
        assert new_state.last_action == MoveAction("blue", Square(3, 3), Square(3, 4))

    def test_input_state_untouched(self, make_unit, make_state):
        state = make_state([make_unit("Garen", "blue", 3, 3)])

        apply_action(state, MoveAction("blue", Square(3, 3), Square(3, 4)))

        assert state.unit_at(Square(3, 3)) is not None
        assert state.current_round == 1

    def test_move_wrong_player_fails(self, make_unit, make_state):
        """Red cannot move on blue's round."""
        state = make_state([make_unit("Garen", "red", 3, 5)])

        result = apply_action(state, MoveAction("red", Square(3, 5), Square(3, 4)))

        assert not result.success
        assert "turn" in result.error.lower()

    def test_move_onto_occupied_square_fails(self, make_unit, make_state):
        state = make_state([
            make_unit("Garen", "blue", 3, 3),
            make_unit("Nasus", "blue", 3, 4),
        ])

        result = apply_action(state, MoveAction("blue", Square(3, 3), Square(3, 4)))

        assert not result.success
        assert result.error_code == "INVALID_ACTION"

    def test_move_enemy_unit_fails(self, make_unit, make_state):
        state = make_state([make_unit("Garen", "red", 3, 3)])

        result = apply_action(state, MoveAction("blue", Square(3, 3), Square(3, 4)))

        assert not result.success
        assert "belong" in result.error

    def test_lane_minion_first_move(self, make_minion, make_state, engine):
        """Lane minions step two squares forward on their first move, never sideways."""
        minion = make_minion("Melee Minion", "blue", 2, 1)
        state = make_state([minion])

        moves = set(engine.get_valid_moves(state, minion.id))

        assert moves == {Square(2, 2), Square(2, 3)}


class TestAttackAction:
    """Tests for attack actions."""

    def test_lethal_attack_kills_and_pays_gold(self, make_unit, make_state):
        state = make_state([
            make_unit("Attacker", "blue", 3, 3, ad=50),
            make_unit("Victim", "red", 3, 4, hp=40, gold_value=25),
        ])

        result = apply_action(state, AttackAction("blue", Square(3, 3), Square(3, 4)))

        assert result.success
        new_state = result.new_state
        assert new_state.unit_at(Square(3, 4)) is None
        victim = next(u for u in new_state.board if u.name == "Victim")
        assert not victim.is_alive
        assert victim.dead_at_round == 1
        assert new_state.blue_player.gold == 10 + 25

    def test_resistance_reduces_damage(self, make_unit, make_state):
        """30 armor halves a physical hit."""
        state = make_state([
            make_unit("Attacker", "blue", 3, 3, ad=40),
            make_unit("Tank", "red", 3, 4, hp=100, physical_resistance=30),
        ])

        result = apply_action(state, AttackAction("blue", Square(3, 3), Square(3, 4)))

        assert result.new_state.unit_at(Square(3, 4)).stats.hp == 80

    def test_shield_absorbs_first(self, make_unit, make_state):
        target = make_unit("Target", "red", 3, 4, hp=100)
        target.shields.append(Shield(amount=30, duration=2))
        state = make_state([make_unit("Attacker", "blue", 3, 3, ad=50), target])

        result = apply_action(state, AttackAction("blue", Square(3, 3), Square(3, 4)))

        hit = result.new_state.unit_at(Square(3, 4))
        assert hit.stats.hp == 80
        assert hit.shields == []

    def test_attack_blocked_by_first_occupant(self, make_unit, make_state):
        """A ranged attack stops at the first unit on the ray."""
        state = make_state([
            make_unit("Archer", "blue", 3, 2, ad=30, attack_range=AttackRange(range=3)),
            make_unit("Wall", "blue", 3, 3),
            make_unit("Victim", "red", 3, 4),
        ])

        result = apply_action(state, AttackAction("blue", Square(3, 2), Square(3, 4)))

        assert not result.success

    def test_killing_king_ends_game(self, make_unit, make_state):
        state = make_state([make_unit("Brute", "blue", 4, 6, ad=500)])

        result = apply_action(state, AttackAction("blue", Square(4, 6), Square(4, 7)))

        assert result.success
        assert result.new_state.phase == GamePhase.GAME_OVER
        assert result.new_state.winner == "blue"
        # The turn does not pass after the game ends
        assert result.new_state.current_round == 1

    def test_no_actions_after_game_over(self, make_unit, make_state):
        state = make_state([make_unit("Brute", "blue", 4, 6, ad=500)])
        over = apply_action(state, AttackAction("blue", Square(4, 6), Square(4, 7))).new_state

        result = apply_action(over, MoveAction("blue", Square(4, 6), Square(3, 6)))

        assert not result.success
        assert "over" in result.error.lower()

    def test_king_cannot_attack(self, make_unit, make_state):
        state = make_state([make_unit("Victim", "red", 4, 1)])

        result = apply_action(state, AttackAction("blue", Square(4, 0), Square(4, 1)))

        assert not result.success


class TestSkillAction:
    """Tests for skills."""

    def test_stun_skips_victims_next_turn(self, make_champion, make_unit, make_state):
        state = make_state([
            make_champion("Malphite", "blue", 3, 3),
            make_unit("Victim", "red", 3, 5, hp=200),
            make_unit("Other", "red", 0, 5),
        ])

        result = apply_action(state, SkillAction("blue", Square(3, 3), Square(3, 5)))
        assert result.success
        stunned_state = result.new_state
        assert stunned_state.unit_at(Square(3, 5)).is_stunned
        assert stunned_state.unit_at(Square(3, 3)).skill.current_cooldown == 4

        blocked = apply_action(stunned_state, MoveAction("red", Square(3, 5), Square(3, 4)))
        assert not blocked.success
        assert "stunned" in blocked.error

        after = apply_action(stunned_state, MoveAction("red", Square(0, 5), Square(0, 4))).new_state
        assert not after.unit_at(Square(3, 5)).is_stunned

    def test_blink_is_a_free_action(self, make_champion, make_state):
        """Mobility skills reposition without ending the turn."""
        state = make_state([make_champion("Ezreal", "blue", 3, 3)])

        result = apply_action(state, SkillAction("blue", Square(3, 3), Square(3, 5)))

        assert result.success
        new_state = result.new_state
        assert new_state.unit_at(Square(3, 5)).name == "Ezreal"
        assert new_state.current_round == 1
        assert new_state.current_player_id == "blue"

    def test_heal_caps_at_max_hp(self, make_champion, make_state):
        soraka = make_champion("Soraka", "blue", 3, 3)
        ally = make_champion("Garen", "blue", 3, 4)
        ally.stats.hp = 120
        state = make_state([soraka, ally])

        result = apply_action(state, SkillAction("blue", Square(3, 3), Square(3, 4)))

        assert result.new_state.unit_at(Square(3, 4)).stats.hp == ally.stats.max_hp

    def test_skill_on_cooldown_fails(self, make_champion, make_state):
        ahri = make_champion("Ahri", "blue", 3, 3)
        ahri.skill.current_cooldown = 2
        state = make_state([ahri])

        result = apply_action(state, SkillAction("blue", Square(3, 3), Square(3, 3)))

        assert not result.success


class TestBuyItemAction:
    """Tests for purchases."""

    def test_buy_applies_effects(self, make_champion, make_state):
        garen = make_champion("Garen", "blue", 3, 3)
        state = make_state([garen])

        result = apply_action(state, BuyItemAction("blue", "bf_sword", garen.id))

        assert result.success
        bought = result.new_state.get_unit(garen.id)
        assert bought.stats.ad == 45
        assert [i.id for i in bought.items] == ["bf_sword"]
        assert result.new_state.blue_player.gold == 0
        assert result.new_state.has_bought_item_this_turn
        assert result.new_state.current_round == 1

    def test_max_hp_item_heals_the_difference(self, make_champion, make_state):
        garen = make_champion("Garen", "blue", 3, 3)
        state = make_state([garen])

        bought = apply_action(state, BuyItemAction("blue", "giants_belt", garen.id)).new_state

        unit = bought.get_unit(garen.id)
        assert unit.stats.max_hp == 150
        assert unit.stats.hp == 150

    def test_second_purchase_same_turn_fails(self, make_champion, make_state):
        garen = make_champion("Garen", "blue", 3, 3)
        state = make_state([garen], blue_gold=30)
        once = apply_action(state, BuyItemAction("blue", "bf_sword", garen.id)).new_state

        result = apply_action(once, BuyItemAction("blue", "chain_vest", garen.id))

        assert not result.success

    def test_insufficient_gold(self, make_champion, make_state):
        garen = make_champion("Garen", "blue", 3, 3)
        state = make_state([garen], blue_gold=5)

        result = apply_action(state, BuyItemAction("blue", "bf_sword", garen.id))

        assert not result.success
        assert result.error_code == "INSUFFICIENT_GOLD"

    def test_minions_cannot_hold_items(self, make_minion, make_state):
        minion = make_minion("Melee Minion", "blue", 3, 1)
        state = make_state([minion])

        result = apply_action(state, BuyItemAction("blue", "bf_sword", minion.id))

        assert not result.success


class TestEngineQueries:
    """Tests for the GameEngine query surface."""

    def test_validate_action_matches_apply(self, opening_state, engine):
        good = MoveAction("blue", Square(2, 1), Square(2, 2))
        bad = MoveAction("blue", Square(2, 1), Square(2, 5))

        assert engine.validate_action(opening_state, good)
        assert not engine.validate_action(opening_state, bad)

    def test_winner_unknown_while_playing(self, opening_state, engine):
        assert not engine.is_game_over(opening_state)
        assert engine.get_winner(opening_state) is None

    def test_engine_name(self):
        assert Reducer().get_name() == "Reducer"
