"""
Tests for draft and shop strategies.

Tests:
- Ban priority and random fallback
- Role-curve picks and counter-picks
- Squad ordering
- Item recommendations and synergy
"""

import random

from ..data.champions import Role
from ..engine_core.action import BuyItemAction
from ..engine_core.state import Item
from ..strategy import BanPickStrategy, ItemStrategy


class TestBans:
    """Tests for ban selection."""

    def test_priority_ban_first(self):
        assert BanPickStrategy().get_ban([]) == "Yasuo"

    def test_next_priority_after_ban(self):
        assert BanPickStrategy().get_ban(["Yasuo"]) == "Zed"

    def test_random_fallback_stays_available(self, champion_table):
        from ..strategy.ban_pick import PRIORITY_BANS

        strategy = BanPickStrategy(rng=random.Random(7))

        ban = strategy.get_ban(PRIORITY_BANS)

        assert ban is not None
        assert ban not in PRIORITY_BANS
        assert ban in champion_table.names()

    def test_nothing_left_to_ban(self, champion_table):
        assert BanPickStrategy().get_ban(champion_table.names()) is None


class TestPicks:
    """Tests for picks and counter-picks."""

    def test_first_pick_is_strongest_tank(self):
        assert BanPickStrategy().get_pick([], [], []) == "Dr. Mundo"

    def test_skips_banned_and_taken(self, champion_table):
        strategy = BanPickStrategy()

        pick = strategy.get_pick(["Dr. Mundo"], ["Malphite"], [])

        assert pick not in ("Dr. Mundo", "Malphite")
        assert champion_table.role_of(pick) == Role.TANK

    def test_second_pick_follows_role_curve(self, champion_table):
        pick = BanPickStrategy().get_pick([], ["Dr. Mundo"], ["Dr. Mundo"])

        assert champion_table.role_of(pick) == Role.FIGHTER

    def test_extra_slots_take_fighters(self):
        strategy = BanPickStrategy()

        assert strategy.needed_role(["a", "b", "c", "d", "e"]) == Role.FIGHTER
        assert strategy.needed_role(["a", "b"]) == Role.MARKSMAN

    def test_falls_back_to_any_role(self, champion_table):
        tanks = [c.name for c in champion_table if c.role == Role.TANK]

        pick = BanPickStrategy().get_pick(tanks, [], [])

        assert pick is not None
        assert pick not in tanks

    def test_no_pick_when_pool_empty(self, champion_table):
        assert BanPickStrategy().get_pick(champion_table.names(), [], []) is None

    def test_counter_squishy_draft_with_assassin(self, champion_table):
        counter = BanPickStrategy().suggest_counter(["Ashe", "Viktor"], [], ["Ashe", "Viktor"])

        assert champion_table.role_of(counter) == Role.ASSASSIN

    def test_counter_sturdy_draft_with_sunder(self):
        counter = BanPickStrategy().suggest_counter(["Malphite", "Garen"], [], ["Malphite", "Garen"])

        assert counter in ("Aatrox", "Zed")

    def test_counter_defaults_to_strongest(self):
        strategy = BanPickStrategy()

        assert strategy.suggest_counter(["Soraka"], [], []) == strategy.rank_by_strength(list(strategy.champions))[0].name


class TestOrder:
    """Tests for squad ordering."""

    def test_front_to_back(self):
        order = BanPickStrategy().get_order(["Soraka", "Jhin", "Zed", "Garen", "Malphite"])

        assert order == ["Malphite", "Garen", "Zed", "Jhin", "Soraka"]

    def test_unknown_names_dropped(self):
        assert BanPickStrategy().get_order(["Nobody", "Ahri"]) == ["Ahri"]


class TestItemStrategy:
    """Tests for shop decisions."""

    def test_marksman_buys_attack_damage(self, make_champion, make_state):
        ashe = make_champion("Ashe", "blue", 1, 1)
        state = make_state([ashe])

        action = ItemStrategy().recommend_purchase(state, "blue")

        assert action == BuyItemAction("blue", "bf_sword", ashe.id)

    def test_owned_items_skipped(self, make_champion, make_state):
        ashe = make_champion("Ashe", "blue", 1, 1)
        ashe.items.append(Item(id="bf_sword", name="B.F. Sword"))
        state = make_state([ashe])

        action = ItemStrategy().recommend_purchase(state, "blue")

        assert action.item_id == "recurve_bow"

    def test_fewest_items_carries_next(self, make_champion, make_state):
        ashe = make_champion("Ashe", "blue", 1, 1)
        ashe.items.append(Item(id="bf_sword", name="B.F. Sword"))
        malphite = make_champion("Malphite", "blue", 3, 1)
        state = make_state([ashe, malphite])

        action = ItemStrategy().recommend_purchase(state, "blue")

        assert action == BuyItemAction("blue", "giants_belt", malphite.id)

    def test_nothing_affordable(self, make_champion, make_state):
        state = make_state([make_champion("Ashe", "blue", 1, 1)], blue_gold=5)

        assert ItemStrategy().recommend_purchase(state, "blue") is None

    def test_minions_never_carry(self, make_minion, make_state):
        state = make_state([make_minion("Melee Minion", "blue", 1, 1)])

        assert ItemStrategy().recommend_purchase(state, "blue") is None

    def test_should_buy_item(self, make_champion, make_state):
        state = make_state([make_champion("Ashe", "blue", 1, 1)], blue_gold=10)
        strategy = ItemStrategy()

        assert strategy.should_buy_item(state, "blue")
        assert not strategy.should_buy_item(state, "blue", min_gold=10)
        assert not strategy.should_buy_item(state, "nobody")

    def test_synergy_follows_role(self, make_champion):
        strategy = ItemStrategy()
        ashe = make_champion("Ashe", "blue", 1, 1)
        malphite = make_champion("Malphite", "blue", 3, 1)

        assert strategy.evaluate_item_synergy("bf_sword", ashe) == 15
        assert strategy.evaluate_item_synergy("bf_sword", malphite) == 10
        assert strategy.evaluate_item_synergy("giants_belt", malphite) > strategy.evaluate_item_synergy("giants_belt", ashe)
        assert strategy.evaluate_item_synergy("no_such_item", ashe) == 0
