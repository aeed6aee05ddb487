"""
Item Strategy - Shop-time heuristics.

Chooses which basic item to buy and who should carry it:
1. Rank eligible champions by fewest items, then highest ad + ap
2. For each, take the first affordable item from its role's priority
   list that it does not already hold
3. Otherwise any affordable item it does not hold
4. Otherwise the first affordable item for the top-ranked champion
"""

from __future__ import annotations

from ..data.champions import ChampionTable, Role
from ..data.items import EffectKind, ItemDefinition, ItemTable
from ..data.units import is_champion
from ..engine_core.action import BuyItemAction
from ..engine_core.state import GameState, Unit

ROLE_ITEM_PRIORITY: dict[Role, tuple[str, ...]] = {
    Role.ASSASSIN: ("bf_sword", "pickaxe", "sparring_gloves"),
    Role.MARKSMAN: ("bf_sword", "recurve_bow", "pickaxe"),
    Role.MAGE: ("needlessly_large_rod", "tear_of_the_goddess", "chain_vest"),
    Role.FIGHTER: ("giants_belt", "bf_sword", "chain_vest"),
    Role.TANK: ("giants_belt", "chain_vest", "negatron_cloak"),
    Role.SUPPORT: ("needlessly_large_rod", "giants_belt", "tear_of_the_goddess"),
}

DEFAULT_PRIORITY: tuple[str, ...] = ("bf_sword", "giants_belt", "needlessly_large_rod")


class ItemStrategy:
    def __init__(self, items: ItemTable | None = None, champions: ChampionTable | None = None):
        self.items = items or ItemTable.default()
        self.champions = champions or ChampionTable.default()

    def recommend_purchase(self, state: GameState, player_id: str) -> BuyItemAction | None:
        """A purchase for the player, or None if nothing sensible is affordable."""
        player = state.get_player(player_id)
        if player is None:
            return None

        eligible = self.eligible_champions(state, player_id)
        if not eligible:
            return None

        affordable = self.affordable_items(state, player.gold)
        if not affordable:
            return None
        affordable_ids = [item.id for item in affordable]

        ranked = self.rank_champions_for_items(eligible)
        for unit in ranked:
            item_id = self.best_item_for(unit, affordable_ids)
            if item_id is not None:
                return BuyItemAction(player_id, item_id, unit.id)

        return BuyItemAction(player_id, affordable_ids[0], ranked[0].id)

    def should_buy_item(self, state: GameState, player_id: str, min_gold: int = 0) -> bool:
        """Gold above the floor, someone to carry it and something to buy."""
        player = state.get_player(player_id)
        if player is None or player.gold <= min_gold:
            return False
        if not self.eligible_champions(state, player_id):
            return False
        return bool(self.affordable_items(state, player.gold))

    def evaluate_item_synergy(self, item_id: str, unit: Unit) -> float:
        """
        How well an item's flat bonuses suit a champion's role.

        Multiplicative effects and stats outside the role tables score zero.
        """
        item = self.items.find(item_id)
        if item is None:
            return 0.0

        role = self._role(unit)
        synergy = 0.0
        for effect in item.effects:
            if effect.kind != EffectKind.ADD:
                continue
            value = effect.value
            if effect.stat == "ad":
                synergy += value * 1.5 if role in (Role.MARKSMAN, Role.FIGHTER, Role.ASSASSIN) else value
            elif effect.stat == "ap":
                synergy += value * 1.5 if role in (Role.MAGE, Role.SUPPORT) else value
            elif effect.stat == "max_hp":
                synergy += value * 0.5 if role in (Role.TANK, Role.FIGHTER) else value * 0.3
            elif effect.stat in ("physical_resistance", "magic_resistance"):
                synergy += value * 2 if role == Role.TANK else value
            elif effect.stat == "critical_chance":
                synergy += value * 2 if role in (Role.MARKSMAN, Role.ASSASSIN) else value
        return synergy

    # ========================================================================
    # Helpers
    # ========================================================================

    def eligible_champions(self, state: GameState, player_id: str) -> list[Unit]:
        return [
            u for u in state.player_units(player_id)
            if is_champion(u.name) and not u.inventory_full
        ]

    def affordable_items(self, state: GameState, gold: int) -> list[ItemDefinition]:
        affordable = []
        for item_id in state.shop_items:
            item = self.items.find(item_id)
            if item is not None and item.is_basic and item.cost <= gold:
                affordable.append(item)
        return affordable

    @staticmethod
    def rank_champions_for_items(units: list[Unit]) -> list[Unit]:
        return sorted(units, key=lambda u: (len(u.items), -(u.stats.ad + u.stats.ap)))

    def best_item_for(self, unit: Unit, available_ids: list[str]) -> str | None:
        owned = {item.id for item in unit.items}
        for item_id in ROLE_ITEM_PRIORITY.get(self._role(unit), DEFAULT_PRIORITY):
            if item_id in available_ids and item_id not in owned:
                return item_id
        for item_id in available_ids:
            if item_id not in owned:
                return item_id
        return None

    def _role(self, unit: Unit) -> Role:
        # Unknown names shop like fighters
        return self.champions.role_of(unit.name) or Role.FIGHTER
