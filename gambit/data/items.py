"""
Item Table - Closed, validated shop item definitions.

Basic items can be bought directly with gold. Combined items exist in
the table so that effects and valuations can refer to them, but the
shop only ever offers basic items.
"""

from __future__ import annotations
from enum import Enum
from typing import Iterator

from pydantic import BaseModel, Field

from ..errors import StaticDataError, UnknownItemError


class EffectKind(str, Enum):
    ADD = "add"
    MULTIPLY = "multiply"


class ItemEffect(BaseModel):
    """A stat modification granted by an item."""
    stat: str = Field(description="UnitStats field name, e.g. ad, max_hp")
    value: float
    kind: EffectKind = EffectKind.ADD


class ItemDefinition(BaseModel):
    """Static definition of a shop item."""
    id: str
    name: str
    cost: int = Field(ge=0)
    is_basic: bool = True
    effects: list[ItemEffect] = Field(default_factory=list)
    recipe: list[str] = Field(default_factory=list)


# Stats an item is allowed to touch
ITEM_STATS = frozenset({
    "max_hp",
    "ad",
    "ap",
    "physical_resistance",
    "magic_resistance",
    "speed",
    "sunder",
    "critical_chance",
    "critical_damage",
    "lifesteal",
    "cooldown_reduction",
    "damage_amplification",
    "hp_regen",
    "durability",
})


class ItemTable:
    """Closed lookup table of items keyed by id."""

    def __init__(self, definitions: list[ItemDefinition]):
        errors = validate_items(definitions)
        if errors:
            raise StaticDataError(errors)
        self._by_id = {d.id: d for d in definitions}

    @classmethod
    def default(cls) -> ItemTable:
        return cls(list(ITEMS))

    def get(self, item_id: str) -> ItemDefinition:
        try:
            return self._by_id[item_id]
        except KeyError:
            raise UnknownItemError(item_id) from None

    def find(self, item_id: str) -> ItemDefinition | None:
        return self._by_id.get(item_id)

    def basic_items(self) -> list[ItemDefinition]:
        return [d for d in self._by_id.values() if d.is_basic]

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._by_id

    def __iter__(self) -> Iterator[ItemDefinition]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)


def validate_items(definitions: list[ItemDefinition]) -> list[str]:
    """Return a list of problems with a set of item definitions."""
    errors: list[str] = []
    ids = {d.id for d in definitions}
    seen: set[str] = set()

    for item in definitions:
        if item.id in seen:
            errors.append(f"duplicate item: {item.id}")
        seen.add(item.id)

        for effect in item.effects:
            if effect.stat not in ITEM_STATS:
                errors.append(f"{item.id}: unknown stat {effect.stat!r}")

        if item.is_basic and item.recipe:
            errors.append(f"{item.id}: basic items have no recipe")
        for component in item.recipe:
            if component not in ids:
                errors.append(f"{item.id}: unknown recipe component {component!r}")

    return errors


def _add(stat: str, value: float) -> ItemEffect:
    return ItemEffect(stat=stat, value=value)


ITEMS: tuple[ItemDefinition, ...] = (
    # Basic items
    ItemDefinition(id="bf_sword", name="B.F. Sword", cost=10, effects=[_add("ad", 10)]),
    ItemDefinition(id="recurve_bow", name="Recurve Bow", cost=10,
                   effects=[_add("damage_amplification", 10)]),
    ItemDefinition(id="needlessly_large_rod", name="Needlessly Large Rod", cost=10,
                   effects=[_add("ap", 15)]),
    ItemDefinition(id="tear_of_the_goddess", name="Tear of the Goddess", cost=10,
                   effects=[_add("cooldown_reduction", 10), _add("ap", 5)]),
    ItemDefinition(id="chain_vest", name="Chain Vest", cost=10,
                   effects=[_add("physical_resistance", 15)]),
    ItemDefinition(id="negatron_cloak", name="Negatron Cloak", cost=10,
                   effects=[_add("magic_resistance", 15)]),
    ItemDefinition(id="giants_belt", name="Giant's Belt", cost=10,
                   effects=[_add("max_hp", 25)]),
    ItemDefinition(id="sparring_gloves", name="Sparring Gloves", cost=10,
                   effects=[_add("critical_chance", 20)]),
    ItemDefinition(id="pickaxe", name="Pickaxe", cost=10, effects=[_add("sunder", 10)]),
    # Combined items
    ItemDefinition(id="infinity_edge", name="Infinity Edge", cost=25, is_basic=False,
                   recipe=["bf_sword", "sparring_gloves"],
                   effects=[_add("ad", 15), _add("critical_chance", 25),
                            _add("critical_damage", 30)]),
    ItemDefinition(id="rabadons_deathcap", name="Rabadon's Deathcap", cost=25, is_basic=False,
                   recipe=["needlessly_large_rod", "needlessly_large_rod"],
                   effects=[_add("ap", 40)]),
    ItemDefinition(id="warmogs_armor", name="Warmog's Armor", cost=25, is_basic=False,
                   recipe=["giants_belt", "giants_belt"],
                   effects=[_add("max_hp", 60), _add("hp_regen", 5)]),
    ItemDefinition(id="bloodthirster", name="Bloodthirster", cost=25, is_basic=False,
                   recipe=["bf_sword", "negatron_cloak"],
                   effects=[_add("ad", 15), _add("lifesteal", 20)]),
    ItemDefinition(id="last_whisper", name="Last Whisper", cost=25, is_basic=False,
                   recipe=["recurve_bow", "pickaxe"],
                   effects=[_add("damage_amplification", 10), _add("sunder", 20)]),
)

DEFAULT_SHOP: tuple[str, ...] = (
    "bf_sword",
    "recurve_bow",
    "needlessly_large_rod",
    "tear_of_the_goddess",
    "chain_vest",
    "negatron_cloak",
    "giants_belt",
    "sparring_gloves",
    "pickaxe",
)
