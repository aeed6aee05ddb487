"""Static data - champion and item tables, unit classification."""

from .champions import (
    ChampionTable,
    ChampionDefinition,
    ChampionStats,
    SkillDefinition,
    RangeDefinition,
    Role,
    SkillKind,
    TargetType,
    DamageType,
    CHAMPIONS,
)
from .items import ItemTable, ItemDefinition, ItemEffect, EffectKind, ITEMS, DEFAULT_SHOP
from . import units

__all__ = [
    "ChampionTable",
    "ChampionDefinition",
    "ChampionStats",
    "SkillDefinition",
    "RangeDefinition",
    "Role",
    "SkillKind",
    "TargetType",
    "DamageType",
    "CHAMPIONS",
    "ItemTable",
    "ItemDefinition",
    "ItemEffect",
    "EffectKind",
    "ITEMS",
    "DEFAULT_SHOP",
    "units",
]
