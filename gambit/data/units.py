"""
Unit classes - Name-based classification of board occupants.

Champions come from the champion table. Everything else on the board
(the king, lane minions, summoned soldiers, neutral monsters) is
recognised by name.
"""

from __future__ import annotations

KING_NAME = "Poro"
NEUTRAL_OWNER = "neutral"

MELEE_MINION = "Melee Minion"
CASTER_MINION = "Caster Minion"
SIEGE_MINION = "Siege Minion"
SUPER_MINION = "Super Minion"
SAND_SOLDIER = "Sand Soldier"

# Minions that may receive ally-minion skills and get the first-move bonus
LANE_MINIONS = frozenset({MELEE_MINION, CASTER_MINION})

MINION_NAMES = frozenset({
    MELEE_MINION,
    CASTER_MINION,
    SIEGE_MINION,
    SUPER_MINION,
    SAND_SOLDIER,
})

NEUTRAL_MONSTERS = frozenset({
    "Baron Nashor",
    "Elder Dragon",
    "Infernal Drake",
    "Cloud Drake",
    "Mountain Drake",
    "Ocean Drake",
    "Drake",
})

# Base material value by unit name, before stats are considered
BASE_VALUES: dict[str, int] = {
    KING_NAME: 1000,
    MELEE_MINION: 20,
    CASTER_MINION: 25,
    SIEGE_MINION: 40,
    SUPER_MINION: 60,
    SAND_SOLDIER: 35,
    "Baron Nashor": 200,
    "Elder Dragon": 250,
    "Infernal Drake": 100,
    "Cloud Drake": 100,
    "Mountain Drake": 100,
    "Ocean Drake": 100,
    "Drake": 100,
}

CHAMPION_BASE_VALUE = 50


def is_king(name: str) -> bool:
    return name == KING_NAME


def is_minion(name: str) -> bool:
    return name in MINION_NAMES


def is_lane_minion(name: str) -> bool:
    return name in LANE_MINIONS


def is_neutral_monster(name: str) -> bool:
    return name in NEUTRAL_MONSTERS or name.endswith("Drake")


def is_champion(name: str) -> bool:
    """Anything that is not the king, a minion or a neutral monster."""
    return not (is_king(name) or is_minion(name) or is_neutral_monster(name))


def base_value(name: str) -> int:
    """Type-class base value used by material scoring."""
    if name in BASE_VALUES:
        return BASE_VALUES[name]
    if is_neutral_monster(name):
        return 100
    return CHAMPION_BASE_VALUE
