"""
Setup - Unit factories and the standard opening position.

Layout for blue (red mirrors it on ranks 7 and 6):
- Rank 0: king on file 4, the five drafted champions on files 1, 2, 3, 5, 6
- Rank 1: caster minions on files 0 and 7, melee minions on files 1..6

Lane minions walk straight forward only; the king never attacks.
"""

from __future__ import annotations
from typing import Sequence

from ..data.champions import ChampionDefinition, ChampionTable, SkillKind
from ..data.items import DEFAULT_SHOP
from ..data.units import CASTER_MINION, KING_NAME, MELEE_MINION, is_lane_minion
from .state import AttackRange, GameState, Player, Skill, Square, Unit, UnitStats

CHAMPION_FILES = (1, 2, 3, 5, 6)
KING_FILE = 4
STARTING_GOLD = 10

_MINION_STATS: dict[str, dict] = {
    MELEE_MINION: dict(hp=100, ad=25, physical_resistance=20, magic_resistance=5,
                       speed=1, gold_value=20),
    CASTER_MINION: dict(hp=80, ad=30, physical_resistance=5, magic_resistance=10,
                        speed=1, gold_value=25, attack_range=AttackRange(range=2)),
    "Siege Minion": dict(hp=200, ad=40, physical_resistance=25, magic_resistance=10,
                         speed=1, gold_value=40,
                         attack_range=AttackRange(range=8, diagonal=False),
                         critical_chance=10),
    "Super Minion": dict(hp=250, ad=45, physical_resistance=30, magic_resistance=30,
                         speed=1, gold_value=60),
    "Sand Soldier": dict(hp=60, ad=20, physical_resistance=10, magic_resistance=10,
                         speed=1, gold_value=35),
}


def _unit_id(name: str, square: Square) -> str:
    return f"{name.lower().replace(' ', '_').replace('.', '')}_{square.x}_{square.y}"


def create_champion(
    definition: ChampionDefinition,
    owner_id: str,
    blue: bool,
    position: Square,
    unit_id: str | None = None,
) -> Unit:
    """Build a full-health champion unit from its table definition."""
    base = definition.stats
    skill = None
    if definition.skill:
        s = definition.skill
        skill = Skill(
            name=s.name,
            kind=s.kind,
            target_type=s.target_type,
            cooldown=s.cooldown,
            current_cooldown=0,
            attack_range=AttackRange.from_definition(s.attack_range),
            base_damage=s.base_damage,
            ad_ratio=s.ad_ratio,
            ap_ratio=s.ap_ratio,
            damage_type=s.damage_type,
            stun_turns=s.stun_turns,
        )

    stats = UnitStats(
        hp=base.hp,
        max_hp=base.hp,
        ad=base.ad,
        ap=base.ap,
        physical_resistance=base.physical_resistance,
        magic_resistance=base.magic_resistance,
        speed=base.speed,
        attack_range=AttackRange.from_definition(base.attack_range),
        sunder=base.sunder,
        critical_chance=base.critical_chance,
        critical_damage=base.critical_damage,
        lifesteal=base.lifesteal,
        cooldown_reduction=base.cooldown_reduction,
        damage_amplification=base.damage_amplification,
        hp_regen=base.hp_regen,
        durability=base.durability,
        gold_value=base.gold_value,
    )
    return Unit(
        id=unit_id or _unit_id(definition.name, position),
        name=definition.name,
        owner_id=owner_id,
        blue=blue,
        position=position,
        starting_position=position,
        stats=stats,
        skill=skill,
    )


def create_minion(
    name: str,
    owner_id: str,
    blue: bool,
    position: Square,
    unit_id: str | None = None,
) -> Unit:
    """Build a minion. Lane minions only walk forward along their file."""
    values = dict(_MINION_STATS[name])
    hp = values.pop("hp")
    stats = UnitStats(hp=hp, max_hp=hp, **values)
    lane = is_lane_minion(name)
    return Unit(
        id=unit_id or _unit_id(name, position),
        name=name,
        owner_id=owner_id,
        blue=blue,
        position=position,
        starting_position=position,
        stats=stats,
        cannot_move_backward=lane,
        can_only_move_vertically=lane,
    )


def create_king(owner_id: str, blue: bool, position: Square, unit_id: str | None = None) -> Unit:
    """Build the king. Its death ends the game, so it carries no gold value."""
    stats = UnitStats(
        hp=100,
        max_hp=100,
        physical_resistance=50,
        magic_resistance=50,
        speed=1,
        attack_range=AttackRange(range=0, horizontal=False, vertical=False, diagonal=False),
        gold_value=0,
    )
    return Unit(
        id=unit_id or _unit_id(KING_NAME, position),
        name=KING_NAME,
        owner_id=owner_id,
        blue=blue,
        position=position,
        starting_position=position,
        stats=stats,
        skill=Skill(name="Poro Resilience", kind=SkillKind.PASSIVE, cooldown=0),
        cannot_attack=True,
    )


def create_game(
    blue_player_id: str,
    red_player_id: str,
    blue_champions: Sequence[str],
    red_champions: Sequence[str],
    champions: ChampionTable | None = None,
    game_id: str = "game",
    starting_gold: int = STARTING_GOLD,
    shop_items: Sequence[str] = DEFAULT_SHOP,
) -> GameState:
    """
    Build the opening position.

    Champion names are placed in order on files 1, 2, 3, 5, 6.
    Raises UnknownChampionError for names outside the table.
    """
    table = champions or ChampionTable.default()
    board: list[Unit] = []

    for player_id, blue, names in (
        (blue_player_id, True, blue_champions),
        (red_player_id, False, red_champions),
    ):
        back = 0 if blue else 7
        front = 1 if blue else 6

        board.append(create_king(player_id, blue, Square(KING_FILE, back)))
        for x, name in zip(CHAMPION_FILES, names):
            board.append(create_champion(table.get(name), player_id, blue, Square(x, back)))

        board.append(create_minion(CASTER_MINION, player_id, blue, Square(0, front)))
        board.append(create_minion(CASTER_MINION, player_id, blue, Square(7, front)))
        for x in range(1, 7):
            board.append(create_minion(MELEE_MINION, player_id, blue, Square(x, front)))

    return GameState(
        game_id=game_id,
        board=board,
        players=[
            Player(player_id=blue_player_id, blue=True, gold=starting_gold),
            Player(player_id=red_player_id, blue=False, gold=starting_gold),
        ],
        shop_items=list(shop_items),
    )
