"""
Champion Table - Closed, validated champion definitions.

Every champion that can be drafted or placed on the board has exactly
one ChampionDefinition here. The table is validated when it is built:
duplicate names, impossible ranges or negative cooldowns raise
StaticDataError before a game can start.

Lookups come in two flavours:
- get(name): raises UnknownChampionError for names outside the table
- find(name): returns None, for evaluators that must degrade gracefully
"""

from __future__ import annotations
from enum import Enum
from typing import Iterator

from pydantic import BaseModel, Field

from ..errors import StaticDataError, UnknownChampionError


# =============================================================================
# Enums
# =============================================================================

class Role(str, Enum):
    """Champion roles used by drafting, evaluation and shopping."""
    ASSASSIN = "assassin"
    MAGE = "mage"
    MARKSMAN = "marksman"
    FIGHTER = "fighter"
    TANK = "tank"
    SUPPORT = "support"


class SkillKind(str, Enum):
    PASSIVE = "passive"
    ACTIVE = "active"


class TargetType(str, Enum):
    """How an active skill chooses its target square."""
    SQUARE = "square"  # Dash along a clear path
    SQUARE_IN_RANGE = "squareInRange"  # Blink to any empty square in range
    ALLY = "ally"
    ENEMY = "enemy"
    ALLY_MINION = "allyMinion"
    NONE = "none"  # Self-cast


class DamageType(str, Enum):
    PHYSICAL = "physical"
    MAGIC = "magic"
    TRUE = "true"


# =============================================================================
# Models
# =============================================================================

class RangeDefinition(BaseModel):
    """Attack-range descriptor as stored in the tables."""
    range: int = Field(1, ge=1, le=8)
    horizontal: bool = True
    vertical: bool = True
    diagonal: bool = True
    l_shape: bool = False


class SkillDefinition(BaseModel):
    """A champion's skill."""
    name: str
    kind: SkillKind = SkillKind.ACTIVE
    target_type: TargetType = TargetType.ENEMY
    cooldown: int = Field(3, ge=0)
    attack_range: RangeDefinition = Field(default_factory=RangeDefinition)
    base_damage: int = Field(0, ge=0)
    ad_ratio: float = Field(0.0, ge=0.0)
    ap_ratio: float = Field(0.0, ge=0.0)
    damage_type: DamageType = DamageType.MAGIC
    stun_turns: int = Field(0, ge=0, description="Rounds the target stays stunned")


class ChampionStats(BaseModel):
    """Base stats of a champion at spawn."""
    hp: int = Field(ge=1)
    ad: int = Field(0, ge=0)
    ap: int = Field(0, ge=0)
    physical_resistance: int = 0
    magic_resistance: int = 0
    speed: int = Field(1, ge=0)
    attack_range: RangeDefinition = Field(default_factory=RangeDefinition)
    sunder: int = 0
    critical_chance: int = Field(0, ge=0, le=100)
    critical_damage: int = Field(150, ge=100)
    lifesteal: int = 0
    cooldown_reduction: int = 0
    damage_amplification: int = 0
    hp_regen: int = 0
    durability: int = Field(0, ge=0, le=100)
    gold_value: int = Field(30, ge=0)


class ChampionDefinition(BaseModel):
    """Static definition of a draftable champion."""
    name: str
    role: Role
    stats: ChampionStats
    skill: SkillDefinition | None = None


# =============================================================================
# Table
# =============================================================================

class ChampionTable:
    """
    Closed lookup table of champion definitions, keyed by name.

    Usage:
        table = ChampionTable.default()
        ashe = table.get("Ashe")
        role = table.role_of("Poro")  # None, not a champion
    """

    def __init__(self, definitions: list[ChampionDefinition]):
        errors = validate_champions(definitions)
        if errors:
            raise StaticDataError(errors)
        self._by_name = {d.name: d for d in definitions}

    @classmethod
    def default(cls) -> ChampionTable:
        return cls(list(CHAMPIONS))

    def get(self, name: str) -> ChampionDefinition:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownChampionError(name) from None

    def find(self, name: str) -> ChampionDefinition | None:
        return self._by_name.get(name)

    def role_of(self, name: str) -> Role | None:
        definition = self._by_name.get(name)
        return definition.role if definition else None

    def names(self) -> list[str]:
        return list(self._by_name)

    def by_role(self, role: Role) -> list[ChampionDefinition]:
        return [d for d in self._by_name.values() if d.role == role]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[ChampionDefinition]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)


def validate_champions(definitions: list[ChampionDefinition]) -> list[str]:
    """Return a list of problems with a set of champion definitions."""
    errors: list[str] = []
    seen: set[str] = set()

    for definition in definitions:
        if not definition.name:
            errors.append("champion name is required")
        if definition.name in seen:
            errors.append(f"duplicate champion: {definition.name}")
        seen.add(definition.name)

        skill = definition.skill
        if skill and skill.kind == SkillKind.ACTIVE and skill.cooldown == 0:
            errors.append(f"{definition.name}: active skill needs a cooldown")
        if skill and skill.stun_turns and skill.target_type != TargetType.ENEMY:
            errors.append(f"{definition.name}: only enemy-targeted skills can stun")

    return errors


# =============================================================================
# Data
# =============================================================================

def _ranged(r: int, diagonal: bool = True) -> RangeDefinition:
    return RangeDefinition(range=r, horizontal=True, vertical=True, diagonal=diagonal)


CHAMPIONS: tuple[ChampionDefinition, ...] = (
    # Tanks
    ChampionDefinition(
        name="Malphite", role=Role.TANK,
        stats=ChampionStats(hp=140, ad=20, ap=10, physical_resistance=40,
                            magic_resistance=20, speed=1, gold_value=35),
        skill=SkillDefinition(name="Unstoppable Force", cooldown=4, base_damage=20,
                              ap_ratio=0.6, stun_turns=1,
                              attack_range=_ranged(2)),
    ),
    ChampionDefinition(
        name="Rammus", role=Role.TANK,
        stats=ChampionStats(hp=130, ad=18, physical_resistance=50,
                            magic_resistance=15, speed=1, gold_value=30),
        skill=SkillDefinition(name="Defensive Ball Curl", target_type=TargetType.NONE,
                              cooldown=3, base_damage=30, ap_ratio=0.5),
    ),
    ChampionDefinition(
        name="Sion", role=Role.TANK,
        stats=ChampionStats(hp=150, ad=25, physical_resistance=30,
                            magic_resistance=20, speed=1, gold_value=35),
        skill=SkillDefinition(name="Decimating Smash", cooldown=4, base_damage=25,
                              ad_ratio=0.8, damage_type=DamageType.PHYSICAL,
                              stun_turns=1),
    ),
    ChampionDefinition(
        name="Dr. Mundo", role=Role.TANK,
        stats=ChampionStats(hp=160, ad=22, physical_resistance=25,
                            magic_resistance=25, speed=1, hp_regen=8, gold_value=30),
        skill=SkillDefinition(name="Heart Zapper", target_type=TargetType.NONE,
                              cooldown=3, base_damage=25, ap_ratio=0.3),
    ),
    ChampionDefinition(
        name="Leona", role=Role.TANK,
        stats=ChampionStats(hp=135, ad=22, physical_resistance=35,
                            magic_resistance=30, speed=1, gold_value=30),
        skill=SkillDefinition(name="Shield of Daybreak", cooldown=3, base_damage=15,
                              ap_ratio=0.4, stun_turns=1),
    ),
    # Fighters
    ChampionDefinition(
        name="Aatrox", role=Role.FIGHTER,
        stats=ChampionStats(hp=120, ad=40, physical_resistance=20,
                            magic_resistance=10, speed=1, sunder=10, lifesteal=15,
                            gold_value=40),
        skill=SkillDefinition(name="The Darkin Blade", cooldown=3, base_damage=20,
                              ad_ratio=1.0, damage_type=DamageType.PHYSICAL,
                              attack_range=_ranged(2)),
    ),
    ChampionDefinition(
        name="Garen", role=Role.FIGHTER,
        stats=ChampionStats(hp=125, ad=35, physical_resistance=25,
                            magic_resistance=15, speed=1, hp_regen=5, gold_value=35),
        skill=SkillDefinition(name="Decisive Strike", cooldown=3, base_damage=15,
                              ad_ratio=1.2, damage_type=DamageType.PHYSICAL),
    ),
    ChampionDefinition(
        name="Nasus", role=Role.FIGHTER,
        stats=ChampionStats(hp=120, ad=32, physical_resistance=20,
                            magic_resistance=15, speed=1, lifesteal=10, gold_value=35),
        skill=SkillDefinition(name="Siphoning Strike", cooldown=2, base_damage=10,
                              ad_ratio=1.0, damage_type=DamageType.PHYSICAL),
    ),
    ChampionDefinition(
        name="Tryndamere", role=Role.FIGHTER,
        stats=ChampionStats(hp=110, ad=42, physical_resistance=15,
                            magic_resistance=10, speed=2, critical_chance=40,
                            critical_damage=175, gold_value=40),
        skill=SkillDefinition(name="Spinning Slash", target_type=TargetType.SQUARE,
                              cooldown=3, attack_range=_ranged(2)),
    ),
    # Marksmen
    ChampionDefinition(
        name="Ashe", role=Role.MARKSMAN,
        stats=ChampionStats(hp=85, ad=38, physical_resistance=5, magic_resistance=5,
                            speed=1, attack_range=_ranged(3), critical_chance=25,
                            gold_value=40),
        skill=SkillDefinition(name="Enchanted Crystal Arrow", cooldown=5, base_damage=30,
                              ap_ratio=0.8, stun_turns=1, attack_range=_ranged(4)),
    ),
    ChampionDefinition(
        name="Ezreal", role=Role.MARKSMAN,
        stats=ChampionStats(hp=85, ad=36, ap=20, physical_resistance=5,
                            magic_resistance=5, speed=1, attack_range=_ranged(3),
                            gold_value=40),
        skill=SkillDefinition(name="Arcane Shift", target_type=TargetType.SQUARE_IN_RANGE,
                              cooldown=3, attack_range=_ranged(2)),
    ),
    ChampionDefinition(
        name="Jhin", role=Role.MARKSMAN,
        stats=ChampionStats(hp=80, ad=50, physical_resistance=5, magic_resistance=5,
                            speed=1, attack_range=_ranged(3, diagonal=False),
                            critical_chance=60, critical_damage=200, gold_value=45),
        skill=SkillDefinition(name="Dancing Grenade", cooldown=3, base_damage=20,
                              ad_ratio=0.8, damage_type=DamageType.PHYSICAL,
                              attack_range=_ranged(3)),
    ),
    ChampionDefinition(
        name="Tristana", role=Role.MARKSMAN,
        stats=ChampionStats(hp=85, ad=42, physical_resistance=5, magic_resistance=5,
                            speed=1, attack_range=_ranged(3), critical_chance=30,
                            gold_value=45),
        skill=SkillDefinition(name="Rocket Jump", target_type=TargetType.SQUARE_IN_RANGE,
                              cooldown=4, attack_range=_ranged(3)),
    ),
    # Mages
    ChampionDefinition(
        name="Ahri", role=Role.MAGE,
        stats=ChampionStats(hp=85, ad=15, ap=45, physical_resistance=5,
                            magic_resistance=15, speed=1, attack_range=_ranged(2),
                            gold_value=40),
        skill=SkillDefinition(name="Orb of Deception", cooldown=3, base_damage=25,
                              ap_ratio=0.9, attack_range=_ranged(3)),
    ),
    ChampionDefinition(
        name="Viktor", role=Role.MAGE,
        stats=ChampionStats(hp=80, ad=15, ap=55, physical_resistance=5,
                            magic_resistance=15, speed=1, attack_range=_ranged(3),
                            gold_value=45),
        skill=SkillDefinition(name="Death Ray", cooldown=3, base_damage=30,
                              ap_ratio=1.0, attack_range=_ranged(4)),
    ),
    ChampionDefinition(
        name="Twisted Fate", role=Role.MAGE,
        stats=ChampionStats(hp=80, ad=20, ap=40, physical_resistance=5,
                            magic_resistance=10, speed=1, attack_range=_ranged(3),
                            gold_value=40),
        skill=SkillDefinition(name="Pick a Card", cooldown=4, base_damage=20,
                              ap_ratio=0.7, stun_turns=1, attack_range=_ranged(3)),
    ),
    ChampionDefinition(
        name="Azir", role=Role.MAGE,
        stats=ChampionStats(hp=85, ad=15, ap=45, physical_resistance=5,
                            magic_resistance=10, speed=1, attack_range=_ranged(2),
                            gold_value=40),
        skill=SkillDefinition(name="Conquering Sands", target_type=TargetType.SQUARE_IN_RANGE,
                              cooldown=4, attack_range=_ranged(2)),
    ),
    # Assassins
    ChampionDefinition(
        name="Zed", role=Role.ASSASSIN,
        stats=ChampionStats(hp=95, ad=48, physical_resistance=10,
                            magic_resistance=10, speed=2, sunder=10,
                            critical_chance=30, gold_value=45),
        skill=SkillDefinition(name="Living Shadow", target_type=TargetType.SQUARE_IN_RANGE,
                              cooldown=3, attack_range=RangeDefinition(range=2, l_shape=True)),
    ),
    ChampionDefinition(
        name="Yasuo", role=Role.ASSASSIN,
        stats=ChampionStats(hp=100, ad=45, physical_resistance=10,
                            magic_resistance=10, speed=2, critical_chance=55,
                            critical_damage=160, gold_value=45),
        skill=SkillDefinition(name="Steel Tempest", cooldown=2, base_damage=15,
                              ad_ratio=1.0, damage_type=DamageType.PHYSICAL,
                              attack_range=_ranged(2)),
    ),
    ChampionDefinition(
        name="Kha'Zix", role=Role.ASSASSIN,
        stats=ChampionStats(hp=95, ad=46, physical_resistance=10,
                            magic_resistance=10, speed=2,
                            attack_range=RangeDefinition(range=1, l_shape=True),
                            gold_value=45),
        skill=SkillDefinition(name="Taste Their Fear", cooldown=3, base_damage=30,
                              ad_ratio=1.0, damage_type=DamageType.PHYSICAL),
    ),
    # Supports
    ChampionDefinition(
        name="Janna", role=Role.SUPPORT,
        stats=ChampionStats(hp=85, ad=12, ap=35, physical_resistance=5,
                            magic_resistance=15, speed=1, attack_range=_ranged(2),
                            gold_value=30),
        skill=SkillDefinition(name="Eye of the Storm", target_type=TargetType.ALLY,
                              cooldown=3, base_damage=20, ap_ratio=0.6,
                              attack_range=_ranged(3)),
    ),
    ChampionDefinition(
        name="Soraka", role=Role.SUPPORT,
        stats=ChampionStats(hp=85, ad=10, ap=40, physical_resistance=5,
                            magic_resistance=15, speed=1, attack_range=_ranged(2),
                            gold_value=30),
        skill=SkillDefinition(name="Astral Infusion", target_type=TargetType.ALLY,
                              cooldown=2, base_damage=25, ap_ratio=0.8,
                              attack_range=_ranged(3)),
    ),
    ChampionDefinition(
        name="Blitzcrank", role=Role.SUPPORT,
        stats=ChampionStats(hp=120, ad=20, ap=20, physical_resistance=25,
                            magic_resistance=15, speed=1, gold_value=30),
        skill=SkillDefinition(name="Rocket Grab", cooldown=4, base_damage=15,
                              ap_ratio=0.5, stun_turns=1, attack_range=_ranged(3)),
    ),
    ChampionDefinition(
        name="Teemo", role=Role.SUPPORT,
        stats=ChampionStats(hp=80, ad=20, ap=30, physical_resistance=5,
                            magic_resistance=10, speed=1, attack_range=_ranged(2),
                            gold_value=30),
        skill=SkillDefinition(name="Guerrilla Warfare", target_type=TargetType.ALLY_MINION,
                              cooldown=3, base_damage=20, ap_ratio=0.5,
                              attack_range=_ranged(2)),
    ),
)
