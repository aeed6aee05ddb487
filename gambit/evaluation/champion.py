"""
Champion Evaluator - Per-unit strength and team composition.

evaluate_champion splits a unit's worth into:
- base value: its gold value
- combat value: damage, range, crit expectation, sustain, penetration
- strategic value: role, skill, auras, items, speed
all scaled by remaining health.

Team composition is used by draft and shop logic, not by the live-turn
search.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..data.champions import ChampionTable, Role
from ..data.units import is_champion
from ..engine_core.state import GameState, Unit

ROLE_BASE: dict[Role, float] = {
    Role.ASSASSIN: 25,
    Role.MAGE: 20,
    Role.MARKSMAN: 22,
    Role.FIGHTER: 18,
    Role.TANK: 15,
    Role.SUPPORT: 12,
}


@dataclass
class ChampionValue:
    base_value: float
    combat_value: float
    strategic_value: float
    health_factor: float
    total: float


@dataclass
class TeamComposition:
    """A side's living units bucketed by role."""
    by_role: dict[Role, list[Unit]] = field(default_factory=dict)
    other: list[Unit] = field(default_factory=list)  # Minions, king, unknown names
    total_value: float = 0.0

    def count(self, role: Role) -> int:
        return len(self.by_role.get(role, []))

    @property
    def tanks(self) -> list[Unit]:
        return self.by_role.get(Role.TANK, [])

    @property
    def carries(self) -> list[Unit]:
        return self.by_role.get(Role.MARKSMAN, []) + self.by_role.get(Role.MAGE, [])


class ChampionEvaluator:
    """Scores individual champions. Unknown names get no role bonus."""

    def __init__(self, champions: ChampionTable | None = None):
        self.champions = champions or ChampionTable.default()

    def evaluate_champion(self, unit: Unit, state: GameState | None = None) -> ChampionValue:
        base = float(unit.stats.gold_value)
        combat = self.combat_value(unit)
        strategic = self.strategic_value(unit)
        health = min(1.0, unit.hp_fraction)
        total = (base + combat + strategic) * (0.5 + 0.5 * health)
        return ChampionValue(
            base_value=base,
            combat_value=combat,
            strategic_value=strategic,
            health_factor=health,
            total=total,
        )

    def combat_value(self, unit: Unit) -> float:
        s = unit.stats
        value = 0.6 * s.ad + 0.5 * s.ap
        value += 3 * s.attack_range.range
        value += s.critical_chance * (s.critical_damage - 100) / 100
        value += 0.5 * s.lifesteal + 2 * s.hp_regen
        value += 0.4 * s.sunder
        return value

    def strategic_value(self, unit: Unit) -> float:
        value = 0.0
        role = self.champions.role_of(unit.name)
        if role is not None:
            value += ROLE_BASE[role]

        skill = unit.skill
        if skill is not None:
            value += 10
            if skill.cooldown > 0:
                value += 20 / skill.cooldown
            if skill.is_ready:
                value += 15

        value += 10 * len(unit.auras)
        value += 8 * len(unit.items)
        value += 3 * unit.stats.speed
        return value

    def analyze_team_composition(self, state: GameState, player_id: str) -> TeamComposition:
        composition = TeamComposition()
        for unit in state.player_units(player_id):
            role = self.champions.role_of(unit.name) if is_champion(unit.name) else None
            if role is None:
                composition.other.append(unit)
                continue
            composition.by_role.setdefault(role, []).append(unit)
            composition.total_value += self.evaluate_champion(unit, state).total
        return composition
