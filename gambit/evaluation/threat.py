"""
Threat Evaluator - What a side could hit on its next action.

For every live, unstunned unit that can attack, each reachable enemy
becomes a ThreatInfo with the expected damage and whether it kills.
Ready enemy-targeted skills are scored the same way with the skill
damage formula.

The summed priority is a cheap proxy for tactical pressure, used both
by the full position evaluation and by quiescence-style checks.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..data.champions import TargetType
from ..data.units import is_king
from ..engine_core.combat import attack_damage, skill_damage
from ..engine_core.state import GameState, Unit
from ..engine_core.targeting import attack_targets, is_enemy, skill_targets
from .material import MaterialEvaluator

LETHAL_BONUS = 100
KING_BONUS = 500


@dataclass
class ThreatInfo:
    """One attack or skill a unit could make right now."""
    attacker: Unit
    target: Unit
    damage: int
    can_kill: bool
    priority: float
    via_skill: bool = False


class ThreatEvaluator:
    """Enumerates and scores threats a player poses."""

    def __init__(self, material: MaterialEvaluator | None = None):
        self.material = material or MaterialEvaluator()

    def evaluate_threats(self, state: GameState, player_id: str) -> list[ThreatInfo]:
        threats: list[ThreatInfo] = []

        for unit in state.player_units(player_id):
            if unit.is_stunned:
                continue

            if not unit.cannot_attack:
                for square in attack_targets(state, unit):
                    target = state.unit_at(square)
                    if target is None or not is_enemy(unit, target):
                        continue
                    threats.append(self._threat(unit, target, attack_damage(unit, target)))

            skill = unit.skill
            if skill and skill.is_ready and skill.target_type == TargetType.ENEMY:
                for square in skill_targets(state, unit):
                    target = state.unit_at(square)
                    if target is None or not is_enemy(unit, target):
                        continue
                    damage = skill_damage(unit, target)
                    if damage > 0:
                        threats.append(self._threat(unit, target, damage, via_skill=True))

        return threats

    def evaluate_threat_score(self, state: GameState, player_id: str) -> float:
        return sum(t.priority for t in self.evaluate_threats(state, player_id))

    def get_lethal_threats(self, state: GameState, player_id: str) -> list[ThreatInfo]:
        """Threats that kill their target, highest priority first."""
        lethal = [t for t in self.evaluate_threats(state, player_id) if t.can_kill]
        return sorted(lethal, key=lambda t: t.priority, reverse=True)

    def calculate_damage(self, attacker: Unit, target: Unit) -> int:
        """Expected basic-attack damage from attacker to target."""
        return attack_damage(attacker, target)

    def evaluate_position_safety(self, state: GameState, unit: Unit) -> float:
        """
        Damage enemies could deal to `unit` where it stands, as a negative.

        An extra -200 for each enemy that could kill it outright.
        """
        safety = 0.0
        for enemy in state.living_units():
            if not is_enemy(unit, enemy) or enemy.cannot_attack or enemy.is_stunned:
                continue
            if unit.position not in attack_targets(state, enemy):
                continue
            damage = attack_damage(enemy, unit)
            safety -= damage
            if unit.stats.hp <= damage:
                safety -= 200
        return safety

    def quick_threat_score(self, state: GameState, player_id: str) -> float:
        """Attack-only pressure estimate without damage calculation."""
        score = 0.0
        for unit in state.player_units(player_id):
            if unit.cannot_attack or unit.is_stunned:
                continue
            for square in attack_targets(state, unit):
                target = state.unit_at(square)
                if target is None:
                    continue
                if is_king(target.name):
                    score += KING_BONUS
                score += self.material.evaluate_piece(target) * 0.5
                score += (1 - target.hp_fraction) * 30
        return score

    def _threat(self, attacker: Unit, target: Unit, damage: int, via_skill: bool = False) -> ThreatInfo:
        can_kill = target.stats.hp <= damage
        priority = float(damage)
        if can_kill:
            priority += LETHAL_BONUS
        if is_king(target.name):
            priority += KING_BONUS
        priority += self.material.evaluate_piece(target)
        return ThreatInfo(
            attacker=attacker,
            target=target,
            damage=damage,
            can_kill=can_kill,
            priority=priority,
            via_skill=via_skill,
        )
