"""
Combat - Expected damage of attacks and skills.

Both formulas share one pipeline:
1. Scale the raw damage by damage amplification
2. Apply the crit factor when crit chance is above 50%
3. Reduce by the target's durability
4. Reduce by the target's resistance net of the attacker's sunder
5. Subtract the target's shields, never going below zero

Crits are expected values, not rolls, so the result is deterministic.
"""

from __future__ import annotations
import math

from ..data.champions import DamageType
from .state import Unit

# Resistance r reduces damage by r / (r + RESISTANCE_SCALE)
RESISTANCE_SCALE = 30

CRIT_THRESHOLD = 50


def damage_reduction(resistance: float) -> float:
    """Fraction of damage blocked by a resistance value."""
    if resistance <= 0:
        return 0.0
    return resistance / (resistance + RESISTANCE_SCALE)


def _pre_mitigation(attacker: Unit, target: Unit, raw: float) -> int:
    amplification = (attacker.stats.damage_amplification + 100) / 100
    if attacker.stats.critical_chance > CRIT_THRESHOLD:
        crit = attacker.stats.critical_damage / 100
    else:
        crit = 1.0
    if target.stats.durability > 0:
        durability = (100 - target.stats.durability) / 100
    else:
        durability = 1.0
    return math.floor(raw * amplification * crit * durability)


def mitigate(
    attacker: Unit,
    target: Unit,
    damage: float,
    damage_type: DamageType,
    include_shields: bool = True,
) -> int:
    """Apply resistances, and optionally shields, to an already scaled amount."""
    if damage_type == DamageType.PHYSICAL:
        damage *= 1 - damage_reduction(target.stats.physical_resistance - attacker.stats.sunder)
    elif damage_type == DamageType.MAGIC:
        damage *= 1 - damage_reduction(target.stats.magic_resistance - attacker.stats.sunder)
    shields = target.total_shield if include_shields else 0
    return max(math.floor(damage) - shields, 0)


def attack_damage(attacker: Unit, target: Unit, include_shields: bool = True) -> int:
    """Expected damage of a basic attack. Basic attacks are physical."""
    scaled = _pre_mitigation(attacker, target, attacker.stats.ad)
    return mitigate(attacker, target, scaled, DamageType.PHYSICAL, include_shields)


def skill_power(unit: Unit) -> float:
    """Raw skill amount before any scaling: base + ratios."""
    skill = unit.skill
    if skill is None:
        return 0.0
    return skill.base_damage + unit.stats.ad * skill.ad_ratio + unit.stats.ap * skill.ap_ratio


def skill_damage(attacker: Unit, target: Unit, include_shields: bool = True) -> int:
    """Expected damage of the attacker's skill against a target."""
    if attacker.skill is None:
        return 0
    scaled = _pre_mitigation(attacker, target, skill_power(attacker))
    return mitigate(attacker, target, scaled, attacker.skill.damage_type, include_shields)
