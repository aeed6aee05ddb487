"""
Ban/Pick Strategy - Draft-time heuristics.

Independent of the live-turn loop: works on champion names and the
static champion table only.

- Ban: first available name from a fixed priority list, else random
- Pick: fill the role curve tank, fighter, marksman, mage, support
  (fighter for any extra slot), strongest champion of the needed role
- Order: front to back, tanks first and supports last
"""

from __future__ import annotations
import logging
import random
from typing import Iterable

from ..data.champions import ChampionDefinition, ChampionTable, Role

logger = logging.getLogger(__name__)

PRIORITY_BANS: tuple[str, ...] = (
    "Yasuo",
    "Zed",
    "Jhin",
    "Kha'Zix",
    "Viktor",
    "Tristana",
    "Blitzcrank",
    "Malphite",
    "Sion",
    "Aatrox",
)

IDEAL_COMPOSITION: tuple[Role, ...] = (
    Role.TANK,
    Role.FIGHTER,
    Role.MARKSMAN,
    Role.MAGE,
    Role.SUPPORT,
)

OVERFLOW_ROLE = Role.FIGHTER

ROLE_MULTIPLIER: dict[Role, float] = {
    Role.ASSASSIN: 1.15,
    Role.MARKSMAN: 1.1,
    Role.MAGE: 1.05,
}


class BanPickStrategy:
    """Draft decisions for one bot. Randomness only breaks ban fallbacks."""

    def __init__(self, champions: ChampionTable | None = None, rng: random.Random | None = None):
        self.champions = champions or ChampionTable.default()
        self.rng = rng or random.Random()

    def get_ban(self, banned_champions: Iterable[str]) -> str | None:
        banned = set(banned_champions)
        available = [name for name in self.champions.names() if name not in banned]
        if not available:
            return None

        for name in PRIORITY_BANS:
            if name in available:
                return name
        return self.rng.choice(available)

    def get_pick(
        self,
        banned_champions: Iterable[str],
        already_picked: Iterable[str],
        bot_picks: Iterable[str],
    ) -> str | None:
        """
        Pick the next champion for the bot's team.

        already_picked holds every pick made so far by either side.
        """
        available = self._available(banned_champions, already_picked)
        if not available:
            return None

        needed = self.needed_role(list(bot_picks))
        role_pool = [c for c in available if c.role == needed]
        if role_pool:
            return self.rank_by_strength(role_pool)[0].name

        logger.debug("No %s left, taking the strongest champion", needed.value)
        return self.rank_by_strength(available)[0].name

    def needed_role(self, current_picks: list[str]) -> Role:
        index = len(current_picks)
        if index < len(IDEAL_COMPOSITION):
            return IDEAL_COMPOSITION[index]
        return OVERFLOW_ROLE

    def get_order(self, champion_names: Iterable[str]) -> list[str]:
        """
        Order a squad front to back.

        Tanks, fighters, other roles, ranged (marksmen and mages), then
        supports. Names missing from the table are dropped.
        """
        buckets: dict[str, list[str]] = {
            "tanks": [], "fighters": [], "others": [], "ranged": [], "supports": [],
        }
        for name in champion_names:
            role = self.champions.role_of(name)
            if role is None:
                logger.debug("Unknown champion %r left out of the order", name)
                continue
            if role == Role.TANK:
                buckets["tanks"].append(name)
            elif role == Role.FIGHTER:
                buckets["fighters"].append(name)
            elif role == Role.SUPPORT:
                buckets["supports"].append(name)
            elif role in (Role.MARKSMAN, Role.MAGE):
                buckets["ranged"].append(name)
            else:
                buckets["others"].append(name)

        return (
            buckets["tanks"]
            + buckets["fighters"]
            + buckets["others"]
            + buckets["ranged"]
            + buckets["supports"]
        )

    def suggest_counter(
        self,
        opponent_picks: Iterable[str],
        banned_champions: Iterable[str],
        already_picked: Iterable[str],
    ) -> str | None:
        """
        Counter-pick against the opponent's draft.

        Two or more mages/marksmen: dive them with an assassin.
        Two or more tanks/fighters: bring sunder (or Aatrox).
        Otherwise the strongest available champion.
        """
        available = self._available(banned_champions, already_picked)
        if not available:
            return None

        roles = [r for r in (self.champions.role_of(n) for n in opponent_picks) if r is not None]
        squishy = sum(1 for r in roles if r in (Role.MAGE, Role.MARKSMAN))
        sturdy = sum(1 for r in roles if r in (Role.TANK, Role.FIGHTER))

        if squishy >= 2:
            assassins = [c for c in available if c.role == Role.ASSASSIN]
            if assassins:
                return self.rank_by_strength(assassins)[0].name

        if sturdy >= 2:
            busters = [c for c in available if c.name == "Aatrox" or c.stats.sunder > 0]
            if busters:
                return self.rank_by_strength(busters)[0].name

        return self.rank_by_strength(available)[0].name

    # ========================================================================
    # Scoring
    # ========================================================================

    def rank_by_strength(self, definitions: list[ChampionDefinition]) -> list[ChampionDefinition]:
        return sorted(definitions, key=self.champion_score, reverse=True)

    @staticmethod
    def champion_score(definition: ChampionDefinition) -> float:
        s = definition.stats
        score = 0.0

        score += s.ad * 1.5
        score += s.ap * 1.2
        score += s.critical_chance * 0.8

        score += s.hp * 0.3
        score += s.physical_resistance * 0.5
        score += s.magic_resistance * 0.3

        score += s.speed * 5
        score += s.hp_regen * 2
        score += s.lifesteal * 1.5
        score += s.attack_range.range * 8

        if definition.skill is not None:
            score += 20
            if definition.skill.cooldown > 0:
                score += 30 / definition.skill.cooldown

        return score * ROLE_MULTIPLIER.get(definition.role, 1.0)

    def _available(
        self,
        banned_champions: Iterable[str],
        already_picked: Iterable[str],
    ) -> list[ChampionDefinition]:
        unavailable = set(banned_champions) | set(already_picked)
        return [c for c in self.champions if c.name not in unavailable]
