"""
Game State - Snapshot of a tactics match on the 8x10 board.

Design principles:
- Immutable-friendly: the reducer clones before it mutates, so every
  transition returns a new state and the input is left untouched
- Owner-centric: units belong to a player id (or "neutral"); the blue
  player moves on odd rounds and the red player on even rounds
- Dead units stay on the board with hp <= 0 and are skipped by lookups

Board coordinates run x in [-1, 8] and y in [0, 7]. Files -1 and 8 hold
neutral objectives; regular movement stays within files 0..7.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from copy import deepcopy
from enum import Enum

from ..data.champions import SkillKind, TargetType, DamageType

BOARD_MIN_X = -1
BOARD_MAX_X = 8
BOARD_MIN_Y = 0
BOARD_MAX_Y = 7

# Files a unit may walk onto
PLAYABLE_MIN_X = 0
PLAYABLE_MAX_X = 7

BLUE = "blue"
RED = "red"


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Square:
    """A board coordinate."""
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Square:
        return Square(self.x + dx, self.y + dy)

    def distance(self, other: Square) -> int:
        """Chebyshev distance, the number of king steps between squares."""
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


@dataclass
class AttackRange:
    """
    Which squares a unit can reach with an attack or skill.

    horizontal/vertical/diagonal enable the straight axes up to `range`
    squares. l_shape adds the eight knight offsets, which ignore both
    range and obstruction.
    """
    range: int = 1
    horizontal: bool = True
    vertical: bool = True
    diagonal: bool = True
    l_shape: bool = False

    @classmethod
    def from_definition(cls, definition: Any) -> AttackRange:
        return cls(
            range=definition.range,
            horizontal=definition.horizontal,
            vertical=definition.vertical,
            diagonal=definition.diagonal,
            l_shape=definition.l_shape,
        )


@dataclass
class Skill:
    """Runtime skill instance on a unit."""
    name: str
    kind: SkillKind = SkillKind.ACTIVE
    target_type: TargetType = TargetType.ENEMY
    cooldown: int = 3
    current_cooldown: int = 0
    attack_range: AttackRange = field(default_factory=AttackRange)
    base_damage: int = 0
    ad_ratio: float = 0.0
    ap_ratio: float = 0.0
    damage_type: DamageType = DamageType.MAGIC
    stun_turns: int = 0

    @property
    def is_active(self) -> bool:
        return self.kind == SkillKind.ACTIVE

    @property
    def is_ready(self) -> bool:
        """Active and off cooldown."""
        return self.is_active and self.current_cooldown == 0


@dataclass
class Shield:
    amount: int
    duration: int
    source: str = ""


@dataclass
class Debuff:
    id: str
    duration: int
    stun: bool = False


@dataclass
class Aura:
    id: str
    name: str


@dataclass
class Item:
    """An item equipped on a unit."""
    id: str
    name: str


@dataclass
class UnitStats:
    """Live stats of a unit. Percent-style stats are whole numbers (30 = 30%)."""
    hp: int
    max_hp: int
    ad: int = 0
    ap: int = 0
    physical_resistance: int = 0
    magic_resistance: int = 0
    speed: int = 1
    attack_range: AttackRange = field(default_factory=AttackRange)
    sunder: int = 0
    critical_chance: int = 0
    critical_damage: int = 150
    lifesteal: int = 0
    cooldown_reduction: int = 0
    damage_amplification: int = 0
    hp_regen: int = 0
    durability: int = 0
    gold_value: int = 0


@dataclass
class Unit:
    """
    A board occupant: champion, minion, neutral monster or king.

    Note: `blue` is the team flag and decides which way is forward.
    Blue advances toward y=7, red toward y=0.
    """
    id: str
    name: str
    owner_id: str
    blue: bool
    position: Square
    stats: UnitStats
    starting_position: Square | None = None
    skill: Skill | None = None
    shields: list[Shield] = field(default_factory=list)
    items: list[Item] = field(default_factory=list)
    debuffs: list[Debuff] = field(default_factory=list)
    auras: list[Aura] = field(default_factory=list)

    # Movement restrictions
    cannot_move_backward: bool = False
    can_only_move_vertically: bool = False
    has_moved_before: bool = False
    cannot_attack: bool = False

    dead_at_round: int | None = None

    MAX_ITEMS = 3

    @property
    def is_alive(self) -> bool:
        return self.stats.hp > 0

    @property
    def is_stunned(self) -> bool:
        return any(d.stun for d in self.debuffs)

    @property
    def total_shield(self) -> int:
        return sum(s.amount for s in self.shields)

    @property
    def hp_fraction(self) -> float:
        if self.stats.max_hp <= 0:
            return 0.0
        return max(0.0, self.stats.hp / self.stats.max_hp)

    @property
    def inventory_full(self) -> bool:
        return len(self.items) >= self.MAX_ITEMS

    @property
    def forward(self) -> int:
        """+1 for blue, -1 for red."""
        return 1 if self.blue else -1

    def advancement(self) -> int:
        """Ranks gained toward the enemy back rank from the own baseline."""
        if self.blue:
            return self.position.y - BOARD_MIN_Y
        return BOARD_MAX_Y - self.position.y


@dataclass
class Player:
    player_id: str
    blue: bool
    gold: int = 0

    @property
    def side(self) -> str:
        return BLUE if self.blue else RED


@dataclass
class GameState:
    """
    Complete state of a match at a point in time.

    Exactly one player is to move: the blue player on odd rounds and the
    red player on even rounds. A turn consists of at most one committing
    action (move, attack or skill) plus an optional purchase and any
    number of free mobility skills.
    """
    game_id: str
    board: list[Unit] = field(default_factory=list)
    players: list[Player] = field(default_factory=list)
    current_round: int = 1

    has_performed_action_this_turn: bool = False
    has_bought_item_this_turn: bool = False

    shop_items: list[str] = field(default_factory=list)
    last_action: Any | None = None  # Action

    phase: GamePhase = GamePhase.PLAYING
    winner: str | None = None  # "blue" | "red"

    # ========================================================================
    # Players
    # ========================================================================

    @property
    def blue_player(self) -> Player:
        return next(p for p in self.players if p.blue)

    @property
    def red_player(self) -> Player:
        return next(p for p in self.players if not p.blue)

    @property
    def current_player(self) -> Player:
        return self.blue_player if self.current_round % 2 == 1 else self.red_player

    @property
    def current_player_id(self) -> str:
        return self.current_player.player_id

    def get_player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def opponent_of(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.player_id != player_id:
                return player
        return None

    def opponent_id(self, player_id: str) -> str | None:
        opponent = self.opponent_of(player_id)
        return opponent.player_id if opponent else None

    def side_of(self, player_id: str) -> str | None:
        player = self.get_player(player_id)
        return player.side if player else None

    # ========================================================================
    # Units
    # ========================================================================

    def player_units(self, player_id: str) -> list[Unit]:
        """Living units owned by a player."""
        return [u for u in self.board if u.owner_id == player_id and u.is_alive]

    def living_units(self) -> list[Unit]:
        return [u for u in self.board if u.is_alive]

    def unit_at(self, square: Square) -> Unit | None:
        """The living unit on a square, if any."""
        for unit in self.board:
            if unit.position == square and unit.is_alive:
                return unit
        return None

    def get_unit(self, unit_id: str) -> Unit | None:
        for unit in self.board:
            if unit.id == unit_id:
                return unit
        return None

    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    # ========================================================================
    # Copying
    # ========================================================================

    def _copy_with(self, **kwargs) -> GameState:
        """Create a shallow copy with some fields replaced."""
        return GameState(
            game_id=kwargs.get("game_id", self.game_id),
            board=kwargs.get("board", self.board),
            players=kwargs.get("players", self.players),
            current_round=kwargs.get("current_round", self.current_round),
            has_performed_action_this_turn=kwargs.get(
                "has_performed_action_this_turn", self.has_performed_action_this_turn
            ),
            has_bought_item_this_turn=kwargs.get(
                "has_bought_item_this_turn", self.has_bought_item_this_turn
            ),
            shop_items=kwargs.get("shop_items", self.shop_items),
            last_action=kwargs.get("last_action", self.last_action),
            phase=kwargs.get("phase", self.phase),
            winner=kwargs.get("winner", self.winner),
        )

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)


def in_bounds(square: Square) -> bool:
    """Inside the full board, objective files included."""
    return (
        BOARD_MIN_X <= square.x <= BOARD_MAX_X
        and BOARD_MIN_Y <= square.y <= BOARD_MAX_Y
    )


def in_playable_bounds(square: Square) -> bool:
    """Inside the files units can walk on."""
    return (
        PLAYABLE_MIN_X <= square.x <= PLAYABLE_MAX_X
        and BOARD_MIN_Y <= square.y <= BOARD_MAX_Y
    )
