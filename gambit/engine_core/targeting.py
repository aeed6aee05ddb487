"""
Targeting - Ray-based reach rules shared by generation and validation.

Every rule here walks outward from a unit along one of eight straight
directions. Movement and most skills stop at the first occupant.
Knight-style L offsets are checked on their own and jump over anything
in between.

The reference reducer validates against these same functions, so what
the generator proposes and what the engine accepts agree on
well-formed states.
"""

from __future__ import annotations
from typing import Callable, Iterator

from ..data.champions import TargetType
from ..data.units import is_lane_minion
from .state import (
    AttackRange,
    GameState,
    Square,
    Unit,
    in_bounds,
    in_playable_bounds,
)

# The eight straight directions. Line of sight only ever uses these.
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0), (-1, 0), (0, 1), (0, -1),
    (1, 1), (1, -1), (-1, 1), (-1, -1),
)

L_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 2), (2, 1), (2, -1), (1, -2),
    (-1, -2), (-2, -1), (-2, 1), (-1, 2),
)


def is_enemy(unit: Unit, other: Unit) -> bool:
    """Anything not owned by the unit's owner, neutral monsters included."""
    return other.owner_id != unit.owner_id


def is_ally(unit: Unit, other: Unit) -> bool:
    return other.owner_id == unit.owner_id and other.id != unit.id


def direction_allowed(attack_range: AttackRange, dx: int, dy: int) -> bool:
    if dx == 0:
        return attack_range.vertical
    if dy == 0:
        return attack_range.horizontal
    return attack_range.diagonal


def allowed_directions(attack_range: AttackRange) -> list[tuple[int, int]]:
    return [d for d in DIRECTIONS if direction_allowed(attack_range, *d)]


def ray(origin: Square, dx: int, dy: int, length: int) -> Iterator[Square]:
    """Squares along a direction, nearest first, stopping at the board edge."""
    square = origin
    for _ in range(length):
        square = square.offset(dx, dy)
        if not in_bounds(square):
            return
        yield square


def effective_speed(unit: Unit) -> int:
    """Lane minions get one extra step on their first move."""
    if is_lane_minion(unit.name) and not unit.has_moved_before:
        return unit.stats.speed + 1
    return unit.stats.speed


# ============================================================================
# Moves
# ============================================================================

def move_targets(state: GameState, unit: Unit) -> list[Square]:
    """Empty squares the unit can walk to this turn."""
    targets: list[Square] = []
    speed = effective_speed(unit)

    for dx, dy in DIRECTIONS:
        if unit.can_only_move_vertically and dx != 0:
            continue
        if unit.cannot_move_backward and dy == -unit.forward:
            continue
        for square in ray(unit.position, dx, dy, speed):
            if not in_playable_bounds(square) or state.unit_at(square):
                break
            targets.append(square)

    return targets


# ============================================================================
# Attacks
# ============================================================================

def attack_targets(
    state: GameState,
    unit: Unit,
    attack_range: AttackRange | None = None,
) -> list[Square]:
    """Squares holding an enemy the unit can hit with a basic attack."""
    reach = attack_range or unit.stats.attack_range
    return _first_occupant_targets(state, unit, reach, lambda other: is_enemy(unit, other))


def _first_occupant_targets(
    state: GameState,
    unit: Unit,
    reach: AttackRange,
    accept: Callable[[Unit], bool],
) -> list[Square]:
    targets: list[Square] = []

    for dx, dy in allowed_directions(reach):
        for square in ray(unit.position, dx, dy, reach.range):
            occupant = state.unit_at(square)
            if occupant is None:
                continue
            if accept(occupant):
                targets.append(square)
            break

    if reach.l_shape:
        for dx, dy in L_OFFSETS:
            square = unit.position.offset(dx, dy)
            if not in_bounds(square) or square in targets:
                continue
            occupant = state.unit_at(square)
            if occupant is not None and accept(occupant):
                targets.append(square)

    return targets


# ============================================================================
# Skills
# ============================================================================

def skill_targets(state: GameState, unit: Unit) -> list[Square]:
    """
    Legal target squares for the unit's skill.

    Empty when the unit has no skill, a passive skill, or a skill on
    cooldown. Self-cast skills target the caster's own square.
    """
    skill = unit.skill
    if skill is None or not skill.is_ready:
        return []

    reach = skill.attack_range
    target_type = skill.target_type

    if target_type == TargetType.NONE:
        return [unit.position]

    if target_type == TargetType.SQUARE:
        targets = []
        for dx, dy in allowed_directions(reach):
            for square in ray(unit.position, dx, dy, reach.range):
                if not in_playable_bounds(square) or state.unit_at(square):
                    break
                targets.append(square)
        return targets

    if target_type == TargetType.SQUARE_IN_RANGE:
        targets = []
        for dx, dy in allowed_directions(reach):
            for square in ray(unit.position, dx, dy, reach.range):
                if state.unit_at(square) is None:
                    targets.append(square)
        if reach.l_shape:
            for dx, dy in L_OFFSETS:
                square = unit.position.offset(dx, dy)
                if in_bounds(square) and state.unit_at(square) is None and square not in targets:
                    targets.append(square)
        return targets

    if target_type == TargetType.ENEMY:
        return _first_occupant_targets(state, unit, reach, lambda o: is_enemy(unit, o))
    if target_type == TargetType.ALLY:
        return _first_occupant_targets(state, unit, reach, lambda o: is_ally(unit, o))
    if target_type == TargetType.ALLY_MINION:
        return _first_occupant_targets(
            state, unit, reach, lambda o: is_ally(unit, o) and is_lane_minion(o.name)
        )
    return []


def is_mobility_skill(unit: Unit) -> bool:
    """A ready skill that repositions the caster without ending the turn."""
    return (
        unit.skill is not None
        and unit.skill.is_ready
        and unit.skill.target_type == TargetType.SQUARE_IN_RANGE
    )


# ============================================================================
# Geometry
# ============================================================================

def step_between(a: Square, b: Square) -> tuple[int, int] | None:
    """Unit direction from a to b, or None if they are not on a straight line."""
    dx = b.x - a.x
    dy = b.y - a.y
    if dx == 0 and dy == 0:
        return None
    if dx != 0 and dy != 0 and abs(dx) != abs(dy):
        return None
    return (dx > 0) - (dx < 0), (dy > 0) - (dy < 0)


def points_between(a: Square, b: Square) -> list[Square]:
    """Squares strictly between a and b on a straight line."""
    step = step_between(a, b)
    if step is None:
        return []
    points = []
    square = a.offset(*step)
    while square != b:
        points.append(square)
        square = square.offset(*step)
    return points
