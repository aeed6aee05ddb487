"""
Pytest fixtures for Gambit tests.
"""

import pytest

from ..data.champions import ChampionTable
from ..data.items import DEFAULT_SHOP, ItemTable
from ..engine_core.reducer import Reducer
from ..engine_core.setup import create_champion, create_game, create_king, create_minion
from ..engine_core.state import AttackRange, GameState, Player, Square, Unit, UnitStats


BLUE_TEAM = ["Malphite", "Aatrox", "Ashe", "Ahri", "Janna"]
RED_TEAM = ["Sion", "Garen", "Jhin", "Viktor", "Soraka"]


@pytest.fixture
def engine() -> Reducer:
    """Reference rules engine."""
    return Reducer()


@pytest.fixture
def champion_table() -> ChampionTable:
    return ChampionTable.default()


@pytest.fixture
def item_table() -> ItemTable:
    return ItemTable.default()


@pytest.fixture
def opening_state() -> GameState:
    """Standard opening position, blue ("blue") to move."""
    return create_game("blue", "red", BLUE_TEAM, RED_TEAM)


@pytest.fixture
def make_unit():
    """
    Build a bare unit from raw stats.

    Owner "blue" plays the blue side unless blue= is passed.
    """
    def _make(
        name: str,
        owner: str,
        x: int,
        y: int,
        hp: int = 100,
        max_hp: int | None = None,
        blue: bool | None = None,
        attack_range: AttackRange | None = None,
        **stats,
    ) -> Unit:
        square = Square(x, y)
        return Unit(
            id=f"{owner}_{name.lower().replace(' ', '_')}_{x}_{y}",
            name=name,
            owner_id=owner,
            blue=(owner == "blue") if blue is None else blue,
            position=square,
            starting_position=square,
            stats=UnitStats(
                hp=hp,
                max_hp=max_hp if max_hp is not None else max(hp, 1),
                attack_range=attack_range or AttackRange(),
                **stats,
            ),
        )
    return _make


@pytest.fixture
def make_champion(champion_table):
    """Build a table champion at a square for "blue" or "red"."""
    def _make(name: str, owner: str, x: int, y: int) -> Unit:
        return create_champion(champion_table.get(name), owner, owner == "blue", Square(x, y))
    return _make


@pytest.fixture
def make_minion():
    def _make(name: str, owner: str, x: int, y: int) -> Unit:
        return create_minion(name, owner, owner == "blue", Square(x, y))
    return _make


@pytest.fixture
def make_state():
    """
    Build a custom position with players "blue" and "red".

    Kings are added on (4,0) and (4,7) unless kings=False, so the game
    is not a draw by default.
    """
    def _make(
        units: list[Unit],
        current_round: int = 1,
        kings: bool = True,
        blue_gold: int = 10,
        red_gold: int = 10,
        shop_items=DEFAULT_SHOP,
    ) -> GameState:
        board = list(units)
        if kings:
            occupied = {u.position for u in board}
            if Square(4, 0) not in occupied:
                board.append(create_king("blue", True, Square(4, 0)))
            if Square(4, 7) not in occupied:
                board.append(create_king("red", False, Square(4, 7)))
        return GameState(
            game_id="test",
            board=board,
            players=[
                Player(player_id="blue", blue=True, gold=blue_gold),
                Player(player_id="red", blue=False, gold=red_gold),
            ],
            current_round=current_round,
            shop_items=list(shop_items),
        )
    return _make
