"""
Engine Core - Game state, actions and the rules collaborator.

The engine core provides:
1. GameState snapshots of the 8x10 board
2. The Action sum type and ActionResult
3. The GameEngine interface and a reference Reducer
4. Targeting rules shared by generation and validation
5. The ActionGenerator used by bots and search
"""

from .state import (
    GameState,
    GamePhase,
    Player,
    Unit,
    UnitStats,
    Square,
    AttackRange,
    Skill,
    Shield,
    Debuff,
    Aura,
    Item,
)
from .action import (
    Action,
    ActionType,
    ActionResult,
    MoveAction,
    AttackAction,
    SkillAction,
    BuyItemAction,
)
from .interface import GameEngine
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions
from .setup import create_game, create_champion, create_minion, create_king

__all__ = [
    "GameState",
    "GamePhase",
    "Player",
    "Unit",
    "UnitStats",
    "Square",
    "AttackRange",
    "Skill",
    "Shield",
    "Debuff",
    "Aura",
    "Item",
    "Action",
    "ActionType",
    "ActionResult",
    "MoveAction",
    "AttackAction",
    "SkillAction",
    "BuyItemAction",
    "GameEngine",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "create_game",
    "create_champion",
    "create_minion",
    "create_king",
]
