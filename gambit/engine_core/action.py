"""
Action System - Actions and results.

Actions are a closed sum type: MoveAction, AttackAction, SkillAction
and BuyItemAction. Each variant carries only the fields it needs, so a
purchase can never carry a target square and a move can never carry an
item id.

All state changes flow through actions applied by a GameEngine.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .state import Square


class ActionType(Enum):
    """Types of actions in the system."""
    MOVE = "move"
    ATTACK = "attack"
    SKILL = "skill"
    BUY_ITEM = "buy_item"


@dataclass(frozen=True)
class MoveAction:
    """Move the unit on `caster` to the empty square `target`."""
    player_id: str
    caster: Square
    target: Square

    @property
    def action_type(self) -> ActionType:
        return ActionType.MOVE

    def __str__(self) -> str:
        return f"move {self.caster} -> {self.target}"


@dataclass(frozen=True)
class AttackAction:
    """Basic attack from the unit on `caster` against the unit on `target`."""
    player_id: str
    caster: Square
    target: Square

    @property
    def action_type(self) -> ActionType:
        return ActionType.ATTACK

    def __str__(self) -> str:
        return f"attack {self.caster} -> {self.target}"


@dataclass(frozen=True)
class SkillAction:
    """
    Cast the skill of the unit on `caster`.

    Self-cast skills use the caster square as target.
    """
    player_id: str
    caster: Square
    target: Square

    @property
    def action_type(self) -> ActionType:
        return ActionType.SKILL

    def __str__(self) -> str:
        return f"skill {self.caster} -> {self.target}"


@dataclass(frozen=True)
class BuyItemAction:
    """Buy `item_id` from the shop and equip it on `target_unit_id`."""
    player_id: str
    item_id: str
    target_unit_id: str

    @property
    def action_type(self) -> ActionType:
        return ActionType.BUY_ITEM

    def __str__(self) -> str:
        return f"buy {self.item_id} for {self.target_unit_id}"


Action = Union[MoveAction, AttackAction, SkillAction, BuyItemAction]


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - Human-readable changes (for logs and the CLI)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
