"""
Game Engine Interface - The authoritative rules collaborator.

The bot engine never mutates game state. Every simulated transition
goes through a GameEngine, which validates the action and returns a new
state. The bundled Reducer is a reference implementation; a server can
plug in its own engine as long as it honours this contract.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import GameState, Square
    from .action import Action, ActionResult


class GameEngine(ABC):
    """
    Abstract base class for rules engines.

    apply_action must be deterministic and must not mutate its input.
    """

    @abstractmethod
    def apply_action(self, state: GameState, action: Action) -> ActionResult:
        """
        Validate and apply an action.

        Returns ActionResult with the new state, or a failure result
        with an error message. Never raises for illegal actions.
        """
        pass

    def validate_action(self, state: GameState, action: Action) -> bool:
        """Whether `action` is legal in `state`."""
        return self.apply_action(state, action).success

    @abstractmethod
    def get_valid_moves(self, state: GameState, unit_id: str) -> list[Square]:
        pass

    @abstractmethod
    def get_valid_attacks(self, state: GameState, unit_id: str) -> list[Square]:
        pass

    @abstractmethod
    def get_valid_skill_targets(self, state: GameState, unit_id: str) -> list[Square]:
        pass

    @abstractmethod
    def is_game_over(self, state: GameState) -> bool:
        pass

    @abstractmethod
    def get_winner(self, state: GameState) -> str | None:
        """"blue", "red", or None while undecided or drawn."""
        pass

    def get_name(self) -> str:
        return self.__class__.__name__
