"""
Errors - Exception hierarchy for the bot engine.

Engine-level rejections travel as ActionResult values, never as
exceptions. The classes here cover the cases that are genuinely
exceptional: malformed static tables, lookups of names that are not in
a closed table, and rule violations raised inside the reference reducer
(which converts them back into failure results).
"""

from __future__ import annotations


class GambitError(Exception):
    """Base class for all gambit errors."""


class StaticDataError(GambitError):
    """Raised when a champion or item table fails validation at load time."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Static data validation failed with {len(errors)} error(s)")


class UnknownChampionError(GambitError, KeyError):
    """Raised when a champion name is not in the champion table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown champion: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownItemError(GambitError, KeyError):
    """Raised when an item id is not in the item table."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Unknown item: {item_id!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidActionError(GambitError):
    """
    Raised by the reference reducer when an action breaks a rule.

    Carries a machine-readable error code alongside the message so the
    reducer can surface both in ActionResult.failure().
    """

    def __init__(self, message: str, error_code: str = "INVALID_ACTION"):
        self.error_code = error_code
        super().__init__(message)
