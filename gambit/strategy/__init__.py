"""
Strategy module - Draft and shop heuristics, outside the turn search.
"""

from .ban_pick import BanPickStrategy, PRIORITY_BANS, IDEAL_COMPOSITION
from .items import ItemStrategy, ROLE_ITEM_PRIORITY, DEFAULT_PRIORITY

__all__ = [
    "BanPickStrategy",
    "PRIORITY_BANS",
    "IDEAL_COMPOSITION",
    "ItemStrategy",
    "ROLE_ITEM_PRIORITY",
    "DEFAULT_PRIORITY",
]
