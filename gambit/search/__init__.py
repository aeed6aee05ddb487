"""
Search module - Turn-level lookahead.

Provides:
- Search: breadth-first best action over chains of free actions
- MoveOrdering: heuristic ranking to bound branching
"""

from .search import Search, SearchResult, DEFAULT_TIME_LIMIT_MS, MAX_CHAIN_LENGTH
from .move_ordering import MoveOrdering, ScoredAction

__all__ = [
    "Search",
    "SearchResult",
    "DEFAULT_TIME_LIMIT_MS",
    "MAX_CHAIN_LENGTH",
    "MoveOrdering",
    "ScoredAction",
]
