"""
Gambit - Tactical bot engine for an 8x10 champion chess variant.

Given a snapshot of the board, the bot picks one action for its seat.
The package provides:
- Static champion and item tables
- Action generation and a reference rules engine
- Material, threat, line-of-sight and positional evaluation
- A time-boxed search over chains of free actions
- Draft and shop heuristics behind a single BotEngine facade
"""

__version__ = "0.1.0"
