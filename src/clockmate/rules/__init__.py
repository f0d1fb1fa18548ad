"""Rules-engine boundary: interface plus the python-chess implementation."""

from clockmate.rules.chess_engine import ChessRulesEngine
from clockmate.rules.interfaces import STARTING_FEN, IRulesEngine

__all__ = [
    "ChessRulesEngine",
    "IRulesEngine",
    "STARTING_FEN",
]
