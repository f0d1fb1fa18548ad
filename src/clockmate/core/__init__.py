"""Core value types shared by the session, rules and analysis layers."""

from clockmate.core.enums import STRONGEST_PROMOTION, Color, MoveFlag, PieceType
from clockmate.core.move import MoveRecord
from clockmate.core.types import (
    Square,
    file_of,
    is_valid_square,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "Color",
    "MoveFlag",
    "PieceType",
    "STRONGEST_PROMOTION",
    # Types / helpers
    "Square",
    "file_of",
    "is_valid_square",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Records
    "MoveRecord",
]
