"""Abstract rules-engine interface consumed by the session layer.

The rules engine is the sole source of truth for legality and position.
Nothing in :mod:`clockmate.game` re-derives chess rules locally; it only
queries this interface and converts whatever comes back into
:class:`~clockmate.core.move.MoveRecord` values.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from clockmate.core.enums import Color, PieceType
from clockmate.core.move import MoveRecord
from clockmate.core.types import Square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


class IRulesEngine(ABC):
    """Interface for a chess rules engine holding one mutable position."""

    @abstractmethod
    def fen(self) -> str:
        """Snapshot of the current position."""

    @abstractmethod
    def turn(self) -> Color:
        """Side to move."""

    @abstractmethod
    def in_check(self) -> bool:
        """Is the side to move in check?"""

    @abstractmethod
    def is_game_over(self) -> bool: ...

    @abstractmethod
    def is_checkmate(self) -> bool: ...

    @abstractmethod
    def is_draw(self) -> bool:
        """Draw by rule other than stalemate."""

    @abstractmethod
    def is_stalemate(self) -> bool: ...

    @abstractmethod
    def piece_at(self, square: Square) -> tuple[Color, PieceType] | None:
        """Colour and type of the piece on *square*, if any."""

    @abstractmethod
    def legal_moves_from(self, square: Square) -> list[Square]:
        """Destination squares reachable from *square*."""

    @abstractmethod
    def legal_moves(self) -> list[MoveRecord]:
        """Every legal move in the current position, with SAN."""

    @abstractmethod
    def apply_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord | None:
        """Play a move. Returns ``None`` (and changes nothing) if illegal."""

    @abstractmethod
    def undo(self) -> MoveRecord | None:
        """Take back the last move. Returns ``None`` when history is empty."""

    @abstractmethod
    def reset(self, fen: str | None = None) -> None:
        """Reinitialise to the starting position (or *fen*)."""

    @abstractmethod
    def move_history(self) -> list[MoveRecord]:
        """Moves played since the last reset, oldest first."""
