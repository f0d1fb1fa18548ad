"""Rules engine backed by python-chess."""

from __future__ import annotations

import chess

from clockmate.core.enums import Color, MoveFlag, PieceType
from clockmate.core.move import MoveRecord
from clockmate.core.types import Square, is_valid_square, rank_of
from clockmate.rules.interfaces import STARTING_FEN, IRulesEngine


def _to_color(color: chess.Color) -> Color:
    return Color.WHITE if color == chess.WHITE else Color.BLACK


class ChessRulesEngine(IRulesEngine):
    """:class:`IRulesEngine` over a single :class:`chess.Board`.

    Square indices and piece-type numbers coincide with python-chess, so
    conversion at this boundary is mostly a matter of tagging moves.
    """

    __slots__ = ("_board", "_records")

    def __init__(self, fen: str | None = None) -> None:
        self._board = chess.Board(fen or STARTING_FEN)
        self._records: list[MoveRecord] = []

    # ── Queries ──────────────────────────────────────────────────────────

    def fen(self) -> str:
        return self._board.fen()

    def turn(self) -> Color:
        return _to_color(self._board.turn)

    def in_check(self) -> bool:
        return self._board.is_check()

    def is_game_over(self) -> bool:
        return self.is_checkmate() or self.is_stalemate() or self.is_draw()

    def is_checkmate(self) -> bool:
        return self._board.is_checkmate()

    def is_draw(self) -> bool:
        board = self._board
        return (
            board.is_insufficient_material()
            or board.is_fifty_moves()
            or board.is_repetition(3)
        )

    def is_stalemate(self) -> bool:
        return self._board.is_stalemate()

    def piece_at(self, square: Square) -> tuple[Color, PieceType] | None:
        if not is_valid_square(square):
            return None
        piece = self._board.piece_at(square)
        if piece is None:
            return None
        return _to_color(piece.color), PieceType(piece.piece_type)

    def legal_moves_from(self, square: Square) -> list[Square]:
        if not is_valid_square(square):
            return []
        # Promotions yield one move per piece; report each destination once.
        seen: dict[Square, None] = {}
        for move in self._board.legal_moves:
            if move.from_square == square:
                seen.setdefault(move.to_square, None)
        return list(seen)

    def legal_moves(self) -> list[MoveRecord]:
        return [self._to_record(move) for move in self._board.legal_moves]

    def move_history(self) -> list[MoveRecord]:
        return list(self._records)

    # ── Mutation ─────────────────────────────────────────────────────────

    def apply_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord | None:
        if not (is_valid_square(from_sq) and is_valid_square(to_sq)):
            return None
        piece = self._board.piece_at(from_sq)
        if piece is None:
            return None

        promo: int | None = None
        if piece.piece_type == chess.PAWN and rank_of(to_sq) in (0, 7):
            promo = int(promotion or PieceType.QUEEN)

        move = chess.Move(from_sq, to_sq, promotion=promo)
        if not self._board.is_legal(move):
            return None

        record = self._to_record(move)
        self._board.push(move)
        self._records.append(record)
        return record

    def undo(self) -> MoveRecord | None:
        if not self._board.move_stack:
            return None
        self._board.pop()
        return self._records.pop() if self._records else None

    def reset(self, fen: str | None = None) -> None:
        self._board = chess.Board(fen or STARTING_FEN)
        self._records = []

    # ── Internal ─────────────────────────────────────────────────────────

    def _to_record(self, move: chess.Move) -> MoveRecord:
        """Tag a python-chess move (legal in the current position)."""
        board = self._board
        captured: PieceType | None = None
        if board.is_en_passant(move):
            captured = PieceType.PAWN
        else:
            target = board.piece_type_at(move.to_square)
            if target is not None:
                captured = PieceType(target)

        return MoveRecord(
            from_sq=move.from_square,
            to_sq=move.to_square,
            san=board.san(move),
            flag=self._flag_for(move),
            promotion=PieceType(move.promotion) if move.promotion else None,
            captured=captured,
            was_check=board.gives_check(move),
        )

    def _flag_for(self, move: chess.Move) -> MoveFlag:
        board = self._board
        if move.promotion:
            return MoveFlag.PROMOTION
        if board.is_en_passant(move):
            return MoveFlag.EN_PASSANT
        if board.is_kingside_castling(move):
            return MoveFlag.CASTLE_KINGSIDE
        if board.is_queenside_castling(move):
            return MoveFlag.CASTLE_QUEENSIDE
        if (
            board.piece_type_at(move.from_square) == chess.PAWN
            and abs(move.to_square - move.from_square) == 16
        ):
            return MoveFlag.DOUBLE_PAWN
        return MoveFlag.NORMAL
