"""Move record produced at the rules-engine boundary."""

from __future__ import annotations

from dataclasses import dataclass

from clockmate.core.enums import MoveFlag, PieceType
from clockmate.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Immutable record of one applied (or legal) move.

    Rules-engine move objects are converted into this shape as soon as
    they cross into the session layer.
    """

    from_sq: Square
    to_sq: Square
    san: str
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    captured: PieceType | None = None
    was_check: bool = False

    @property
    def was_capture(self) -> bool:
        return self.captured is not None

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += self.promotion.symbol
        return base

    def __str__(self) -> str:
        return self.san
