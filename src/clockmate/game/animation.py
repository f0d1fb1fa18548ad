"""Screen-space offsets for animating the last move under either orientation."""

from __future__ import annotations

from dataclasses import dataclass

from clockmate.core.enums import Color
from clockmate.core.types import Square, file_of, is_valid_square, rank_of


@dataclass(frozen=True, slots=True)
class AnimationOffset:
    """Where the moved piece starts, in squares, relative to its destination.

    Positive *dx* is to the right on screen, positive *dy* is downwards.
    """

    dx: int
    dy: int


def visual_coords(square: Square, bottom: Color) -> tuple[int, int] | None:
    """Board square → (column, row) on screen, with row 0 at the top.

    *bottom* is the colour rendered at the bottom of the board.
    """
    if not is_valid_square(square):
        return None
    f, r = file_of(square), rank_of(square)
    if bottom == Color.BLACK:
        return 7 - f, r
    return f, 7 - r


def animation_offset(
    from_sq: Square,
    to_sq: Square,
    bottom: Color,
) -> AnimationOffset | None:
    """Offset of *from_sq* relative to *to_sq* as currently displayed.

    Returns ``None`` when either endpoint cannot be placed on the grid.
    """
    origin = visual_coords(from_sq, bottom)
    target = visual_coords(to_sq, bottom)
    if origin is None or target is None:
        return None
    return AnimationOffset(dx=origin[0] - target[0], dy=origin[1] - target[1])
