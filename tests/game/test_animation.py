"""Tests for the animation offset resolver."""

from clockmate.core.enums import Color
from clockmate.core.types import A1, E2, E4, F3, G1, H8
from clockmate.game.animation import AnimationOffset, animation_offset, visual_coords


class TestVisualCoords:
    def test_white_at_bottom(self) -> None:
        assert visual_coords(A1, Color.WHITE) == (0, 7)
        assert visual_coords(H8, Color.WHITE) == (7, 0)

    def test_black_at_bottom_mirrors_both_axes(self) -> None:
        assert visual_coords(A1, Color.BLACK) == (7, 0)
        assert visual_coords(H8, Color.BLACK) == (0, 7)

    def test_invalid_square(self) -> None:
        assert visual_coords(64, Color.WHITE) is None


class TestAnimationOffset:
    def test_pawn_push_white_orientation(self) -> None:
        assert animation_offset(E2, E4, Color.WHITE) == AnimationOffset(0, 2)

    def test_pawn_push_black_orientation(self) -> None:
        assert animation_offset(E2, E4, Color.BLACK) == AnimationOffset(0, -2)

    def test_knight_move_both_orientations(self) -> None:
        assert animation_offset(G1, F3, Color.WHITE) == AnimationOffset(1, 2)
        assert animation_offset(G1, F3, Color.BLACK) == AnimationOffset(-1, -2)

    def test_same_square_is_zero(self) -> None:
        assert animation_offset(E4, E4, Color.WHITE) == AnimationOffset(0, 0)

    def test_unlocatable_endpoint(self) -> None:
        assert animation_offset(E2, 99, Color.WHITE) is None
        assert animation_offset(-1, E4, Color.BLACK) is None
