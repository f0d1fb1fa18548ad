"""Version-gated best-move recommendations.

A recommendation request carries the position version stamp current when
it was issued. Completions are applied only when that stamp still matches
the live stamp; any manual move, undo or reset bumps the stamp, so results
computed for an older position are dropped whatever order they arrive in.
There is no explicit cancellation of in-flight work.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from clockmate.core.enums import Color
from clockmate.core.move import MoveRecord
from clockmate.core.types import Square
from clockmate.game.interfaces import AnalysisDispatch, AnalysisRequest

_LOGGER = logging.getLogger(__name__)

_SAN_DECORATIONS = "+#!?"


@dataclass(frozen=True, slots=True)
class Recommendation:
    """Suggested move resolved to board coordinates."""

    from_sq: Square
    to_sq: Square
    san: str


def normalize_san(text: str) -> str:
    """Strip check/mate markers and annotation glyphs; unify castling zeros."""
    cleaned = text.strip().rstrip(_SAN_DECORATIONS).replace("0-0-0", "O-O-O")
    return cleaned.replace("0-0", "O-O")


def find_move(legal_moves: Iterable[MoveRecord], notation: str) -> MoveRecord | None:
    """Find the legal move named by *notation* (SAN, or UCI as a fallback)."""
    wanted = normalize_san(notation)
    if not wanted:
        return None
    moves = list(legal_moves)
    for move in moves:
        if normalize_san(move.san) == wanted:
            return move
    lowered = wanted.lower()
    for move in moves:
        if move.uci == lowered:
            return move
    return None


class RecommendationCoordinator:
    """Issues analysis requests and applies only fresh results."""

    __slots__ = (
        "_dispatch",
        "_recommendation",
        "_pending_request_id",
        "_pending_stamp",
        "_next_request_id",
    )

    def __init__(self, dispatch: AnalysisDispatch | None = None) -> None:
        self._dispatch = dispatch
        self._recommendation: Recommendation | None = None
        self._pending_request_id: int | None = None
        self._pending_stamp: int | None = None
        self._next_request_id = 0

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def recommendation(self) -> Recommendation | None:
        return self._recommendation

    @property
    def is_pending(self) -> bool:
        return self._pending_request_id is not None

    @property
    def pending_request_id(self) -> int | None:
        return self._pending_request_id

    def set_dispatch(self, dispatch: AnalysisDispatch | None) -> None:
        self._dispatch = dispatch

    # ── Request / response ───────────────────────────────────────────────

    def request(
        self,
        *,
        fen: str,
        side_to_move: Color,
        stamp: int,
        game_over: bool,
    ) -> bool:
        """Issue a request for the position tagged *stamp*.

        Returns False (and does nothing) when the game is over, no
        dispatcher is wired, or a request for this same stamp is still
        outstanding.
        """
        if game_over or self._dispatch is None:
            return False
        if self._pending_request_id is not None and self._pending_stamp == stamp:
            return False

        self._next_request_id += 1
        request_id = self._next_request_id
        self._pending_request_id = request_id
        self._pending_stamp = stamp
        self._recommendation = None
        self._dispatch(
            AnalysisRequest(
                request_id=request_id,
                fen=fen,
                side_to_move=side_to_move,
                stamp=stamp,
            )
        )
        return True

    def complete(
        self,
        request_id: int,
        best_move_san: str | None,
        *,
        current_stamp: int,
        legal_moves: Iterable[MoveRecord],
        game_over: bool = False,
    ) -> Recommendation | None:
        """Apply a finished request. Returns the recommendation if shown."""
        if request_id != self._pending_request_id:
            _LOGGER.debug("Dropping result for superseded request %d", request_id)
            return None

        stamp = self._pending_stamp
        self._pending_request_id = None
        self._pending_stamp = None

        if stamp != current_stamp:
            _LOGGER.debug(
                "Dropping stale recommendation (stamp %s, current %d)",
                stamp,
                current_stamp,
            )
            return None
        if game_over or not best_move_san:
            return None

        move = find_move(legal_moves, best_move_san)
        if move is None:
            _LOGGER.debug("Suggested move %r is not legal here", best_move_san)
            return None

        self._recommendation = Recommendation(move.from_sq, move.to_sq, move.san)
        return self._recommendation

    def fail(self, request_id: int) -> None:
        """The request produced no result; nothing is shown."""
        if request_id != self._pending_request_id:
            return
        self._pending_request_id = None
        self._pending_stamp = None

    def invalidate(self) -> bool:
        """Clear the shown recommendation. Returns True if one was shown."""
        had = self._recommendation is not None
        self._recommendation = None
        return had

    def accepts(self, request_id: int, current_stamp: int) -> bool:
        """Whether a completion for *request_id* would still be fresh."""
        return (
            request_id == self._pending_request_id
            and self._pending_stamp == current_stamp
        )

    def reset(self) -> bool:
        """Forget the pending request and the shown recommendation.

        Returns True if a recommendation was shown.
        """
        self._pending_request_id = None
        self._pending_stamp = None
        return self.invalidate()
