"""Analysis collaborator: UCI engine evaluation plus spectator commentary."""

from __future__ import annotations

import logging
import os
import shutil
from abc import ABC, abstractmethod

import chess
import chess.engine

from clockmate.analysis.commentary import SpectatorCommentator
from clockmate.analysis.models import AnalysisResult
from clockmate.core.enums import Color

_LOGGER = logging.getLogger(__name__)

_MATE_SCORE = 100_000
_EQUAL_MAX_CP = 30
_SLIGHT_EDGE_MAX_CP = 150
_PV_PREVIEW_PLIES = 4


class IAnalysisService(ABC):
    """Interface for position evaluation and move commentary.

    Both calls are best-effort: failures come back as
    :meth:`AnalysisResult.failed` or an empty string, never as exceptions.
    """

    @abstractmethod
    def evaluate(self, fen: str, side_to_move: Color) -> AnalysisResult: ...

    @abstractmethod
    def comment(self, fen: str, last_move_san: str) -> str: ...

    def close(self) -> None:
        """Release external resources (engine processes)."""


def describe_evaluation(score: chess.engine.Score) -> str:
    """White-relative score → short human-readable verdict."""
    cp = score.score(mate_score=_MATE_SCORE)
    if cp is None:
        return "Unknown"
    leader = "White" if cp > 0 else "Black"
    if score.is_mate():
        return f"{leader} has a forced mate"
    magnitude = abs(cp)
    if magnitude <= _EQUAL_MAX_CP:
        return "Equal"
    if magnitude <= _SLIGHT_EDGE_MAX_CP:
        return f"{leader} is slightly better"
    return f"{leader} is winning"


def resolve_engine_path(candidate: str | None = None) -> str | None:
    """Locate a UCI engine binary.

    Precedence: explicit *candidate*, ``STOCKFISH_PATH`` environment
    variable, then ``stockfish`` on the system PATH.
    """
    for option in (candidate, os.environ.get("STOCKFISH_PATH"), "stockfish"):
        if not option:
            continue
        if os.path.isfile(option):
            return option
        found = shutil.which(option)
        if found:
            return found
    return None


class UciAnalysisService(IAnalysisService):
    """Evaluates positions with a UCI engine (Stockfish) via python-chess.

    The engine process is started lazily on the first request and restarted
    after a failure. Calls are blocking; run them off the UI thread
    (see :class:`clockmate.ui.analysis_session.AnalysisSession`).
    """

    __slots__ = (
        "_engine_path",
        "_depth",
        "_movetime_ms",
        "_engine",
        "_commentator",
    )

    def __init__(
        self,
        engine_path: str | None = None,
        *,
        depth: int = 12,
        movetime_ms: int | None = None,
        commentator: SpectatorCommentator | None = None,
    ) -> None:
        if depth <= 0:
            raise ValueError(f"Analysis depth must be >= 1, got {depth}")
        self._engine_path = engine_path
        self._depth = depth
        self._movetime_ms = movetime_ms
        self._engine: chess.engine.SimpleEngine | None = None
        self._commentator = commentator or SpectatorCommentator()

    # ── IAnalysisService implementation ──────────────────────────────────

    def evaluate(self, fen: str, side_to_move: Color) -> AnalysisResult:
        try:
            board = chess.Board(fen)
        except ValueError as exc:
            _LOGGER.warning("Cannot analyze invalid FEN %r: %s", fen, exc)
            return AnalysisResult.failed()
        if board.turn != (side_to_move == Color.WHITE):
            _LOGGER.warning("Side to move %s disagrees with FEN %r", side_to_move, fen)
            return AnalysisResult.failed()

        try:
            engine = self._ensure_engine()
            info = engine.analyse(board, self._limit())
        except (chess.engine.EngineError, OSError, RuntimeError) as exc:
            _LOGGER.warning("Engine analysis failed: %s", exc)
            self.close()
            return AnalysisResult.failed()

        score = info.get("score")
        pv = info.get("pv") or []
        evaluation = describe_evaluation(score.white()) if score else "Unknown"
        if not pv:
            return AnalysisResult(
                evaluation=evaluation,
                best_move_san=None,
                explanation="The engine found no move to recommend.",
            )

        best_san = board.san(pv[0])
        line = board.variation_san(pv[:_PV_PREVIEW_PLIES])
        depth = info.get("depth")
        explanation = f"Engine line: {line}."
        if depth:
            explanation = f"Engine line at depth {depth}: {line}."
        return AnalysisResult(
            evaluation=evaluation,
            best_move_san=best_san,
            explanation=explanation,
        )

    def comment(self, fen: str, last_move_san: str) -> str:
        try:
            chess.Board(fen)
        except ValueError:
            return ""
        return self._commentator.comment(last_move_san)

    def close(self) -> None:
        engine = self._engine
        self._engine = None
        if engine is None:
            return
        try:
            engine.quit()
        except (chess.engine.EngineError, OSError) as exc:
            _LOGGER.debug("Engine did not quit cleanly: %s", exc)

    # ── Internal ─────────────────────────────────────────────────────────

    def _ensure_engine(self) -> chess.engine.SimpleEngine:
        if self._engine is not None:
            return self._engine
        path = resolve_engine_path(self._engine_path)
        if path is None:
            raise RuntimeError(
                "Stockfish engine not found. Install it or set STOCKFISH_PATH."
            )
        self._engine = chess.engine.SimpleEngine.popen_uci(path)
        _LOGGER.info("Started analysis engine at %s", path)
        return self._engine

    def _limit(self) -> chess.engine.Limit:
        if self._movetime_ms:
            return chess.engine.Limit(time=self._movetime_ms / 1000)
        return chess.engine.Limit(depth=self._depth)
