"""GameController: the central orchestrator of a clocked game session.

Coordinates: rules engine, ClockPair, SessionState, RecommendationCoordinator
and the commentary hook. Emits events via simple callbacks so the UI / tests
can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from clockmate.analysis.models import AnalysisResult
from clockmate.core.enums import STRONGEST_PROMOTION, Color
from clockmate.core.move import MoveRecord
from clockmate.core.types import Square
from clockmate.game.animation import AnimationOffset, animation_offset
from clockmate.game.clock import ClockPair
from clockmate.game.interfaces import (
    AnalysisDispatch,
    CommentaryDispatch,
    CommentaryRequest,
    ISoundPlayer,
    SilentSoundPlayer,
    SoundEffect,
    TimeControl,
)
from clockmate.game.recommendation import Recommendation, RecommendationCoordinator
from clockmate.game.state import Outcome, OutcomeKind, SessionState, Selection
from clockmate.rules.chess_engine import ChessRulesEngine
from clockmate.rules.interfaces import IRulesEngine

_LOGGER = logging.getLogger(__name__)

DEFAULT_COMMENTARY_PROBABILITY = 0.3

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord], None]
OutcomeCallback = Callable[[Outcome], None]
SelectionCallback = Callable[[Selection | None], None]
RecommendationCallback = Callable[[Recommendation | None], None]
AnalysisCallback = Callable[[AnalysisResult | None], None]
CommentaryCallback = Callable[[str], None]
ClockTickCallback = Callable[[Color, int], None]  # color, remaining
ResetCallback = Callable[[], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_undo: list[MoveCallback] = field(default_factory=list)
    on_outcome: list[OutcomeCallback] = field(default_factory=list)
    on_selection_changed: list[SelectionCallback] = field(default_factory=list)
    on_recommendation_changed: list[RecommendationCallback] = field(
        default_factory=list
    )
    on_analysis: list[AnalysisCallback] = field(default_factory=list)
    on_commentary: list[CommentaryCallback] = field(default_factory=list)
    on_clock_tick: list[ClockTickCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Turns square selections into moves and keeps clocks, outcome,
    selection and recommendations consistent.

    Thread-safety: every method runs on one thread (the UI thread). Clock
    ticks and analysis completions are delivered there by the Qt drivers in
    :mod:`clockmate.ui`. Turn and outcome are always re-read from the rules
    engine after a mutation settles; nothing is cached across calls.
    """

    __slots__ = (
        "_rules",
        "_clock",
        "_state",
        "_time_control",
        "_sounds",
        "_recommendations",
        "_last_analysis",
        "_commentary_dispatch",
        "_commentary_probability",
        "_random",
        "_pending_commentary",
        "_next_commentary_id",
        "events",
    )

    def __init__(
        self,
        rules: IRulesEngine | None = None,
        *,
        time_control: TimeControl | None = None,
        sounds: ISoundPlayer | None = None,
        analysis_dispatch: AnalysisDispatch | None = None,
        commentary_dispatch: CommentaryDispatch | None = None,
        commentary_probability: float = DEFAULT_COMMENTARY_PROBABILITY,
        rng: random.Random | None = None,
    ) -> None:
        if not 0.0 <= commentary_probability <= 1.0:
            raise ValueError(
                f"commentary_probability must be within [0, 1], "
                f"got {commentary_probability!r}"
            )
        self._rules = rules or ChessRulesEngine()
        self._time_control = time_control or TimeControl()
        self._clock = ClockPair(self._time_control)
        self._state = SessionState()
        self._sounds = sounds or SilentSoundPlayer()
        self._recommendations = RecommendationCoordinator(analysis_dispatch)
        self._last_analysis: AnalysisResult | None = None
        self._commentary_dispatch = commentary_dispatch
        self._commentary_probability = commentary_probability
        self._random = rng or random.Random()
        self._pending_commentary: tuple[int, int] | None = None  # id, stamp
        self._next_commentary_id = 0
        self.events = GameEvents()
        self._state.record_history(self._rules.move_history())

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def rules(self) -> IRulesEngine:
        return self._rules

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def clock(self) -> ClockPair:
        return self._clock

    @property
    def time_control(self) -> TimeControl:
        return self._time_control

    @property
    def fen(self) -> str:
        return self._rules.fen()

    @property
    def turn(self) -> Color:
        return self._rules.turn()

    @property
    def in_check(self) -> bool:
        return self._rules.in_check()

    @property
    def selection(self) -> Selection | None:
        return self._state.selection

    @property
    def outcome(self) -> Outcome:
        return self._state.outcome

    @property
    def history_count(self) -> int:
        return self._state.history_count

    @property
    def last_move(self) -> MoveRecord | None:
        return self._state.last_move

    @property
    def recommendation(self) -> Recommendation | None:
        return self._recommendations.recommendation

    @property
    def is_suggestion_pending(self) -> bool:
        return self._recommendations.is_pending

    @property
    def last_analysis(self) -> AnalysisResult | None:
        """Evaluation text of the most recent fresh analysis, if any."""
        return self._last_analysis

    @property
    def commentary(self) -> str:
        return self._state.commentary

    def remaining(self, color: Color) -> int:
        return self._clock.remaining(color)

    # ── Wiring ───────────────────────────────────────────────────────────

    def set_analysis_dispatch(self, dispatch: AnalysisDispatch | None) -> None:
        self._recommendations.set_dispatch(dispatch)

    def set_commentary_dispatch(self, dispatch: CommentaryDispatch | None) -> None:
        self._commentary_dispatch = dispatch

    def set_sound_player(self, sounds: ISoundPlayer) -> None:
        self._sounds = sounds

    def set_time_control(self, time_control: TimeControl) -> None:
        """Change the time control. Takes effect on the next :meth:`reset`."""
        self._time_control = time_control

    # ── Operations ───────────────────────────────────────────────────────

    def select_square(self, square: Square) -> bool:
        """Handle a click on *square*. Returns True if a move was played."""
        if self._state.is_game_over:
            return False

        selection = self._state.selection
        if selection is not None and selection.square == square:
            self._set_selection(None)
            return False

        if selection is not None:
            record = self._rules.apply_move(
                selection.square, square, STRONGEST_PROMOTION
            )
            if record is not None:
                self._after_move(record)
                return True

        # Not a move (or an illegal one): treat the click as a new selection.
        self._select_fresh(square)
        return False

    def undo(self) -> bool:
        """Take back the last move. Returns True on success.

        Elapsed clock time is not refunded.
        """
        if self._state.is_game_over or self._state.history_count == 0:
            return False

        record = self._rules.undo()
        if record is None:
            return False

        self._set_selection(None)
        self._state.bump_version()
        self._clear_recommendation()
        self._set_analysis(None)
        self._cancel_commentary()
        self._state.record_history(self._rules.move_history())
        for cb in self.events.on_undo:
            cb(record)
        self._apply_outcome(self._derive_outcome())
        return True

    def reset(self) -> None:
        """Start over: initial position, full clocks, nothing selected."""
        self._rules.reset()
        self._clock.reset(self._time_control)
        self._set_selection(None)
        self._cancel_commentary()
        if self._recommendations.reset():
            self._emit_recommendation(None)
        self._set_analysis(None)
        self._state.clear()
        self._state.bump_version()
        for cb in self.events.on_reset:
            cb()

    def tick(self) -> None:
        """One wall-clock second elapsed for the side to move."""
        if self._state.is_game_over:
            return
        side = self._rules.turn()
        remaining = self._clock.tick(side)
        for cb in self.events.on_clock_tick:
            cb(side, remaining)
        self._check_flags()

    def request_suggestion(self) -> bool:
        """Ask the analysis collaborator for a best move in this position."""
        was_shown = self._recommendations.recommendation is not None
        issued = self._recommendations.request(
            fen=self._rules.fen(),
            side_to_move=self._rules.turn(),
            stamp=self._state.version,
            game_over=self._state.is_game_over,
        )
        if issued and was_shown:
            self._emit_recommendation(None)
        return issued

    def on_suggestion_ready(
        self,
        request_id: int,
        result: AnalysisResult | None,
    ) -> Recommendation | None:
        """Completion of a :meth:`request_suggestion` call.

        A fresh result is kept as :attr:`last_analysis` whether or not it
        names a move; ``None`` (the worker failed) is shown as
        :meth:`AnalysisResult.failed`.
        """
        fresh = (
            self._recommendations.accepts(request_id, self._state.version)
            and not self._state.is_game_over
        )
        if result is None:
            self._recommendations.fail(request_id)
            if fresh:
                self._set_analysis(AnalysisResult.failed())
            return None

        recommendation = self._recommendations.complete(
            request_id,
            result.best_move_san,
            current_stamp=self._state.version,
            legal_moves=self._rules.legal_moves(),
            game_over=self._state.is_game_over,
        )
        if fresh:
            self._set_analysis(result)
        if recommendation is not None:
            self._emit_recommendation(recommendation)
        return recommendation

    def on_commentary_ready(self, request_id: int, text: str) -> None:
        """Completion of a commentary request; stale comments are dropped."""
        pending = self._pending_commentary
        if pending is None or pending[0] != request_id:
            return
        self._pending_commentary = None
        if pending[1] != self._state.version:
            return
        self._set_commentary(text.strip())

    # ── Read-only helpers ────────────────────────────────────────────────

    def last_move_offset(self, bottom: Color) -> AnimationOffset | None:
        """Animation offset of the last move with *bottom* at the bottom."""
        last = self._state.last_move
        if last is None:
            return None
        return animation_offset(last.from_sq, last.to_sq, bottom)

    def status_text(self, white_name: str = "White", black_name: str = "Black") -> str:
        """Game-over banner text; empty while the game is active."""
        outcome = self._state.outcome
        names = {Color.WHITE: white_name, Color.BLACK: black_name}
        if outcome.kind == OutcomeKind.CHECKMATE and outcome.winner is not None:
            return f"Checkmate! {names[outcome.winner]} wins."
        if outcome.kind == OutcomeKind.TIMEOUT and outcome.winner is not None:
            return f"{names[outcome.winner]} wins on time!"
        if outcome.kind == OutcomeKind.DRAW:
            return "Draw!"
        if outcome.kind == OutcomeKind.STALEMATE:
            return "Stalemate!"
        return ""

    # ── Internal helpers ─────────────────────────────────────────────────

    def _select_fresh(self, square: Square) -> None:
        piece = self._rules.piece_at(square)
        if piece is None or piece[0] != self._rules.turn():
            self._set_selection(None)
            return
        destinations = frozenset(self._rules.legal_moves_from(square))
        self._set_selection(Selection(square, destinations))

    def _after_move(self, record: MoveRecord) -> None:
        self._set_selection(None)
        self._state.bump_version()
        self._clear_recommendation()
        self._set_analysis(None)
        self._state.record_history(self._rules.move_history())

        self._sounds.play(
            SoundEffect.CAPTURE if record.was_capture else SoundEffect.MOVE
        )
        for cb in self.events.on_move:
            cb(record)

        self._apply_outcome(self._derive_outcome())
        self._check_flags()

        if not self._state.is_game_over and self._rules.in_check():
            self._sounds.play(SoundEffect.CHECK)

        self._maybe_request_commentary(record)

    def _derive_outcome(self) -> Outcome:
        """Outcome of the current position: checkmate > draw > stalemate."""
        rules = self._rules
        if rules.is_checkmate():
            return Outcome.checkmate(rules.turn().opposite)
        if rules.is_draw():
            return Outcome.draw()
        if rules.is_stalemate():
            return Outcome.stalemate()
        return Outcome.active()

    def _check_flags(self) -> None:
        if self._state.is_game_over:
            return
        flagged = self._clock.fallen_flag()
        if flagged is not None:
            self._apply_outcome(Outcome.timeout(flagged.opposite))

    def _apply_outcome(self, outcome: Outcome) -> None:
        if not self._state.set_outcome(outcome):
            return
        if not outcome.is_terminal:
            return
        self._clock.stop()
        self._clear_recommendation()
        if outcome.kind in (OutcomeKind.CHECKMATE, OutcomeKind.TIMEOUT):
            self._sounds.play(SoundEffect.GAME_END)
        _LOGGER.info("Game over: %s (winner: %s)", outcome.kind, outcome.winner)
        for cb in self.events.on_outcome:
            cb(outcome)

    def _maybe_request_commentary(self, record: MoveRecord) -> None:
        self._cancel_commentary()
        if self._commentary_dispatch is None:
            return
        if self._random.random() >= self._commentary_probability:
            return
        self._next_commentary_id += 1
        request_id = self._next_commentary_id
        stamp = self._state.version
        self._pending_commentary = (request_id, stamp)
        self._commentary_dispatch(
            CommentaryRequest(
                request_id=request_id,
                fen=self._rules.fen(),
                last_move_san=record.san,
                stamp=stamp,
            )
        )

    def _cancel_commentary(self) -> None:
        self._pending_commentary = None
        self._set_commentary("")

    def _set_selection(self, selection: Selection | None) -> None:
        if selection == self._state.selection:
            return
        self._state.selection = selection
        for cb in self.events.on_selection_changed:
            cb(selection)

    def _clear_recommendation(self) -> None:
        if self._recommendations.invalidate():
            self._emit_recommendation(None)

    def _set_analysis(self, result: AnalysisResult | None) -> None:
        if result == self._last_analysis:
            return
        self._last_analysis = result
        for cb in self.events.on_analysis:
            cb(result)

    def _set_commentary(self, text: str) -> None:
        if text == self._state.commentary:
            return
        self._state.commentary = text
        for cb in self.events.on_commentary:
            cb(text)

    def _emit_recommendation(self, recommendation: Recommendation | None) -> None:
        for cb in self.events.on_recommendation_changed:
            cb(recommendation)
