"""Tests for SessionState and Outcome transitions."""

from clockmate.core.enums import Color
from clockmate.core.move import MoveRecord
from clockmate.core.types import E2, E4
from clockmate.game.state import Outcome, OutcomeKind, Selection, SessionState


class TestOutcome:
    def test_active_is_not_terminal(self) -> None:
        assert not Outcome.active().is_terminal
        assert Outcome.active().kind == OutcomeKind.ACTIVE

    def test_terminal_kinds(self) -> None:
        assert Outcome.checkmate(Color.WHITE).winner == Color.WHITE
        assert Outcome.timeout(Color.BLACK).kind == OutcomeKind.TIMEOUT
        assert Outcome.draw().winner is None
        for outcome in (Outcome.draw(), Outcome.stalemate()):
            assert outcome.is_terminal


class TestSessionState:
    def test_initial(self) -> None:
        state = SessionState()
        assert state.selection is None
        assert state.history_count == 0
        assert state.last_move is None
        assert state.outcome == Outcome.active()
        assert state.commentary == ""

    def test_terminal_outcome_is_sticky(self) -> None:
        state = SessionState()
        assert state.set_outcome(Outcome.timeout(Color.BLACK))
        assert not state.set_outcome(Outcome.checkmate(Color.WHITE))
        assert not state.set_outcome(Outcome.active())
        assert state.outcome == Outcome.timeout(Color.BLACK)

    def test_clear_returns_to_active(self) -> None:
        state = SessionState()
        state.set_outcome(Outcome.draw())
        state.selection = Selection(E2, frozenset({E4}))
        state.commentary = "hi"
        state.clear()
        assert state.outcome == Outcome.active()
        assert state.selection is None
        assert state.commentary == ""

    def test_version_keeps_counting_across_clear(self) -> None:
        state = SessionState()
        state.bump_version()
        state.clear()
        assert state.bump_version() == 2

    def test_record_history(self) -> None:
        state = SessionState()
        record = MoveRecord(E2, E4, "e4")
        state.record_history([record])
        assert state.history_count == 1
        assert state.last_move == record
        state.record_history([])
        assert state.last_move is None
