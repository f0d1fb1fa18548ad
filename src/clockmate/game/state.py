"""Session state: selection, history bookkeeping, outcome, version stamp."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from clockmate.core.enums import Color
from clockmate.core.move import MoveRecord
from clockmate.core.types import Square


class OutcomeKind(StrEnum):
    """How the game stands."""

    ACTIVE = "active"
    CHECKMATE = "checkmate"
    DRAW = "draw"
    STALEMATE = "stalemate"
    TIMEOUT = "timeout"


@dataclass(frozen=True, slots=True)
class Outcome:
    """Game outcome; *winner* is set for checkmate and timeout only."""

    kind: OutcomeKind = OutcomeKind.ACTIVE
    winner: Color | None = None

    @classmethod
    def active(cls) -> Outcome:
        return cls()

    @classmethod
    def checkmate(cls, winner: Color) -> Outcome:
        return cls(OutcomeKind.CHECKMATE, winner)

    @classmethod
    def draw(cls) -> Outcome:
        return cls(OutcomeKind.DRAW)

    @classmethod
    def stalemate(cls) -> Outcome:
        return cls(OutcomeKind.STALEMATE)

    @classmethod
    def timeout(cls, winner: Color) -> Outcome:
        return cls(OutcomeKind.TIMEOUT, winner)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.ACTIVE


@dataclass(frozen=True, slots=True)
class Selection:
    """A selected square together with its legal destinations."""

    square: Square
    destinations: frozenset[Square] = frozenset()


@dataclass
class SessionState:
    """Mutable per-session bookkeeping owned by the GameController.

    This is a pure data/logic class with no threading and no UI. The position
    itself lives in the rules engine; only the history count and the last
    move are mirrored here.
    """

    selection: Selection | None = field(default=None, init=False)
    history_count: int = field(default=0, init=False)
    last_move: MoveRecord | None = field(default=None, init=False)
    outcome: Outcome = field(default_factory=Outcome.active, init=False)
    commentary: str = field(default="", init=False)
    version: int = field(default=0, init=False)

    def bump_version(self) -> int:
        """Mark the position as changed; returns the new stamp."""
        self.version += 1
        return self.version

    def set_outcome(self, outcome: Outcome) -> bool:
        """Apply an outcome transition. Returns True if the outcome changed.

        A terminal outcome is sticky: only :meth:`clear` brings the game
        back to active, and one terminal outcome never replaces another.
        """
        if self.outcome.is_terminal:
            return False
        if outcome == self.outcome:
            return False
        self.outcome = outcome
        return True

    def record_history(self, history: list[MoveRecord]) -> None:
        self.history_count = len(history)
        self.last_move = history[-1] if history else None

    def clear(self) -> None:
        """Return to the freshly-constructed state (version keeps counting)."""
        self.selection = None
        self.history_count = 0
        self.last_move = None
        self.outcome = Outcome.active()
        self.commentary = ""

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_terminal
