"""Abstract interfaces and value types for the game layer.

Follows Dependency Inversion: the GameController depends on these ABCs,
not on Qt sound effects or worker threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from clockmate.core.enums import Color

# ── Time control presets ─────────────────────────────────────────────────────

TIME_CONTROL_MINUTES: tuple[int, ...] = (1, 3, 5, 10, 30)
DEFAULT_TIME_CONTROL_MINUTES = 10


class TimeControl:
    """Immutable sudden-death time control, whole minutes per side.

    Args:
        minutes: One of :data:`TIME_CONTROL_MINUTES`.
    """

    __slots__ = ("minutes",)

    def __init__(self, minutes: int = DEFAULT_TIME_CONTROL_MINUTES) -> None:
        if minutes not in TIME_CONTROL_MINUTES:
            raise ValueError(f"Unsupported time control: {minutes!r} minutes")
        self.minutes = minutes

    @property
    def initial_seconds(self) -> int:
        return self.minutes * 60

    # Common presets
    @classmethod
    def bullet_1m(cls) -> TimeControl:
        return cls(1)

    @classmethod
    def blitz_3m(cls) -> TimeControl:
        return cls(3)

    @classmethod
    def blitz_5m(cls) -> TimeControl:
        return cls(5)

    @classmethod
    def rapid_10m(cls) -> TimeControl:
        return cls(10)

    @classmethod
    def classical_30m(cls) -> TimeControl:
        return cls(30)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeControl):
            return NotImplemented
        return self.minutes == other.minutes

    def __hash__(self) -> int:
        return hash(self.minutes)

    def __repr__(self) -> str:
        return f"TimeControl({self.minutes}m)"


# ── Sound collaborator ───────────────────────────────────────────────────────


class SoundEffect(StrEnum):
    """Feedback sounds requested by the controller."""

    MOVE = "move"
    CAPTURE = "capture"
    CHECK = "check"
    GAME_END = "game_end"


class ISoundPlayer(ABC):
    """Interface for audio feedback."""

    @abstractmethod
    def play(self, effect: SoundEffect) -> None:
        """Play *effect* (silently ignored when sound is disabled)."""


class SilentSoundPlayer(ISoundPlayer):
    """Sound collaborator that plays nothing."""

    __slots__ = ()

    def play(self, effect: SoundEffect) -> None:
        pass


# ── Asynchronous analysis requests ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class AnalysisRequest:
    """Best-move request tagged with the position version it was issued at."""

    request_id: int
    fen: str
    side_to_move: Color
    stamp: int


@dataclass(frozen=True, slots=True)
class CommentaryRequest:
    """Spectator-comment request for the move that produced *stamp*."""

    request_id: int
    fen: str
    last_move_san: str
    stamp: int


AnalysisDispatch = Callable[[AnalysisRequest], None]
CommentaryDispatch = Callable[[CommentaryRequest], None]
