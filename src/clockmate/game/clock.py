"""Tick-driven dual chess clock."""

from __future__ import annotations

from dataclasses import dataclass

from clockmate.core.enums import Color
from clockmate.game.interfaces import TimeControl


@dataclass(frozen=True, slots=True)
class ClockSnapshot:
    """Read-only view of both clocks."""

    white_remaining: int
    black_remaining: int
    is_running: bool

    def remaining(self, color: Color) -> int:
        return self.white_remaining if color == Color.WHITE else self.black_remaining


class ClockPair:
    """Two independent countdown clocks in whole seconds.

    The pair does not know whose turn it is. The caller passes the side to
    move on every :meth:`tick`; only that side is decremented. Once stopped
    (terminal outcome) ticks are ignored until :meth:`reset`.
    """

    __slots__ = ("_time_control", "_remaining", "_running")

    def __init__(self, time_control: TimeControl | None = None) -> None:
        self._time_control = time_control or TimeControl()
        self._remaining: dict[Color, int] = {}
        self._running = False
        self.reset()

    # ── Clock operations ─────────────────────────────────────────────────

    def tick(self, color: Color) -> int:
        """Consume one second from *color*, floored at zero."""
        if self._running and self._remaining[color] > 0:
            self._remaining[color] -= 1
        return self._remaining[color]

    def remaining(self, color: Color) -> int:
        return self._remaining[color]

    def is_flag_fallen(self, color: Color) -> bool:
        return self._remaining[color] <= 0

    def fallen_flag(self) -> Color | None:
        """The side whose clock has reached zero, if any."""
        for color in (Color.WHITE, Color.BLACK):
            if self.is_flag_fallen(color):
                return color
        return None

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False

    def reset(self, time_control: TimeControl | None = None) -> None:
        """Reinitialise both sides to the configured control and run."""
        if time_control is not None:
            self._time_control = time_control
        seconds = self._time_control.initial_seconds
        self._remaining = {Color.WHITE: seconds, Color.BLACK: seconds}
        self._running = True

    # ── Extra helpers ────────────────────────────────────────────────────

    @property
    def time_control(self) -> TimeControl:
        return self._time_control

    @property
    def is_running(self) -> bool:
        return self._running

    def set_remaining(self, color: Color, seconds: int) -> None:
        """Manually override remaining time (for testing / UI override)."""
        self._remaining[color] = max(0, int(seconds))

    def snapshot(self) -> ClockSnapshot:
        return ClockSnapshot(
            white_remaining=self._remaining[Color.WHITE],
            black_remaining=self._remaining[Color.BLACK],
            is_running=self._running,
        )


def format_clock(seconds: int) -> str:
    """``m:ss`` display string, e.g. ``605`` → ``"10:05"``."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"
