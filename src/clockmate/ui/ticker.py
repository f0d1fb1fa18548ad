"""One-second wall-clock driver for the clock pair."""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer


class ClockTicker:
    """Calls *on_tick* once per second while running."""

    INTERVAL_MS = 1000

    __slots__ = ("_timer",)

    def __init__(
        self,
        on_tick: Callable[[], None],
        parent: QObject | None = None,
    ) -> None:
        self._timer = QTimer(parent)
        self._timer.setInterval(self.INTERVAL_MS)
        self._timer.timeout.connect(on_tick)

    def start(self) -> None:
        """(Re)start ticking; the next tick is one full interval away."""
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()
