"""GameRuntime: wires the controller to Qt timers, threads, sound and settings."""

from __future__ import annotations

import random
from typing import Any

from PyQt6.QtCore import QObject

from clockmate.analysis import IAnalysisService, UciAnalysisService
from clockmate.game.controller import GameController
from clockmate.game.state import Outcome
from clockmate.settings import (
    IKeyValueStore,
    QSettingsStore,
    SessionSettings,
    SettingsRepository,
)
from clockmate.ui.analysis_session import AnalysisSession
from clockmate.ui.sounds import SoundPlayer
from clockmate.ui.ticker import ClockTicker


class GameRuntime:
    """Session context: constructed at session start, explicitly shut down.

    Owns one :class:`GameController` for its whole lifetime together with
    the drivers feeding it (1-second ticker, analysis worker thread) and the
    collaborators it calls (sound player, settings store).
    """

    __slots__ = (
        "__weakref__",
        "_settings_repo",
        "_sound_player",
        "_controller",
        "_analysis",
        "_ticker",
    )

    def __init__(
        self,
        *,
        store: IKeyValueStore | None = None,
        service: IAnalysisService | None = None,
        sound_player: SoundPlayer | None = None,
        commentary_probability: float | None = None,
        rng: random.Random | None = None,
        parent: QObject | None = None,
    ) -> None:
        self._settings_repo = SettingsRepository(store or QSettingsStore())
        settings = self._settings_repo.settings

        self._sound_player = sound_player or SoundPlayer()
        self._sound_player.set_enabled(settings.sound_enabled)

        controller_kwargs: dict[str, Any] = {}
        if commentary_probability is not None:
            controller_kwargs["commentary_probability"] = commentary_probability
        self._controller = GameController(
            time_control=settings.time_control,
            sounds=self._sound_player,
            rng=rng,
            **controller_kwargs,
        )

        self._analysis = AnalysisSession(
            service or UciAnalysisService(),
            on_evaluated=self._controller.on_suggestion_ready,
            on_commented=self._controller.on_commentary_ready,
            parent=parent,
        )
        self._controller.set_analysis_dispatch(self._analysis.request_evaluation)
        self._controller.set_commentary_dispatch(self._analysis.request_commentary)

        self._ticker = ClockTicker(self._controller.tick, parent)
        self._controller.events.on_outcome.append(self._on_outcome)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def settings(self) -> SessionSettings:
        return self._settings_repo.settings

    @property
    def ticker(self) -> ClockTicker:
        return self._ticker

    @property
    def analysis(self) -> AnalysisSession:
        return self._analysis

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        """Start the analysis worker and the clock."""
        self._analysis.setup()
        if not self._controller.outcome.is_terminal:
            self._ticker.start()

    def new_game(self) -> None:
        """Reset the session and restart the clock."""
        self._controller.reset()
        self._ticker.start()

    def shutdown(self) -> None:
        self._ticker.stop()
        self._analysis.shutdown()

    # ── Settings ─────────────────────────────────────────────────────────

    def update_settings(self, **changes: Any) -> SessionSettings:
        """Persist *changes* and apply them.

        A new time control takes effect at the next :meth:`new_game`.
        """
        settings = self._settings_repo.update(**changes)
        if "sound_enabled" in changes:
            self._sound_player.set_enabled(settings.sound_enabled)
        if "time_control_minutes" in changes:
            self._controller.set_time_control(settings.time_control)
        return settings

    def status_text(self) -> str:
        settings = self.settings
        return self._controller.status_text(
            settings.display_white_name,
            settings.display_black_name,
        )

    def _on_outcome(self, _outcome: Outcome) -> None:
        self._ticker.stop()
