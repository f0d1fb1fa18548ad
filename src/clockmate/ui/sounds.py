"""Chess sound effects player using Qt multimedia."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QUrl
from PyQt6.QtMultimedia import QSoundEffect

from clockmate.game.interfaces import ISoundPlayer, SoundEffect
from clockmate.runtime_assets import sound_path

_LOGGER = logging.getLogger(__name__)


class SoundPlayer(ISoundPlayer):
    """Plays chess sound effects (WAV via QSoundEffect).

    Each sound uses a dedicated QSoundEffect that is pre-loaded at startup,
    so playback is immediate.  A new event always interrupts the previous
    one.  Missing sound files are skipped.
    """

    _NAMES: dict[SoundEffect, str] = {
        SoundEffect.MOVE: "move.wav",
        SoundEffect.CAPTURE: "capture.wav",
        SoundEffect.CHECK: "check.wav",
        SoundEffect.GAME_END: "game_end.wav",
    }

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled
        self._volume = 0.8
        self._effects: dict[SoundEffect, QSoundEffect] = {}
        self._current: QSoundEffect | None = None

        for effect_name, filename in self._NAMES.items():
            path = sound_path(filename)
            if not path.is_file():
                _LOGGER.warning("Sound file not found: %s", path)
                continue
            effect = QSoundEffect()
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[effect_name] = effect

    # ── Public API ────────────────────────────────────────────────────────

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def set_volume(self, volume: int) -> None:
        """Set volume in range 0–100."""
        self._volume = max(0, min(100, volume)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def play(self, effect: SoundEffect) -> None:
        if not self._enabled:
            return
        sound = self._effects.get(effect)
        if sound is None:
            return
        if self._current is not None and self._current.isPlaying():
            self._current.stop()
        self._current = sound
        sound.play()
