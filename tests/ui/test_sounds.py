"""Tests for the sound effects player."""

from __future__ import annotations

from pathlib import Path

import pytest

from clockmate.game.interfaces import SoundEffect
from clockmate.ui import sounds as sounds_module
from clockmate.ui.sounds import SoundPlayer


@pytest.fixture
def no_sound_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(
        sounds_module, "sound_path", lambda filename: tmp_path / filename
    )
    return tmp_path


def test_missing_files_are_skipped(qapp: object, no_sound_files: Path) -> None:
    del qapp
    player = SoundPlayer()
    for effect in SoundEffect:
        player.play(effect)
    assert player.enabled


def test_enable_toggle(qapp: object, no_sound_files: Path) -> None:
    del qapp
    player = SoundPlayer(enabled=False)
    assert not player.enabled
    player.set_enabled(True)
    assert player.enabled
    player.set_volume(150)
    player.play(SoundEffect.MOVE)
