"""User settings persisted in a key-value store.

Every value is stored JSON-encoded under its own key. Reading never fails:
a missing, undecodable or out-of-range entry silently falls back to its
default. Writes go through to the store on every change.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from clockmate.game.interfaces import (
    DEFAULT_TIME_CONTROL_MINUTES,
    TIME_CONTROL_MINUTES,
    TimeControl,
)

_LOGGER = logging.getLogger(__name__)

BOARD_THEMES: tuple[str, ...] = (
    "green",
    "brown",
    "blue",
    "slate",
    "purple",
    "burgundy",
)

DEFAULT_WHITE_NAME = "White"
DEFAULT_BLACK_NAME = "Black"


# ── Settings data class ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class SessionSettings:
    """All user-configurable settings."""

    time_control_minutes: int = DEFAULT_TIME_CONTROL_MINUTES
    board_theme: str = "green"
    sound_enabled: bool = True
    white_name: str = DEFAULT_WHITE_NAME
    black_name: str = DEFAULT_BLACK_NAME

    @property
    def time_control(self) -> TimeControl:
        return TimeControl(self.time_control_minutes)

    @property
    def display_white_name(self) -> str:
        return self.white_name.strip() or DEFAULT_WHITE_NAME

    @property
    def display_black_name(self) -> str:
        return self.black_name.strip() or DEFAULT_BLACK_NAME


_STORE_KEYS: dict[str, str] = {
    "time_control_minutes": "chess_timeControl",
    "board_theme": "chess_boardTheme",
    "sound_enabled": "chess_soundEnabled",
    "white_name": "chess_whiteName",
    "black_name": "chess_blackName",
}


def _is_valid(name: str, value: Any) -> bool:
    if name == "time_control_minutes":
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and value in TIME_CONTROL_MINUTES
        )
    if name == "board_theme":
        return value in BOARD_THEMES
    if name == "sound_enabled":
        return isinstance(value, bool)
    return isinstance(value, str)


# ── Key-value stores ─────────────────────────────────────────────────────────


class IKeyValueStore(ABC):
    """Minimal string key-value persistence."""

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...


class MemoryStore(IKeyValueStore):
    """Dict-backed store (tests, ephemeral sessions)."""

    __slots__ = ("data",)

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class QSettingsStore(IKeyValueStore):
    """Store backed by :class:`PyQt6.QtCore.QSettings`.

    With *path* the settings live in that INI file; otherwise the platform's
    native location for *organization* / *application* is used.
    """

    __slots__ = ("_settings",)

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        organization: str = "Clockmate",
        application: str = "Clockmate",
    ) -> None:
        from PyQt6.QtCore import QSettings

        if path is not None:
            self._settings = QSettings(str(path), QSettings.Format.IniFormat)
        else:
            self._settings = QSettings(organization, application)

    def get(self, key: str) -> str | None:
        value = self._settings.value(key)
        if value is None:
            return None
        return str(value)

    def set(self, key: str, value: str) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()


# ── Repository ───────────────────────────────────────────────────────────────


class SettingsRepository:
    """Loads :class:`SessionSettings` from a store and writes changes through."""

    __slots__ = ("_store", "_settings")

    def __init__(self, store: IKeyValueStore) -> None:
        self._store = store
        self._settings = self.load()

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    def load(self) -> SessionSettings:
        """Read every key, falling back to defaults for bad entries."""
        defaults = SessionSettings()
        values: dict[str, Any] = {}
        for f in fields(SessionSettings):
            key = _STORE_KEYS[f.name]
            raw = self._store.get(key)
            if raw is None:
                continue
            try:
                value = json.loads(raw)
            except (TypeError, ValueError):
                _LOGGER.debug("Ignoring undecodable setting %s=%r", key, raw)
                continue
            if not _is_valid(f.name, value):
                _LOGGER.debug("Ignoring out-of-range setting %s=%r", key, value)
                continue
            values[f.name] = value
        self._settings = replace(defaults, **values)
        return self._settings

    def update(self, **changes: Any) -> SessionSettings:
        """Validate *changes*, persist each one and return the new settings.

        Raises:
            ValueError: for an unknown setting or an invalid value.
        """
        for name, value in changes.items():
            if name not in _STORE_KEYS:
                raise ValueError(f"Unknown setting: {name!r}")
            if not _is_valid(name, value):
                raise ValueError(f"Invalid value for {name}: {value!r}")

        self._settings = replace(self._settings, **changes)
        for name, value in changes.items():
            self._store.set(_STORE_KEYS[name], json.dumps(value))
        return self._settings
