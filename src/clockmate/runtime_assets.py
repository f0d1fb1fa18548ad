"""Locate bundled sound files."""

from __future__ import annotations

from pathlib import Path

_SEARCH_ROOTS = (
    Path(__file__).resolve().parent / "assets",  # installed package data
    Path(__file__).resolve().parents[2] / "assets",  # source checkout
)


def sounds_dir() -> Path:
    """First ``assets/sounds`` directory that exists, else the packaged one."""
    for root in _SEARCH_ROOTS:
        candidate = root / "sounds"
        if candidate.is_dir():
            return candidate
    return _SEARCH_ROOTS[0] / "sounds"


def sound_path(filename: str) -> Path:
    return sounds_dir() / filename
