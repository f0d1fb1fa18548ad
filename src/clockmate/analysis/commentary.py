"""Spectator one-liners about the move just played."""

from __future__ import annotations

import random
from enum import StrEnum


class MoveKind(StrEnum):
    """What kind of move a SAN string describes, for picking a quip."""

    CHECKMATE = "checkmate"
    CHECK = "check"
    PROMOTION = "promotion"
    CASTLE = "castle"
    CAPTURE = "capture"
    QUIET = "quiet"


TEMPLATES: dict[MoveKind, list[str]] = {
    MoveKind.CHECKMATE: [
        "{san}! And that's the ballgame.",
        "{san}. Somebody call the arbiter, it's over.",
        "Checkmate with {san}. The crowd goes wild.",
    ],
    MoveKind.CHECK: [
        "{san}, a check to keep the king on its toes.",
        "The king gets a rude wake-up call: {san}.",
        "{san}! Nothing like a check to stir the pot.",
    ],
    MoveKind.PROMOTION: [
        "{san}: a humble pawn finally gets its promotion.",
        "From foot soldier to royalty with {san}.",
    ],
    MoveKind.CASTLE: [
        "{san}. Time to tuck the king away and put the kettle on.",
        "Castling with {san}, safety first.",
    ],
    MoveKind.CAPTURE: [
        "{san}, and a piece leaves the party early.",
        "Material changes hands with {san}.",
        "{san}! Somebody's counting the spoils.",
    ],
    MoveKind.QUIET: [
        "{san}, a quiet move with loud intentions.",
        "{san}. The plot thickens.",
        "Steady play with {san}.",
    ],
}


def classify_san(san: str) -> MoveKind:
    """Classify a SAN move string by its most notable feature."""
    text = san.strip()
    if text.endswith("#"):
        return MoveKind.CHECKMATE
    if text.endswith("+"):
        return MoveKind.CHECK
    if "=" in text:
        return MoveKind.PROMOTION
    if text.startswith(("O-O", "0-0")):
        return MoveKind.CASTLE
    if "x" in text:
        return MoveKind.CAPTURE
    return MoveKind.QUIET


class SpectatorCommentator:
    """Picks a witty spectator comment for the last move."""

    __slots__ = ("_random",)

    def __init__(self, rng: random.Random | None = None) -> None:
        self._random = rng or random.Random()

    def comment(self, last_move_san: str) -> str:
        san = last_move_san.strip()
        if not san:
            return ""
        template = self._random.choice(TEMPLATES[classify_san(san)])
        return template.format(san=san)
