"""Data models produced by the analysis collaborator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class AnalysisResult:
    """Best-effort evaluation of one position.

    *best_move_san* may be absent; that is a valid, non-error result.
    """

    evaluation: str
    best_move_san: str | None
    explanation: str

    @classmethod
    def failed(cls) -> AnalysisResult:
        return cls(
            evaluation="Analysis Failed",
            best_move_san=None,
            explanation="Could not analyze position at this time.",
        )

    @property
    def has_move(self) -> bool:
        return bool(self.best_move_san)
