"""Analysis collaborator APIs."""

from clockmate.analysis.commentary import MoveKind, SpectatorCommentator, classify_san
from clockmate.analysis.models import AnalysisResult
from clockmate.analysis.service import (
    IAnalysisService,
    UciAnalysisService,
    describe_evaluation,
    resolve_engine_path,
)

__all__ = [
    "AnalysisResult",
    "IAnalysisService",
    "MoveKind",
    "SpectatorCommentator",
    "UciAnalysisService",
    "classify_san",
    "describe_evaluation",
    "resolve_engine_path",
]
