"""Game session layer: controller, clock pair, state, recommendations.

Quick start::

    from clockmate.game import GameController, TimeControl
    from clockmate.core.types import E2, E4

    ctrl = GameController(time_control=TimeControl.blitz_5m())
    ctrl.select_square(E2)
    ctrl.select_square(E4)
    ctrl.tick()
"""

from clockmate.game.animation import AnimationOffset, animation_offset, visual_coords
from clockmate.game.clock import ClockPair, ClockSnapshot, format_clock
from clockmate.game.controller import GameController, GameEvents
from clockmate.game.interfaces import (
    AnalysisRequest,
    CommentaryRequest,
    ISoundPlayer,
    SilentSoundPlayer,
    SoundEffect,
    TimeControl,
)
from clockmate.game.recommendation import (
    Recommendation,
    RecommendationCoordinator,
    find_move,
)
from clockmate.game.state import Outcome, OutcomeKind, Selection, SessionState

__all__ = [
    # Interfaces
    "AnalysisRequest",
    "CommentaryRequest",
    "ISoundPlayer",
    "SilentSoundPlayer",
    "SoundEffect",
    "TimeControl",
    # Concrete
    "AnimationOffset",
    "ClockPair",
    "ClockSnapshot",
    "GameController",
    "GameEvents",
    "Outcome",
    "OutcomeKind",
    "Recommendation",
    "RecommendationCoordinator",
    "Selection",
    "SessionState",
    # Helpers
    "animation_offset",
    "find_move",
    "format_clock",
    "visual_coords",
]
