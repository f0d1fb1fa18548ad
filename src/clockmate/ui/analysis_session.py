"""Background analysis requests for the UI thread.

The worker lives in its own ``QThread`` and answers evaluation and
commentary requests by request id. Freshness is decided by the
:class:`~clockmate.game.controller.GameController` when the answer is
delivered back on the UI thread, not here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from clockmate.analysis import AnalysisResult, IAnalysisService
from clockmate.core.enums import Color
from clockmate.game.interfaces import AnalysisRequest, CommentaryRequest

_LOGGER = logging.getLogger(__name__)


class _AnalysisCommandBus(QObject):
    evaluate_requested = pyqtSignal(int, str, object)  # request_id, fen, side
    comment_requested = pyqtSignal(int, str, str)  # request_id, fen, san


class _AnalysisWorker(QObject):
    evaluated = pyqtSignal(int, object)  # request_id, result
    commented = pyqtSignal(int, str)  # request_id, text
    failed = pyqtSignal(int, str)  # request_id, message

    __slots__ = ("_service",)

    def __init__(self, service: IAnalysisService) -> None:
        super().__init__()
        self._service = service

    @pyqtSlot(int, str, object)
    def evaluate(self, request_id: int, fen: str, side_obj: object) -> None:
        if not isinstance(side_obj, Color):
            self.failed.emit(request_id, "Invalid side to move for analysis")
            return
        try:
            result = self._service.evaluate(fen, side_obj)
        except Exception as exc:
            self.failed.emit(request_id, str(exc))
            return
        self.evaluated.emit(request_id, result)

    @pyqtSlot(int, str, str)
    def comment(self, request_id: int, fen: str, last_move_san: str) -> None:
        try:
            text = self._service.comment(fen, last_move_san)
        except Exception as exc:
            _LOGGER.debug("Commentary failed: %s", exc)
            text = ""
        self.commented.emit(request_id, text or "")


class AnalysisSession:
    """Owns worker-thread lifecycle for analysis and commentary requests."""

    __slots__ = (
        "__weakref__",
        "_service",
        "_on_evaluated",
        "_on_commented",
        "_command_bus",
        "_thread",
        "_worker",
        "_is_started",
        "_is_shutting_down",
    )

    def __init__(
        self,
        service: IAnalysisService,
        *,
        on_evaluated: Callable[[int, AnalysisResult | None], object],
        on_commented: Callable[[int, str], object],
        parent: QObject | None = None,
    ) -> None:
        self._service = service
        self._on_evaluated = on_evaluated
        self._on_commented = on_commented

        self._command_bus = _AnalysisCommandBus(parent)
        self._thread = QThread(parent)
        self._worker = _AnalysisWorker(service)
        self._is_started = False
        self._is_shutting_down = False

        self._worker.moveToThread(self._thread)
        self._command_bus.evaluate_requested.connect(self._worker.evaluate)
        self._command_bus.comment_requested.connect(self._worker.comment)
        self._worker.evaluated.connect(self._on_worker_evaluated)
        self._worker.commented.connect(self._on_worker_commented)
        self._worker.failed.connect(self._on_worker_failed)

    @property
    def is_started(self) -> bool:
        return self._is_started

    def setup(self) -> None:
        """Start the worker thread; signals are wired once at construction."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Stop the worker thread; late results are ignored."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self._thread.quit()
        self._thread.wait(2000)
        self._service.close()
        self._is_started = False

    # ── Dispatchers (wired into the GameController) ──────────────────────

    def request_evaluation(self, request: AnalysisRequest) -> None:
        if not self._is_started:
            self.setup()
        if self._is_shutting_down:
            return
        self._command_bus.evaluate_requested.emit(
            request.request_id,
            request.fen,
            request.side_to_move,
        )

    def request_commentary(self, request: CommentaryRequest) -> None:
        if not self._is_started:
            self.setup()
        if self._is_shutting_down:
            return
        self._command_bus.comment_requested.emit(
            request.request_id,
            request.fen,
            request.last_move_san,
        )

    # ── Worker callbacks ─────────────────────────────────────────────────

    def _on_worker_evaluated(self, request_id: int, result_obj: object) -> None:
        if self._is_shutting_down:
            return
        if not isinstance(result_obj, AnalysisResult):
            _LOGGER.warning("Analysis worker produced invalid result")
            self._on_evaluated(request_id, None)
            return
        self._on_evaluated(request_id, result_obj)

    def _on_worker_commented(self, request_id: int, text: str) -> None:
        if self._is_shutting_down:
            return
        self._on_commented(request_id, text)

    def _on_worker_failed(self, request_id: int, message: str) -> None:
        if self._is_shutting_down:
            return
        _LOGGER.warning("Analysis request %d failed: %s", request_id, message)
        self._on_evaluated(request_id, None)
