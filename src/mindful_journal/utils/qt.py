from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

logger = logging.getLogger(__name__)


class TaskSignals(QObject):
    completed = pyqtSignal(object)
    failed = pyqtSignal(Exception)


class _Runnable(QRunnable):
    def __init__(self, fn: Callable[[], Any], signals: TaskSignals) -> None:
        super().__init__()
        self.fn = fn
        self.signals = signals

    def run(self) -> None:  # noqa: D401
        try:
            result = self.fn()
        except Exception as exc:  # noqa: BLE001
            logger.exception("Background UI task failed")
            self.signals.failed.emit(exc)
        else:
            self.signals.completed.emit(result)


class TaskRunner:
    """Runs blocking journal calls off the GUI thread and reports back through Qt signals."""

    def __init__(self, *, max_threads: Optional[int] = None) -> None:
        self.pool = QThreadPool.globalInstance()
        if max_threads is not None:
            self.pool.setMaxThreadCount(max_threads)
        self._live: set[TaskSignals] = set()

    def submit(
        self,
        fn: Callable[[], Any],
        *,
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> TaskSignals:
        signals = TaskSignals()
        # Signals must outlive the runnable until a slot has fired.
        self._live.add(signals)
        signals.completed.connect(lambda _result: self._live.discard(signals))
        signals.failed.connect(lambda _exc: self._live.discard(signals))
        if on_success:
            signals.completed.connect(on_success)
        if on_error:
            signals.failed.connect(on_error)
        self.pool.start(_Runnable(fn, signals))
        return signals
