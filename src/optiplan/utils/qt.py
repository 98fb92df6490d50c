from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

logger = logging.getLogger(__name__)

CoroutineFactory = Callable[[], Awaitable[Any]]


class TaskSignals(QObject):
    completed = pyqtSignal(object)
    failed = pyqtSignal(Exception)


class CoroutineTask(QRunnable):
    """Runs one coroutine to completion on a private event loop in a pool thread."""

    def __init__(self, factory: CoroutineFactory, signals: TaskSignals, label: str) -> None:
        super().__init__()
        self.factory = factory
        self.signals = signals
        self.label = label

    def run(self) -> None:  # noqa: D401
        try:
            result = asyncio.run(self.factory())
        except Exception as exc:  # noqa: BLE001
            logger.debug("Background task '%s' failed: %s", self.label, exc)
            self.signals.failed.emit(exc)
        else:
            self.signals.completed.emit(result)


class TaskRunner:
    """Submits coroutines to the global thread pool; callbacks run on the GUI thread."""

    def __init__(self, *, max_threads: Optional[int] = None) -> None:
        self.pool = QThreadPool.globalInstance()
        if max_threads is not None:
            self.pool.setMaxThreadCount(max_threads)
        self._in_flight: Set[TaskSignals] = set()

    def submit_async(
        self,
        factory: CoroutineFactory,
        *,
        label: str = "task",
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> TaskSignals:
        signals = TaskSignals()
        # signals must outlive the runnable until a callback fires
        self._in_flight.add(signals)
        signals.completed.connect(lambda _result: self._in_flight.discard(signals))
        signals.failed.connect(lambda _exc: self._in_flight.discard(signals))
        if on_success:
            signals.completed.connect(on_success)
        if on_error:
            signals.failed.connect(on_error)
        self.pool.start(CoroutineTask(factory, signals, label))
        return signals
