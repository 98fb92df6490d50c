from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..domain import OperationBusy

logger = logging.getLogger(__name__)


class OperationState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class OperationTracker:
    """Busy flag plus sequence stamps for one kind of user-triggered operation."""

    name: str
    state: OperationState = OperationState.IDLE
    error: Optional[str] = None
    _sequence: int = field(default=0, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def busy(self) -> bool:
        return self.state == OperationState.IN_FLIGHT

    @property
    def sequence(self) -> int:
        return self._sequence

    def begin(self) -> int:
        with self._lock:
            if self.busy:
                raise OperationBusy(self.name)
            self._sequence += 1
            self.state = OperationState.IN_FLIGHT
            self.error = None
            return self._sequence

    def is_current(self, stamp: int) -> bool:
        return stamp == self._sequence

    def succeed(self, stamp: int) -> bool:
        """Mark the operation done; returns ``False`` when ``stamp`` is stale."""

        with self._lock:
            if not self.is_current(stamp):
                logger.info("Discarding stale %s result #%d (current #%d)", self.name, stamp, self._sequence)
                return False
            self.state = OperationState.SUCCEEDED
            return True

    def fail(self, stamp: int, error: str) -> bool:
        with self._lock:
            if not self.is_current(stamp):
                logger.info("Discarding stale %s failure #%d (current #%d)", self.name, stamp, self._sequence)
                return False
            self.state = OperationState.FAILED
            self.error = error
            return True

    def supersede(self) -> None:
        """Forget the in-flight stamp so its result is dropped when it lands."""

        with self._lock:
            self._sequence += 1
            self.state = OperationState.IDLE


__all__ = ["OperationState", "OperationTracker"]
