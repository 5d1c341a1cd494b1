import threading
from contextlib import contextmanager
from enum import Enum
import logging

from gridstudio.exceptions import OperationBusyError

logger = logging.getLogger(__name__)


class OperationState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


class OperationGuard:
    """
    Single-flight state machine for one session operation: Idle -> Pending -> Idle.

    A second call while Pending is rejected with OperationBusyError, never queued.
    """

    def __init__(self, name: str):
        self.name = name
        self._state = OperationState.IDLE
        self._lock = threading.Lock()

    @property
    def state(self) -> OperationState:
        return self._state

    @property
    def is_pending(self) -> bool:
        return self._state is OperationState.PENDING

    @contextmanager
    def run(self):
        with self._lock:
            if self._state is OperationState.PENDING:
                logger.warning(f"Rejected re-entrant '{self.name}' call while one is pending.")
                raise OperationBusyError(self.name)
            self._state = OperationState.PENDING
        logger.info(f"Operation '{self.name}' started.")
        try:
            yield
        finally:
            with self._lock:
                self._state = OperationState.IDLE
            logger.info(f"Operation '{self.name}' returned to idle.")
