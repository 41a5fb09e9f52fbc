"""
Readiness gate for deferring operations until initialization completes.
"""
import asyncio
import logging
from collections import deque
from enum import Enum
from typing import Optional

from passport_mongo.core.errors import InitializationError

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    """Lifecycle states of a readiness gate."""
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class ReadinessGate:
    """
    Barrier that holds callers until the owner marks it ready.

    Waiters queued while initializing are released in the order they
    arrived. Once ready, ``wait()`` returns without queueing. If the owner
    marks the gate failed, every queued and future waiter receives an
    ``InitializationError``.
    """

    def __init__(self):
        self._state = GateState.INITIALIZING
        self._waiters: deque[asyncio.Future] = deque()
        self._cause: Optional[BaseException] = None

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is GateState.READY

    @property
    def pending(self) -> int:
        """Number of waiters queued behind initialization."""
        return len(self._waiters)

    async def wait(self) -> None:
        """Return once the gate is ready."""
        if self._state is GateState.READY:
            return
        if self._state is GateState.FAILED:
            raise self._failure()

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await waiter
        finally:
            if waiter in self._waiters:
                self._waiters.remove(waiter)

    def mark_ready(self) -> None:
        """Transition to READY and release queued waiters in FIFO order."""
        if self._state is not GateState.INITIALIZING:
            return

        self._state = GateState.READY
        logger.debug(f"Readiness gate open, releasing {len(self._waiters)} waiter(s)")

        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)

    def mark_failed(self, cause: BaseException) -> None:
        """Transition to FAILED and fail every queued waiter."""
        if self._state is not GateState.INITIALIZING:
            return

        self._cause = cause
        self._state = GateState.FAILED
        logger.error(f"Readiness gate failed, rejecting {len(self._waiters)} waiter(s): {cause}")

        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_exception(self._failure())

    def _failure(self) -> InitializationError:
        # A fresh instance per waiter keeps each traceback to its own frames
        error = InitializationError(f"Driver initialization failed: {self._cause}")
        error.__cause__ = self._cause
        return error
