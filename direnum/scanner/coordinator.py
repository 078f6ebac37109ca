"""Tracking of spawned traversal units and detection of quiescence."""

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import Executor, Future
from enum import Enum
from functools import partial

from direnum.scanner.errors import TraversalError
from direnum.scanner.filesystem import FileSystemEntry

logger = logging.getLogger(__name__)

UnitFunction = Callable[[FileSystemEntry], None]


class CoordinatorState(Enum):
    RUNNING = "running"
    SETTLING = "settling"
    DONE = "done"


class Coordinator:
    """Owns the dynamically growing set of directory units.

    A unit is counted as in flight from the moment it is spawned, and a
    parent spawns its children before it finishes, so the in-flight count
    only reaches zero once no unit is left that could spawn another. After
    it does, ``wait`` still holds for ``settle_interval`` seconds and checks
    that the number of spawned units did not move before declaring the run
    done.
    """

    def __init__(
        self,
        executor: Executor,
        settle_interval: float = 10.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._executor = executor
        self._settle_interval = settle_interval
        self._sleep = sleep
        self._condition = threading.Condition()
        self._in_flight = 0
        self._created = 0
        self._completed = 0
        self._failure: TraversalError | None = None
        self._interrupted = False
        self._state = CoordinatorState.RUNNING

    @property
    def state(self) -> CoordinatorState:
        return self._state

    @property
    def units_created(self) -> int:
        return self._created

    @property
    def units_completed(self) -> int:
        return self._completed

    def interrupt(self) -> None:
        """Stop accepting new units; units already running finish on their own."""
        with self._condition:
            self._interrupted = True
            self._condition.notify_all()

    def spawn(self, unit: UnitFunction, directory: FileSystemEntry) -> bool:
        """Schedule ``unit(directory)``; returns False once the run has stopped."""
        with self._condition:
            if self._failure is not None or self._interrupted:
                logger.debug("Run stopped, not descending into %s", directory.path)
                return False
            if self._state is CoordinatorState.DONE:
                raise RuntimeError("Cannot spawn units after the run is done")
            self._in_flight += 1
            self._created += 1

        try:
            future = self._executor.submit(unit, directory)
        except RuntimeError:
            with self._condition:
                self._in_flight -= 1
                self._created -= 1
                self._condition.notify_all()
            raise

        future.add_done_callback(partial(self._unit_finished, directory.path))
        return True

    def wait(self) -> None:
        """Block until every unit, including late-spawned ones, has finished.

        Raises ``TraversalError`` if any unit failed.
        """
        while True:
            with self._condition:
                self._state = CoordinatorState.RUNNING
                self._condition.wait_for(lambda: self._in_flight == 0)
                observed = self._created
                self._state = CoordinatorState.SETTLING

            logger.debug("All %d units finished, settling for %ss", observed, self._settle_interval)
            if self._settle_interval > 0:
                self._sleep(self._settle_interval)

            with self._condition:
                if self._in_flight == 0 and self._created == observed:
                    self._state = CoordinatorState.DONE
                    break
            logger.debug("Unit count changed while settling, waiting again")

        if self._failure is not None:
            raise self._failure

    def _unit_finished(self, path: str, future: Future) -> None:
        exc = None if future.cancelled() else future.exception()
        with self._condition:
            self._in_flight -= 1
            self._completed += 1
            if exc is not None and self._failure is None:
                self._failure = TraversalError(path, exc)
            self._condition.notify_all()
