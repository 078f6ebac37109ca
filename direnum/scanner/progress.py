"""Progress reporting utilities for scanning."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class ProgressSnapshot:
    """Point-in-time counters of an ongoing traversal."""

    entries_found: int
    current_path: str
    units_created: int = 0
    units_completed: int = 0
    elapsed_seconds: float = 0.0

    @property
    def units_remaining(self) -> int:
        return self.units_created - self.units_completed


ProgressSink = Callable[[ProgressSnapshot], None]


class ProgressReporter:
    """Emits at most one snapshot per ``interval`` seconds of wall-clock time."""

    def __init__(
        self,
        sink: ProgressSink | None,
        interval: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.sink = sink
        self.interval = interval
        self._clock = clock
        self._start_time = clock()
        self._last_report_time = self._start_time
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.sink is not None

    @property
    def elapsed_seconds(self) -> float:
        return self._clock() - self._start_time

    def report_if_needed(
        self,
        entries_found: int,
        current_path: str,
        units_created: int = 0,
        units_completed: int = 0,
    ) -> bool:
        if self.sink is None or entries_found == 0:
            return False

        with self._lock:
            now = self._clock()
            if now - self._last_report_time < self.interval:
                return False
            self._last_report_time = now

        self.sink(
            ProgressSnapshot(
                entries_found=entries_found,
                current_path=current_path,
                units_created=units_created,
                units_completed=units_completed,
                elapsed_seconds=now - self._start_time,
            )
        )
        return True
