from __future__ import annotations

import math
import time
from typing import Callable, Optional

Clock = Callable[[], float]


class ElapsedTimer:
    """Whole-session stopwatch. Observational only."""

    def __init__(self, clock: Clock = time.monotonic, offset_seconds: float = 0.0) -> None:
        self._clock = clock
        self._offset = offset_seconds
        self._started_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self) -> None:
        if self._started_at is not None:
            self._offset += self._clock() - self._started_at
            self._started_at = None

    @property
    def elapsed_seconds(self) -> int:
        total = self._offset
        if self._started_at is not None:
            total += self._clock() - self._started_at
        return max(0, math.floor(total))


class RestTimer:
    """Countdown started on a rest signal; a duration of 0 means rest timing is off."""

    def __init__(self, duration_seconds: int, clock: Clock = time.monotonic) -> None:
        self.duration_seconds = duration_seconds
        self._clock = clock
        self._ends_at: Optional[float] = None

    def start(self) -> bool:
        if self.duration_seconds <= 0:
            return False
        self._ends_at = self._clock() + self.duration_seconds
        return True

    def resume(self, remaining_seconds: float) -> None:
        if remaining_seconds > 0:
            self._ends_at = self._clock() + remaining_seconds

    def skip(self) -> None:
        self._ends_at = None

    @property
    def remaining_seconds(self) -> float:
        if self._ends_at is None:
            return 0.0
        remaining = self._ends_at - self._clock()
        if remaining <= 0:
            self._ends_at = None
            return 0.0
        return remaining

    @property
    def is_resting(self) -> bool:
        return self.remaining_seconds > 0
