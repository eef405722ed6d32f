"""StateClock - time spent in the current state."""
from __future__ import annotations

import time
from typing import Callable

from tick_state.types import InvalidArgumentError


class StateClock:
    """Tracks the entry timestamp of the current state in milliseconds.

    ``time_fn`` returns seconds from a monotonic source; tests inject a
    fake one.
    """

    def __init__(self, time_fn: Callable[[], float] = time.monotonic) -> None:
        self._time_fn = time_fn
        self._started_at = self.now()

    def now(self) -> float:
        return self._time_fn() * 1000.0

    def reset(self) -> None:
        self._started_at = self.now()

    def elapsed(self) -> float:
        return self.now() - self._started_at

    def set_elapsed(self, ms: float) -> None:
        if ms < 0:
            raise InvalidArgumentError("Time cannot be negative")
        self._started_at = self.now() - ms
