"""Time source for the live session timer."""

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float:
        """Current instant in seconds (any fixed epoch)."""
        ...


class MonotonicClock:
    def now(self) -> float:
        return time.monotonic()
