from __future__ import annotations

import random
import time
from datetime import datetime, timezone
from typing import Callable, Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class DelaySource(Protocol):
    def random_delay(self, min_ms: int, max_ms: int) -> int: ...


Sleeper = Callable[[float], None]


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class RandomDelaySource:
    """Uniform integer delays in ``[min_ms, max_ms)`` milliseconds."""

    def __init__(self, seed: int | None = None) -> None:
        # Seeded from OS entropy when no seed is given.
        self._rng = random.Random(seed)

    def random_delay(self, min_ms: int, max_ms: int) -> int:
        if max_ms <= min_ms:
            raise ValueError("max_ms must be greater than min_ms")
        return self._rng.randrange(min_ms, max_ms)


def blocking_sleep(seconds: float) -> None:
    time.sleep(seconds)
