from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Lock


@dataclass(frozen=True)
class MetricsSnapshot:
    total_requests: int
    active_requests: int
    start_time: datetime


class RequestMetrics:
    """Thread-safe, process-local request counters (resets on restart).

    ``total_requests`` only ever grows and doubles as the per-request sequence
    number. ``active_requests`` tracks root requests between entry and exit.
    """

    def __init__(self, start_time: datetime) -> None:
        self._lock = Lock()
        self._total_requests: int = 0
        self._active_requests: int = 0
        self.start_time = start_time

    def increment_total(self) -> int:
        with self._lock:
            self._total_requests += 1
            return self._total_requests

    def increment_active(self) -> int:
        with self._lock:
            self._active_requests += 1
            return self._active_requests

    def decrement_active(self) -> int:
        with self._lock:
            self._active_requests -= 1
            return self._active_requests

    @contextmanager
    def in_flight(self) -> Iterator[None]:
        self.increment_active()
        try:
            yield
        finally:
            self.decrement_active()

    def uptime(self, now: datetime) -> timedelta:
        return now - self.start_time

    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            return MetricsSnapshot(
                total_requests=self._total_requests,
                active_requests=self._active_requests,
                start_time=self.start_time,
            )

    def reset(self) -> None:
        """Zero both counters (used by tests). The start time is kept."""

        with self._lock:
            self._total_requests = 0
            self._active_requests = 0
