from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from probe_service.observability.metrics import RequestMetrics


START = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def test_increment_total_returns_post_increment_value() -> None:
    metrics = RequestMetrics(start_time=START)
    assert metrics.increment_total() == 1
    assert metrics.increment_total() == 2
    assert metrics.snapshot().total_requests == 2


def test_concurrent_increments_issue_unique_sequence_numbers() -> None:
    metrics = RequestMetrics(start_time=START)
    n = 500

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(lambda _: metrics.increment_total(), range(n)))

    assert sorted(results) == list(range(1, n + 1))
    assert metrics.snapshot().total_requests == n


def test_in_flight_tracks_concurrent_holders_and_returns_to_baseline() -> None:
    metrics = RequestMetrics(start_time=START)
    n = 8
    observed: list[int] = []
    barrier = threading.Barrier(n, action=lambda: observed.append(metrics.snapshot().active_requests), timeout=5)

    def work() -> None:
        with metrics.in_flight():
            barrier.wait()

    threads = [threading.Thread(target=work) for _ in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert observed == [n]
    assert metrics.snapshot().active_requests == 0


def test_in_flight_releases_on_exception() -> None:
    metrics = RequestMetrics(start_time=START)

    with pytest.raises(RuntimeError):
        with metrics.in_flight():
            assert metrics.snapshot().active_requests == 1
            raise RuntimeError("boom")

    assert metrics.snapshot().active_requests == 0


def test_uptime_and_snapshot_start_time() -> None:
    metrics = RequestMetrics(start_time=START)
    assert metrics.uptime(START + timedelta(seconds=90)) == timedelta(seconds=90)
    assert metrics.snapshot().start_time == START


def test_reset_zeroes_counters() -> None:
    metrics = RequestMetrics(start_time=START)
    metrics.increment_total()
    metrics.increment_active()
    metrics.reset()

    snap = metrics.snapshot()
    assert (snap.total_requests, snap.active_requests) == (0, 0)
