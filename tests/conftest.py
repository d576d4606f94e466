from __future__ import annotations

import threading
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from probe_service.config import Settings, get_settings
from probe_service.main import create_app
from probe_service.observability.metrics import RequestMetrics


START = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, start: datetime = START) -> None:
        self._now = start
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            return self._now

    def advance(self, seconds: float) -> None:
        with self._lock:
            self._now += timedelta(seconds=seconds)


class FixedDelaySource:
    def __init__(self, delay_ms: int = 1234) -> None:
        self.delay_ms = delay_ms
        self.calls: list[tuple[int, int]] = []

    def random_delay(self, min_ms: int, max_ms: int) -> int:
        self.calls.append((min_ms, max_ms))
        return self.delay_ms


class RecordingSleeper:
    def __init__(self) -> None:
        self.calls: list[float] = []
        self._lock = threading.Lock()
        self.hook = None

    def __call__(self, seconds: float) -> None:
        with self._lock:
            self.calls.append(seconds)
        if self.hook is not None:
            self.hook()


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "HOST", "LOG_LEVEL", "READY_AFTER_SECONDS", "MIN_DELAY_MS", "MAX_DELAY_MS", "WORKLOAD_THREADS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("APP_VERSION", "9.9.9-test")
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def delay_source() -> FixedDelaySource:
    return FixedDelaySource()


@pytest.fixture
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()


@pytest.fixture
def hostname() -> list[str]:
    # Mutable holder so tests can swap the reported hostname.
    return ["abcdefghijklmnop"]


@pytest.fixture
def metrics(clock: FakeClock) -> RequestMetrics:
    return RequestMetrics(start_time=clock.now())


@pytest.fixture
def app(
    clock: FakeClock,
    delay_source: FixedDelaySource,
    sleeper: RecordingSleeper,
    hostname: list[str],
    metrics: RequestMetrics,
) -> FastAPI:
    return create_app(
        Settings(),
        metrics=metrics,
        clock=clock,
        delay_source=delay_source,
        sleep=sleeper,
        hostname_resolver=lambda: hostname[0],
    )


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
