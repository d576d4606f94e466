from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import anyio
from fastapi import Request

from probe_service.config import Settings
from probe_service.observability.metrics import RequestMetrics
from probe_service.services.runtime import Clock, DelaySource, Sleeper


@dataclass
class AppRuntime:
    """Everything the handlers share, built once per application."""

    settings: Settings
    metrics: RequestMetrics
    clock: Clock
    delay_source: DelaySource
    sleep: Sleeper
    hostname_resolver: Callable[[], str]
    _workload_limiter: anyio.CapacityLimiter | None = field(default=None, repr=False)

    def workload_limiter(self) -> anyio.CapacityLimiter:
        """Thread limiter for the root workload, separate from AnyIO's default one.

        Created on first use because it must belong to the running event loop.
        """

        if self._workload_limiter is None:
            self._workload_limiter = anyio.CapacityLimiter(self.settings.workload_threads)
        return self._workload_limiter


async def get_runtime(request: Request) -> AppRuntime:
    return request.app.state.runtime
