from __future__ import annotations

from typing import Callable

from fastapi import FastAPI

from probe_service.api.probes import router as probes_router
from probe_service.api.root import router as root_router
from probe_service.api.stats import router as stats_router
from probe_service.config import Settings, get_settings
from probe_service.observability.metrics import RequestMetrics
from probe_service.observability.middleware import RequestContextMiddleware
from probe_service.services.host_service import resolve_hostname
from probe_service.services.runtime import (
    Clock,
    DelaySource,
    RandomDelaySource,
    Sleeper,
    SystemClock,
    blocking_sleep,
)
from probe_service.services.runtime_dependencies import AppRuntime


def create_app(
    settings: Settings | None = None,
    *,
    metrics: RequestMetrics | None = None,
    clock: Clock | None = None,
    delay_source: DelaySource | None = None,
    sleep: Sleeper | None = None,
    hostname_resolver: Callable[[], str] | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    clock = clock or SystemClock()

    app = FastAPI(title="Probe Service", version=settings.app_version)
    app.state.runtime = AppRuntime(
        settings=settings,
        metrics=metrics or RequestMetrics(start_time=clock.now()),
        clock=clock,
        delay_source=delay_source or RandomDelaySource(),
        sleep=sleep or blocking_sleep,
        hostname_resolver=hostname_resolver or resolve_hostname,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(root_router)
    app.include_router(probes_router)
    app.include_router(stats_router)
    return app
