from __future__ import annotations

import anyio
import structlog
from fastapi import APIRouter, Depends, Request

from probe_service.api.routing import ANY_METHOD, AnyMethodRoute
from probe_service.models.schemas import RootResponse
from probe_service.services.host_service import container_id
from probe_service.services.runtime_dependencies import AppRuntime, get_runtime
from probe_service.services.uptime import format_uptime

router = APIRouter(tags=["workload"], route_class=AnyMethodRoute)


def _run_workload(runtime: AppRuntime, method: str, path: str) -> RootResponse:
    settings = runtime.settings
    metrics = runtime.metrics

    with metrics.in_flight():
        count = metrics.increment_total()

        # Not cancelled on client disconnect; the delay always runs to completion.
        delay_ms = runtime.delay_source.random_delay(settings.min_delay_ms, settings.max_delay_ms)
        runtime.sleep(delay_ms / 1000.0)

        hostname = runtime.hostname_resolver()
        short_id = container_id(hostname)
        now = runtime.clock.now()

        response = RootResponse(
            version=settings.app_version,
            hostname=hostname,
            container_id=short_id,
            timestamp=now,
            uptime=format_uptime(metrics.uptime(now)),
            total_requests=count,
            message=f"Hello from container {short_id} (version {settings.app_version}) - delayed {delay_ms}ms",
        )

        structlog.get_logger("access").info(
            "root_request",
            container_id=short_id,
            method=method,
            path=path,
            request_number=count,
            delay_ms=delay_ms,
        )
        return response


@router.api_route("/", methods=ANY_METHOD, response_model=RootResponse)
async def simulated_workload(request: Request, runtime: AppRuntime = Depends(get_runtime)) -> RootResponse:
    # The blocking sleep runs on the workload limiter so the probes never wait for a thread.
    return await anyio.to_thread.run_sync(
        _run_workload,
        runtime,
        request.method,
        request.url.path,
        limiter=runtime.workload_limiter(),
    )
