from __future__ import annotations

from fastapi import APIRouter, Depends

from probe_service.api.routing import ANY_METHOD, AnyMethodRoute
from probe_service.models.schemas import StatsResponse
from probe_service.services.runtime_dependencies import AppRuntime, get_runtime
from probe_service.services.uptime import format_started_at, format_uptime

router = APIRouter(tags=["stats"], route_class=AnyMethodRoute)


@router.api_route("/stats", methods=ANY_METHOD, response_model=StatsResponse)
async def stats(runtime: AppRuntime = Depends(get_runtime)) -> StatsResponse:
    snapshot = runtime.metrics.snapshot()
    return StatsResponse(
        version=runtime.settings.app_version,
        hostname=runtime.hostname_resolver(),
        uptime=format_uptime(runtime.metrics.uptime(runtime.clock.now())),
        total_requests=snapshot.total_requests,
        active_requests=snapshot.active_requests,
        started_at=format_started_at(snapshot.start_time),
    )
