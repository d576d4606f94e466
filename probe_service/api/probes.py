from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from probe_service.api.routing import ANY_METHOD, AnyMethodRoute
from probe_service.models.schemas import HealthResponse, ReadyResponse
from probe_service.services.runtime_dependencies import AppRuntime, get_runtime
from probe_service.services.uptime import is_ready

router = APIRouter(tags=["probes"], route_class=AnyMethodRoute)


@router.api_route("/health", methods=ANY_METHOD, response_model=HealthResponse)
async def health(runtime: AppRuntime = Depends(get_runtime)) -> HealthResponse:
    """Liveness: the process is up and serving."""
    return HealthResponse(version=runtime.settings.app_version)


@router.api_route("/ready", methods=ANY_METHOD, response_model=ReadyResponse, response_model_exclude_none=True)
async def ready(response: Response, runtime: AppRuntime = Depends(get_runtime)) -> ReadyResponse:
    """Readiness: 503 until the warm-up period has elapsed, 200 from then on."""
    elapsed = runtime.metrics.uptime(runtime.clock.now())
    if not is_ready(elapsed, runtime.settings.ready_after_seconds):
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadyResponse(status="not ready", reason="warming up")
    return ReadyResponse(status="ready")
