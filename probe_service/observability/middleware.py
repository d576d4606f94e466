from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from starlette.datastructures import MutableHeaders

from probe_service.services.host_service import container_id


class RequestContextMiddleware:
    """Binds request and container context for logs, sets X-Request-ID, logs access."""

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app
        self._container_id: str | None = None

    def _service_context(self, scope: dict[str, Any]) -> dict[str, Any]:
        runtime = scope["app"].state.runtime
        # The hostname does not change for the life of the process.
        if self._container_id is None:
            self._container_id = container_id(runtime.hostname_resolver())
        return {"container_id": self._container_id, "version": runtime.settings.app_version}

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        service = self._service_context(scope)

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=scope.get("path"),
            method=scope.get("method"),
            **service,
        )

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (perf_counter() - start) * 1000.0
            structlog.get_logger("access").info(
                "http_request",
                status_code=status_code,
                elapsed_ms=round(elapsed_ms, 2),
                **service,
            )
            structlog.contextvars.clear_contextvars()
