from __future__ import annotations

import socket
import sys

import structlog
import uvicorn
from pydantic import ValidationError

from probe_service.config import Settings, get_settings
from probe_service.main import create_app
from probe_service.observability.logging import configure_logging
from probe_service.services.host_service import resolve_hostname


def bind_socket(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def _log_banner(settings: Settings) -> None:
    log = structlog.get_logger("startup")
    log.info("server_starting", version=settings.app_version)
    log.info("container", hostname=resolve_hostname())
    log.info("listening", host=settings.host, port=settings.port)
    log.info("health_check", url=f"http://localhost:{settings.port}/health")
    log.info("stats", url=f"http://localhost:{settings.port}/stats")


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as exc:
        configure_logging()
        structlog.get_logger("startup").error("invalid_configuration", errors=exc.errors(include_url=False))
        sys.exit(1)

    configure_logging(settings.log_level, service="probe-service", version=settings.app_version)
    _log_banner(settings)

    try:
        sock = bind_socket(settings.host, settings.port)
    except OSError as exc:
        structlog.get_logger("startup").error("bind_failed", host=settings.host, port=settings.port, error=str(exc))
        sys.exit(1)

    config = uvicorn.Config(
        create_app(settings),
        log_config=None,
        access_log=False,
        log_level=settings.log_level.lower(),
    )
    uvicorn.Server(config).run(sockets=[sock])


if __name__ == "__main__":
    main()
