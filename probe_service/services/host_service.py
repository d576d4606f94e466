from __future__ import annotations

import socket

import structlog


UNKNOWN_HOSTNAME = "unknown"
CONTAINER_ID_LENGTH = 12


def resolve_hostname() -> str:
    try:
        hostname = socket.gethostname()
    except OSError as exc:
        structlog.get_logger("host").warning("hostname_lookup_failed", error=str(exc))
        return UNKNOWN_HOSTNAME
    return hostname or UNKNOWN_HOSTNAME


def container_id(hostname: str) -> str:
    """Short display id: the first 12 characters of the hostname."""

    return hostname[:CONTAINER_ID_LENGTH]
