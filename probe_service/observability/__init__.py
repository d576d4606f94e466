"""Observability helpers.

structlog JSON logging with per-request contextvars, plus the lock-guarded
request counters the stats endpoint reports from.
"""

from __future__ import annotations
