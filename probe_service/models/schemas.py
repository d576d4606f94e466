from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class RootResponse(BaseModel):
    version: str
    hostname: str
    container_id: str
    timestamp: datetime
    uptime: str
    total_requests: int
    message: str


class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    version: str


class ReadyResponse(BaseModel):
    status: Literal["ready", "not ready"]
    reason: str | None = None


class StatsResponse(BaseModel):
    version: str
    hostname: str
    uptime: str
    total_requests: int
    active_requests: int
    started_at: str
