from __future__ import annotations

from typing import Any
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(description="Health status")


class ConfigResponse(BaseModel):
    check_url: str
    screenshot_path: str
    checks_path: str
    headless: bool
    navigation_timeout_ms: int | None = None
    interval: int = Field(ge=1)
    monitor_enabled: bool
    notifications_enabled: bool


class CheckStateResponse(BaseModel):
    id: str
    type: str
    ok: bool | None = None
    fail_count: int = 0
    down_threshold: int = 1
    last_run: str | None = None
    last_ok: str | None = None
    last_change: str | None = None
    latency_ms: int | None = None
    status_code: int | None = None
    screenshot_path: str | None = None
    error: str | None = None


class RegistryNormalizedResponse(BaseModel):
    defaults: dict[str, Any]
    checks: dict[str, dict[str, Any]]
    count: int


class StatusSummaryResponse(BaseModel):
    total: int
    up: int
    down: int
    unknown: int
    down_checks: list[CheckStateResponse]


class StatusEventResponse(BaseModel):
    ts: str
    id: str
    event: str
    ok: bool | None = None
    latency_ms: int | None = None
    status_code: int | None = None
    error: str | None = None


class CheckRunResponse(BaseModel):
    check_id: str
    url: str
    ok: bool
    latency_ms: int
    status_code: int | None = None
    screenshot_path: str | None = None
    error: str | None = None
    event: str | None = Field(default=None, description="Transition emitted by this run, if any")
