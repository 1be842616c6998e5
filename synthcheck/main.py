import logging
import threading
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import FileResponse

from synthcheck.api_schemas import (
    CheckRunResponse,
    CheckStateResponse,
    ConfigResponse,
    HealthResponse,
    RegistryNormalizedResponse,
    StatusEventResponse,
    StatusSummaryResponse,
)
from synthcheck.config import settings
from synthcheck.registry import apply_defaults, load_registry
from synthcheck.runner import build_notifier, execute_check, loop_forever, record_result
from synthcheck.state import StateStore

logger = logging.getLogger(__name__)
store = StateStore()


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.MONITOR_ENABLED:
        t = threading.Thread(
            target=loop_forever,
            args=(store, settings.MONITOR_INTERVAL),
            daemon=True,
        )
        t.start()
    else:
        logger.info("Monitor loop disabled; checks run only on demand")
    yield


app = FastAPI(
    title="Synthcheck",
    version="1.0.0",
    description=(
        "Synthetic browser checks: loads pages in headless Chromium, fails on "
        "HTTP status >= 400, keeps the latest screenshot and transition history."
    ),
    lifespan=lifespan,
)


def _lookup_check(check_id: str) -> dict:
    check = apply_defaults(load_registry()).get(check_id)
    if check is None:
        raise HTTPException(status_code=404, detail=f"Unknown check_id: {check_id}")
    return check


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health Check",
    description="Liveness endpoint used by probes and orchestration.",
)
def health():
    return {"status": "ok"}


@app.get(
    "/config",
    response_model=ConfigResponse,
    tags=["system"],
    summary="Current Effective Config",
    description="Returns non-secret runtime config values.",
)
def config():
    return {
        "check_url": settings.CHECK_URL,
        "screenshot_path": settings.SCREENSHOT_PATH,
        "checks_path": settings.CHECKS_PATH,
        "headless": settings.BROWSER_HEADLESS,
        "navigation_timeout_ms": settings.NAVIGATION_TIMEOUT_MS,
        "interval": settings.MONITOR_INTERVAL,
        "monitor_enabled": settings.MONITOR_ENABLED,
        "notifications_enabled": bool(settings.NTFY_URL and settings.NTFY_TOPIC),
    }


@app.get(
    "/api/registry",
    response_model=RegistryNormalizedResponse,
    tags=["registry"],
    summary="Normalized Registry",
    description="Returns checks with defaults applied, keyed by check id.",
)
def registry_normalized():
    reg = load_registry()
    return {
        "defaults": reg.defaults.model_dump(),
        "checks": apply_defaults(reg),
        "count": len(reg.checks),
    }


@app.get(
    "/api/status/checks",
    response_model=dict[str, CheckStateResponse],
    tags=["status"],
    summary="Current Check States",
    description="Latest known state per check id.",
)
def status_checks():
    return store.snapshot()


@app.get(
    "/api/status/summary",
    response_model=StatusSummaryResponse,
    tags=["status"],
    summary="Status Summary",
    description="Aggregate counts and list of currently down checks.",
)
def status_summary():
    return store.summary()


@app.get(
    "/api/status/events",
    response_model=list[StatusEventResponse],
    tags=["status"],
    summary="Recent Status Events",
    description="Recent INIT/UP/DOWN events, newest first.",
)
def status_events(
    limit: int = Query(default=50, ge=1, le=500, description="Max number of events to return")
):
    return store.events(limit=limit)


@app.post(
    "/api/checks/{check_id}/run",
    response_model=CheckRunResponse,
    tags=["checks"],
    summary="Run Check Now",
    description="Runs one browser check immediately and records the result.",
)
def run_check(check_id: str):
    check = _lookup_check(check_id)
    store.ensure_check(check_id, check["type"], down_threshold=check["down_threshold"])

    res = execute_check(check)
    event = record_result(store, check_id, check, res, notifier=build_notifier())
    return {
        "check_id": check_id,
        **res.to_dict(),
        "event": event["event"] if event else None,
    }


@app.get(
    "/api/checks/{check_id}/screenshot",
    tags=["checks"],
    summary="Latest Screenshot",
    description="Returns the JPEG captured by the last successful run of a check.",
    response_class=FileResponse,
)
def check_screenshot(check_id: str):
    check = _lookup_check(check_id)
    path = Path(check["screenshot_path"])
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"No screenshot yet for {check_id}")
    return FileResponse(path, media_type="image/jpeg")
