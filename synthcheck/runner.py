from __future__ import annotations

import logging
import time
from pathlib import Path

from synthcheck.checks.browser_check import run_browser
from synthcheck.checks.results import CheckResult
from synthcheck.config import settings
from synthcheck.formatting import format_transition
from synthcheck.notifier import NtfyConfig, NtfyNotifier
from synthcheck.registry import apply_defaults, load_registry
from synthcheck.state import StateStore

logger = logging.getLogger(__name__)


def _notify_transition(
    notifier: NtfyNotifier | None,
    event: dict | None,
    check: dict,
    state: dict,
) -> None:
    if notifier is None or event is None:
        return
    if event["event"] not in {"UP", "DOWN"}:
        return

    title, message = format_transition(event=event, check=check, state=state)
    try:
        if event["event"] == "DOWN":
            notifier.send_down(title=title, message=message)
        else:
            notifier.send_up(title=title, message=message)
    except Exception:
        # Notification errors should never stop the check loop.
        logger.exception("Failed to send %s notification for %s", event["event"], check["id"])


def record_result(
    store: StateStore,
    check_id: str,
    check: dict,
    res: CheckResult,
    notifier: NtfyNotifier | None = None,
) -> dict | None:
    event = store.update(
        check_id,
        ok=res.ok,
        latency_ms=res.latency_ms,
        status_code=res.status_code,
        error=res.error,
        screenshot_path=res.screenshot_path,
        down_threshold=check.get("down_threshold"),
    )
    if event is not None:
        logger.info("Check %s transitioned: %s", check_id, event["event"])
    _notify_transition(notifier, event, check, store.check_state(check_id))
    return event


def execute_check(check: dict) -> CheckResult:
    return run_browser(
        check["url"],
        check["screenshot_path"],
        headless=check.get("headless", True),
        timeout_ms=check.get("timeout_ms"),
        wait_until=check.get("wait_until") or "load",
        full_page=check.get("full_page", False),
    )


def build_notifier() -> NtfyNotifier | None:
    if not settings.NTFY_URL or not settings.NTFY_TOPIC:
        return None
    return NtfyNotifier(NtfyConfig(base_url=settings.NTFY_URL, topic=settings.NTFY_TOPIC))


def run_once(
    store: StateStore,
    notifier: NtfyNotifier | None = None,
    registry_path: Path | str | None = None,
) -> dict[str, CheckResult]:
    reg = load_registry(registry_path)
    checks = apply_defaults(reg)

    for check_id, c in checks.items():
        store.ensure_check(check_id, c["type"], down_threshold=c.get("down_threshold") or 1)

    results: dict[str, CheckResult] = {}
    for check_id, c in checks.items():
        res = execute_check(c)
        record_result(store, check_id, c, res, notifier)
        results[check_id] = res
    return results


def loop_forever(
    store: StateStore,
    interval_s: int,
    registry_path: Path | str | None = None,
) -> None:
    notifier = build_notifier()
    while True:
        start = time.perf_counter()
        try:
            run_once(store, notifier=notifier, registry_path=registry_path)
        except Exception:
            # A broken checks.yml must not kill the monitor thread.
            logger.exception("Check cycle failed")
        elapsed = time.perf_counter() - start
        sleep_s = max(0.0, interval_s - elapsed)
        time.sleep(sleep_s)
