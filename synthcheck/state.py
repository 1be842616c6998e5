from __future__ import annotations

import threading
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class CheckState:
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

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class StateStore:
    """In-memory check states and INIT/UP/DOWN events for one process."""

    def __init__(self, max_events: int = 500) -> None:
        self._checks: dict[str, CheckState] = {}
        self._events: list[dict[str, Any]] = []
        self._max_events = max_events
        self._lock = threading.Lock()

    def _build_event(
        self,
        ts: str,
        check_id: str,
        event_name: str,
        ok: bool,
        latency_ms: int,
        status_code: int | None,
        error: str | None,
    ) -> dict[str, Any]:
        return {
            "ts": ts,
            "id": check_id,
            "event": event_name,
            "ok": ok,
            "latency_ms": latency_ms,
            "status_code": status_code,
            "error": error,
        }

    def ensure_check(self, check_id: str, check_type: str, down_threshold: int = 1) -> None:
        with self._lock:
            cs = self._checks.get(check_id)
            if cs is None:
                self._checks[check_id] = CheckState(
                    id=check_id, type=check_type, down_threshold=down_threshold
                )
            else:
                cs.down_threshold = down_threshold

    def update(
        self,
        check_id: str,
        ok: bool,
        latency_ms: int,
        status_code: int | None = None,
        error: str | None = None,
        screenshot_path: str | None = None,
        down_threshold: int | None = None,
    ) -> dict[str, Any] | None:
        with self._lock:
            cs = self._checks[check_id]
            if down_threshold is not None:
                cs.down_threshold = down_threshold
            prev_ok = cs.ok

            cs.last_run = now_iso()
            cs.latency_ms = latency_ms
            cs.status_code = status_code
            cs.error = error

            event_name: str | None = None
            if ok:
                cs.fail_count = 0
                cs.last_ok = cs.last_run
                cs.screenshot_path = screenshot_path or cs.screenshot_path
                if prev_ok is None:
                    event_name = "INIT"
                elif prev_ok is False:
                    event_name = "UP"
                cs.ok = True
            else:
                cs.fail_count += 1
                if prev_ok is None:
                    event_name = "INIT"
                    cs.ok = False
                elif prev_ok is True and cs.fail_count >= cs.down_threshold:
                    event_name = "DOWN"
                    cs.ok = False

            event: dict[str, Any] | None = None
            if event_name is not None:
                cs.last_change = cs.last_run
                event = self._build_event(
                    ts=cs.last_run,
                    check_id=check_id,
                    event_name=event_name,
                    ok=cs.ok,
                    latency_ms=latency_ms,
                    status_code=status_code,
                    error=error,
                )
                self._events.append(event)

            if len(self._events) > self._max_events:
                self._events = self._events[-self._max_events :]

            return event

    def check_state(self, check_id: str) -> dict[str, Any]:
        with self._lock:
            return self._checks[check_id].to_dict()

    def has_check(self, check_id: str) -> bool:
        with self._lock:
            return check_id in self._checks

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {k: v.to_dict() for k, v in self._checks.items()}

    def summary(self) -> dict[str, Any]:
        snap = self.snapshot()
        total = len(snap)
        up = sum(1 for v in snap.values() if v["ok"] is True)
        down = sum(1 for v in snap.values() if v["ok"] is False)
        unknown = sum(1 for v in snap.values() if v["ok"] is None)
        down_checks = [v for v in snap.values() if v["ok"] is False]

        return {
            "total": total,
            "up": up,
            "down": down,
            "unknown": unknown,
            "down_checks": down_checks,
        }

    def events(self, limit: int = 50) -> list[dict[str, Any]]:
        with self._lock:
            return list(reversed(self._events[-limit:]))
