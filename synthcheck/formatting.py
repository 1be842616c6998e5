from __future__ import annotations

from typing import Any, Dict


def format_transition(
    event: Dict[str, Any], check: Dict[str, Any], state: Dict[str, Any]
) -> tuple[str, str]:
    status = event["event"]  # "UP" or "DOWN"
    title = f"[{status}] {check['id']}"

    lines = [
        f"Check: {check['id']} ({check['type']})",
        f"Target: {check['url']}",
        f"Latency: {state.get('latency_ms')} ms",
    ]
    if state.get("status_code") is not None:
        lines.append(f"HTTP: {state.get('status_code')}")
    if state.get("error"):
        lines.append(f"Error: {state['error']}")
    elif state.get("screenshot_path"):
        lines.append(f"Screenshot: {state['screenshot_path']}")
    if state.get("fail_count", 0) > 1:
        lines.append(f"Consecutive failures: {state['fail_count']}")
    lines.append(f"Time: {event['ts']}")
    return title, "\n".join(lines)
