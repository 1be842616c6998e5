from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from synthcheck.constants import FAILURE_STATUS


@dataclass
class CheckResult:
    url: str
    ok: bool
    latency_ms: int
    status_code: int | None = None
    screenshot_path: str | None = None
    error: str | None = None

    @classmethod
    def from_status(
        cls,
        url: str,
        status_code: int,
        latency_ms: int,
        screenshot_path: str | None = None,
    ) -> CheckResult:
        return cls(
            url=url,
            ok=status_code < FAILURE_STATUS,
            latency_ms=latency_ms,
            status_code=status_code,
            screenshot_path=screenshot_path,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
