from __future__ import annotations

import logging
from pathlib import Path
import yaml

from synthcheck.config import settings
from synthcheck.constants import DEFAULT_CHECK_ID
from synthcheck.models import BrowserCheck, Defaults, Registry

logger = logging.getLogger(__name__)


def default_registry() -> Registry:
    """Registry holding only the built-in check, configured from the environment."""
    return Registry(
        defaults=Defaults(
            headless=settings.BROWSER_HEADLESS,
            timeout_ms=settings.NAVIGATION_TIMEOUT_MS,
        ),
        checks=[
            BrowserCheck(
                id=DEFAULT_CHECK_ID,
                url=settings.CHECK_URL,
                screenshot_path=settings.SCREENSHOT_PATH,
            )
        ]
    )

def load_registry(path: Path | str | None = None) -> Registry:
    path = Path(path or settings.CHECKS_PATH)
    if not path.exists():
        logger.debug("No checks file at %s, using the built-in check", path)
        return default_registry()

    data = yaml.safe_load(path.read_text()) or {}
    reg = Registry.model_validate(data)

    # Ensure unique IDs
    seen = set()
    for c in reg.checks:
        if c.id in seen:
            raise ValueError(f"Duplicate check id: {c.id}")
        seen.add(c.id)

    return reg

def apply_defaults(reg: Registry) -> dict[str, dict]:
    """
    Produce a normalized dict keyed by check id with defaults applied.
    Returns pure python dicts so they serialize cleanly.
    """
    out: dict[str, dict] = {}
    d = reg.defaults
    # Values the checks file leaves out come from the environment.
    headless = d.headless if "headless" in d.model_fields_set else settings.BROWSER_HEADLESS
    timeout_ms = d.timeout_ms if "timeout_ms" in d.model_fields_set else settings.NAVIGATION_TIMEOUT_MS

    for c in reg.checks:
        cd = c.model_dump(mode="json")
        if cd["timeout_ms"] is None:
            cd["timeout_ms"] = timeout_ms
        cd["wait_until"] = cd["wait_until"] or d.wait_until
        cd["down_threshold"] = cd["down_threshold"] or d.down_threshold
        cd["headless"] = headless
        out[c.id] = cd

    return out
