import os
from dotenv import load_dotenv

from synthcheck.constants import DEFAULT_SCREENSHOT_PATH, DEFAULT_URL

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


class Settings:
    CHECK_URL: str = os.getenv("CHECK_URL", DEFAULT_URL)
    SCREENSHOT_PATH: str = os.getenv("SCREENSHOT_PATH", DEFAULT_SCREENSHOT_PATH)
    BROWSER_HEADLESS: bool = _env_bool("BROWSER_HEADLESS", "true")
    NAVIGATION_TIMEOUT_MS: int | None = _env_optional_int("NAVIGATION_TIMEOUT_MS")
    CHECKS_PATH: str = os.getenv("CHECKS_PATH", "checks.yml")
    NTFY_URL: str = os.getenv("NTFY_URL")
    NTFY_TOPIC: str = os.getenv("NTFY_TOPIC")
    MONITOR_INTERVAL: int = int(os.getenv("MONITOR_INTERVAL", 60))
    MONITOR_ENABLED: bool = _env_bool("MONITOR_ENABLED", "true")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
