from __future__ import annotations

import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Browser, Page, Response, sync_playwright

from synthcheck.checks.errors import (
    ArtifactWriteError,
    CheckError,
    CheckFailure,
    NavigationError,
)
from synthcheck.checks.results import CheckResult
from synthcheck.constants import (
    DEFAULT_SCREENSHOT_PATH,
    DEFAULT_URL,
    DEFAULT_WAIT_UNTIL,
    FAILURE_STATUS,
)

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _navigate(page: Page, url: str, timeout_ms: int | None, wait_until: str) -> Response:
    goto_kwargs: dict[str, Any] = {"wait_until": wait_until}
    if timeout_ms is not None:
        goto_kwargs["timeout"] = timeout_ms

    try:
        response = page.goto(url, **goto_kwargs)
    except PlaywrightError as exc:
        raise NavigationError(url, exc.message or str(exc)) from exc

    if response is None:
        raise NavigationError(url, "no response received")
    return response


def _replace_file(path: Path, data: bytes) -> None:
    # Readers of the path only ever see a complete image.
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
    )
    try:
        with tmp:
            tmp.write(data)
        os.chmod(tmp.name, 0o644)
        os.replace(tmp.name, path)
    except OSError:
        Path(tmp.name).unlink(missing_ok=True)
        raise


def _capture(
    page: Page,
    url: str,
    screenshot_path: str,
    full_page: bool,
    status_code: int,
) -> str:
    path = Path(screenshot_path)
    try:
        image = page.screenshot(type="jpeg", full_page=full_page)
    except PlaywrightError as exc:
        raise ArtifactWriteError(url, str(path), exc.message or str(exc), status_code) from exc

    if not image:
        raise ArtifactWriteError(url, str(path), "browser returned an empty image", status_code)

    try:
        _replace_file(path, image)
    except OSError as exc:
        raise ArtifactWriteError(url, str(path), str(exc), status_code) from exc
    return str(path)


def _release(resource: Page | Browser, name: str, url: str) -> None:
    try:
        resource.close()
    except PlaywrightError as exc:
        # Keep the check outcome; a failed close must not mask it.
        logger.warning("Failed to close %s after checking %s: %s", name, url, exc)


def run(
    url: str = DEFAULT_URL,
    screenshot_path: str = DEFAULT_SCREENSHOT_PATH,
    *,
    headless: bool = True,
    timeout_ms: int | None = None,
    wait_until: str = DEFAULT_WAIT_UNTIL,
    full_page: bool = False,
) -> CheckResult:
    """
    Navigate a headless browser to ``url`` and screenshot the loaded page.

    Raises NavigationError when no response arrives, CheckFailure when the
    status is 400 or above (no screenshot is taken) and ArtifactWriteError
    when the screenshot cannot be captured or written. The page and then the
    browser are closed before any error propagates.
    """
    start = time.perf_counter()
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=headless)
        try:
            page = browser.new_page()
            try:
                response = _navigate(page, url, timeout_ms=timeout_ms, wait_until=wait_until)
                status_code = response.status
                if status_code >= FAILURE_STATUS:
                    raise CheckFailure(url, status_code)
                saved_path = _capture(
                    page,
                    url,
                    screenshot_path,
                    full_page=full_page,
                    status_code=status_code,
                )
            finally:
                _release(page, "page", url)
        finally:
            _release(browser, "browser", url)

    result = CheckResult.from_status(
        url,
        status_code,
        latency_ms=_elapsed_ms(start),
        screenshot_path=saved_path,
    )
    logger.info(
        "Browser check passed: url=%s status=%s latency_ms=%s screenshot=%s",
        url,
        status_code,
        result.latency_ms,
        saved_path,
    )
    return result


def run_browser(
    url: str,
    screenshot_path: str = DEFAULT_SCREENSHOT_PATH,
    *,
    headless: bool = True,
    timeout_ms: int | None = None,
    wait_until: str = DEFAULT_WAIT_UNTIL,
    full_page: bool = False,
) -> CheckResult:
    start = time.perf_counter()
    try:
        return run(
            url,
            screenshot_path,
            headless=headless,
            timeout_ms=timeout_ms,
            wait_until=wait_until,
            full_page=full_page,
        )
    except CheckError as e:
        logger.warning("Browser check failed: url=%s error=%s", url, e)
        return CheckResult(
            url=url,
            ok=False,
            latency_ms=_elapsed_ms(start),
            status_code=e.status_code,
            error=str(e),
        )
    except Exception as e:
        # Launch failures and driver crashes still count as a failed run.
        logger.exception("Browser check crashed: url=%s", url)
        return CheckResult(
            url=url,
            ok=False,
            latency_ms=_elapsed_ms(start),
            error=f"{e.__class__.__name__}: {e}",
        )
