from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import click

from synthcheck.checks.browser_check import run
from synthcheck.checks.errors import CheckError
from synthcheck.config import settings
from synthcheck.runner import build_notifier, loop_forever, run_once
from synthcheck.state import StateStore


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Synthetic browser checks."""

    _configure_logging(verbose)


@cli.command("run")
@click.option("--url", default=settings.CHECK_URL, show_default=True, help="Page to load (env: CHECK_URL)")
@click.option(
    "--screenshot",
    "screenshot_path",
    default=settings.SCREENSHOT_PATH,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Where to write the JPEG screenshot (env: SCREENSHOT_PATH)",
)
@click.option(
    "--timeout-ms",
    type=click.IntRange(min=0),
    default=settings.NAVIGATION_TIMEOUT_MS,
    help="Navigation timeout; Playwright's default when omitted",
)
@click.option("--headed", is_flag=True, default=not settings.BROWSER_HEADLESS, help="Show the browser window")
@click.option("--full-page", is_flag=True, help="Capture the full scrollable page")
def run_command(
    url: str,
    screenshot_path: str,
    timeout_ms: Optional[int],
    headed: bool,
    full_page: bool,
) -> None:
    """Load one page, fail on status >= 400 and save a screenshot."""

    try:
        result = run(
            url,
            screenshot_path,
            headless=not headed,
            timeout_ms=timeout_ms,
            full_page=full_page,
        )
    except CheckError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"OK {result.status_code} {result.url} -> {result.screenshot_path}")


@cli.command()
@click.option(
    "--checks",
    "checks_path",
    default=settings.CHECKS_PATH,
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Checks registry file (env: CHECKS_PATH)",
)
@click.option("--interval", type=click.IntRange(min=1), default=settings.MONITOR_INTERVAL, show_default=True)
@click.option("--once", is_flag=True, help="Run every check a single time and print the results")
def watch(checks_path: Path, interval: int, once: bool) -> None:
    """Run every registered check, forever or once."""

    store = StateStore()
    if once:
        results = run_once(store, notifier=build_notifier(), registry_path=checks_path)
        click.echo(json.dumps({k: v.to_dict() for k, v in results.items()}, indent=2))
        if not all(r.ok for r in results.values()):
            raise click.exceptions.Exit(1)
        return

    loop_forever(store, interval, registry_path=checks_path)


def main() -> None:
    cli(prog_name="synthcheck")


if __name__ == "__main__":
    main()
