"""Doctor command implementation."""

from __future__ import annotations

import asyncio
import sys

import click

from shopcheck.cli.playwright_errors import PLAYWRIGHT_MISSING_ERROR, playwright_hint
from shopcheck.utils.config import ShopcheckConfig
from shopcheck.utils.deps import has_playwright_dependency


async def _launch_chromium() -> None:
    from playwright.async_api import async_playwright

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        await browser.close()


def run_doctor(config: ShopcheckConfig, verbose: bool) -> None:
    """Check that the browser transport can be used."""
    errors: list[str] = []

    if not has_playwright_dependency():
        errors.append(PLAYWRIGHT_MISSING_ERROR)
    else:
        try:
            asyncio.run(_launch_chromium())
        except Exception as exc:
            errors.append(playwright_hint(exc) or f"Error: Chromium failed to launch: {exc}")

    if errors:
        for error in errors:
            click.echo(error, err=True)
        click.echo("Doctor failed.", err=True)
        click.echo("Without a browser, 403 responses degrade straight to stubs.", err=True)
        sys.exit(1)

    click.echo("Doctor check passed.", err=True)
    if verbose:
        click.echo(f"Storefront: {config.base_url}", err=True)
        click.echo(f"API: {config.api_url}", err=True)
        click.echo(f"Fallback statuses: {sorted(config.fallback_statuses)}", err=True)
