"""Build a ready-to-use executor with its clients, and tear it down afterwards."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

import httpx

from shopcheck.core.executor.engine import ResilientRequestExecutor
from shopcheck.core.executor.transports import (
    BrowserFetchTransport,
    HttpxTransport,
    RequestTransport,
)
from shopcheck.utils.config import ShopcheckConfig

logger = logging.getLogger(__name__)


def build_executor(
    config: ShopcheckConfig,
    client: httpx.AsyncClient,
    page: Any | None = None,
) -> ResilientRequestExecutor:
    """Wire transports in fallback order: httpx first, then the page if any."""
    headers = config.request_headers()
    transports: list[RequestTransport] = [HttpxTransport(client, headers=headers)]
    if page is not None:
        transports.append(BrowserFetchTransport(page, headers=headers))
    return ResilientRequestExecutor(transports, fallback_statuses=config.fallback_statuses)


@asynccontextmanager
async def open_executor(
    config: ShopcheckConfig,
    *,
    use_browser: bool = True,
) -> AsyncIterator[ResilientRequestExecutor]:
    """Yield an executor backed by an httpx client and, optionally, a browser page.

    The page is opened on the storefront so browser fetches originate from a
    real document. If the Playwright driver or the browser cannot be started,
    or the storefront does not load, the executor runs with the primary
    transport only.
    """
    async with httpx.AsyncClient(timeout=config.request_timeout_s) as client:
        if not use_browser:
            yield build_executor(config, client)
            return

        from playwright.async_api import async_playwright

        async with AsyncExitStack() as stack:
            page = None
            try:
                p = await stack.enter_async_context(async_playwright())
                browser = await p.chromium.launch(headless=config.headless)
                stack.push_async_callback(browser.close)
                context = await browser.new_context()
                page = await context.new_page()
                await page.goto(config.page_url("/"), timeout=config.navigation_timeout_ms)
            except Exception as exc:
                logger.warning("Browser transport unavailable: %s", exc)
                page = None

            yield build_executor(config, client, page)
