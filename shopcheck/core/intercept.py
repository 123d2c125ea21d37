"""Stub browser-initiated requests with canned JSON.

Only requests issued by the page (XHR/fetch) are intercepted; calls made by
the primary httpx transport never pass through the browser.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class RouteStub:
    """Records requests served by a stubbed route."""

    pattern: re.Pattern[str]
    status: int
    hits: list[str] = field(default_factory=list)

    @property
    def last_status(self) -> int | None:
        return self.status if self.hits else None

    @property
    def hit_count(self) -> int:
        return len(self.hits)


def url_pattern(url: str | re.Pattern[str]) -> re.Pattern[str]:
    """Match *url* exactly; query strings are not treated as globs."""
    if isinstance(url, re.Pattern):
        return url
    return re.compile("^" + re.escape(url) + "$")


async def stub_json_route(
    page: Any,  # playwright Page object
    url: str | re.Pattern[str],
    body: Any,
    *,
    status: int = 200,
    delay_ms: int = 0,
    method: str | None = None,
) -> RouteStub:
    """Serve *body* as JSON for matching page requests after *delay_ms*."""
    stub = RouteStub(pattern=url_pattern(url), status=status)
    payload = json.dumps(body)

    async def handler(route: Any) -> None:
        request = route.request
        if method and request.method.upper() != method.upper():
            await route.fallback()
            return
        stub.hits.append(request.url)
        logger.debug("Stubbing %s %s with %d", request.method, request.url, status)
        if delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000)
        await route.fulfill(
            status=status,
            content_type="application/json",
            headers={"access-control-allow-origin": "*"},
            body=payload,
        )

    await page.route(stub.pattern, handler)
    return stub
