"""Transports the executor can try, in order.

Each transport normalizes whatever its client returns into a
``TransportResponse`` before handing it back. A transport that cannot produce
a response raises ``TransportError``; HTTP error statuses are responses, not
failures.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import httpx
from playwright.async_api import Error as PlaywrightError

from shopcheck.models.request import RequestSpec, Transport, TransportResponse

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "accept": "application/json",
}


class TransportError(Exception):
    """A transport could not produce any response."""

    def __init__(self, transport: Transport, message: str) -> None:
        super().__init__(message)
        self.transport = transport
        self.message = message


class RequestTransport(Protocol):
    """One tier of the fallback chain.

    A response from a terminal transport is accepted whatever its status;
    a non-terminal transport answering with a fallback status hands over to
    the next tier.
    """

    name: Transport
    terminal: bool

    async def attempt(self, spec: RequestSpec) -> TransportResponse: ...


def merge_headers(defaults: dict[str, str], overrides: dict[str, str]) -> dict[str, str]:
    """Merge header mappings; override keys replace defaults case-insensitively."""
    overridden = {key.lower() for key in overrides}
    merged = {k: v for k, v in defaults.items() if k.lower() not in overridden}
    merged.update(overrides)
    return merged


class HttpxTransport:
    """Primary transport: a direct server-side call through httpx."""

    name = Transport.PRIMARY
    terminal = False

    def __init__(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.client = client
        self.headers = dict(DEFAULT_HEADERS if headers is None else headers)

    async def attempt(self, spec: RequestSpec) -> TransportResponse:
        kwargs: dict[str, Any] = {"headers": merge_headers(self.headers, spec.headers)}
        if spec.body is not None:
            kwargs["json"] = spec.body

        try:
            response = await self.client.request(spec.method.value, spec.url, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(
                self.name,
                f"{spec.method} {spec.url} failed: {exc}",
            ) from exc

        logger.debug("%s %s answered %d", spec.method, spec.url, response.status_code)
        return TransportResponse(status=response.status_code, body=_parse_httpx_body(response))


def _parse_httpx_body(response: httpx.Response) -> Any:
    """Parse a JSON body; empty bodies become None and non-JSON stays text."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


# Runs inside the page. Body parse failures (e.g. 204) resolve to null;
# network and CORS failures reject, which surfaces as a Playwright error.
FETCH_SCRIPT = """
async ({ url, method, headers, body }) => {
    const response = await fetch(url, {
        method,
        headers,
        body: body === null ? undefined : JSON.stringify(body),
    });
    let data = null;
    try {
        data = await response.json();
    } catch (e) {}
    return { status: response.status, body: data };
}
"""


class BrowserFetchTransport:
    """Secondary transport: ``fetch`` issued from inside a Playwright page.

    Requests carry the page's browser fingerprint, which gets past some
    origin-level blocking aimed at non-browser clients, but they are subject
    to CORS and the rest of the browser security policy.
    """

    name = Transport.SECONDARY
    terminal = True

    def __init__(
        self,
        page: Any,  # playwright Page object
        headers: dict[str, str] | None = None,
    ) -> None:
        self.page = page
        self.headers = dict(DEFAULT_HEADERS if headers is None else headers)

    async def attempt(self, spec: RequestSpec) -> TransportResponse:
        args = {
            "url": spec.url,
            "method": spec.method.value,
            "headers": merge_headers(self.headers, spec.headers),
            "body": spec.body,
        }
        try:
            result = await self.page.evaluate(FETCH_SCRIPT, args)
        except PlaywrightError as exc:
            raise TransportError(
                self.name,
                f"browser fetch {spec.method} {spec.url} failed: {exc}",
            ) from exc

        if not isinstance(result, dict) or not isinstance(result.get("status"), int):
            raise TransportError(
                self.name,
                f"browser fetch {spec.method} {spec.url} returned no status",
            )
        return TransportResponse(status=result["status"], body=result.get("body"))
