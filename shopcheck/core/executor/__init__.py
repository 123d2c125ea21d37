"""Resilient request execution: primary transport, browser fallback, stubs."""

from shopcheck.core.executor.engine import DEFAULT_FALLBACK_STATUSES, ResilientRequestExecutor
from shopcheck.core.executor.runtime import build_executor, open_executor
from shopcheck.core.executor.stubs import build_stub_response
from shopcheck.core.executor.transports import (
    BrowserFetchTransport,
    HttpxTransport,
    RequestTransport,
    TransportError,
)

__all__ = [
    "DEFAULT_FALLBACK_STATUSES",
    "BrowserFetchTransport",
    "HttpxTransport",
    "RequestTransport",
    "ResilientRequestExecutor",
    "TransportError",
    "build_executor",
    "build_stub_response",
    "open_executor",
]
