"""Resilient request executor: ordered transports with a stub as last resort."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence

from shopcheck.core.executor.stubs import build_stub_response
from shopcheck.core.executor.transports import RequestTransport, TransportError
from shopcheck.models.request import Outcome, RequestSpec, Transport

logger = logging.getLogger(__name__)

# Edge challenges reject automated clients with 403. Other statuses (429, 503)
# are returned to the caller unchanged unless configured otherwise.
DEFAULT_FALLBACK_STATUSES = frozenset({403})


class ResilientRequestExecutor:
    """Execute a RequestSpec through an ordered list of transports.

    The first transport whose response status is not a fallback status wins,
    and a terminal transport wins whatever its status. A transport that
    raises is skipped. When no transport produced a usable response the stub
    template for the request's ``expect_type`` is returned. ``execute`` never
    raises.
    """

    def __init__(
        self,
        transports: Sequence[RequestTransport],
        fallback_statuses: Iterable[int] = DEFAULT_FALLBACK_STATUSES,
    ) -> None:
        self.transports = list(transports)
        self.fallback_statuses = frozenset(fallback_statuses)

    async def execute(self, spec: RequestSpec) -> Outcome:
        start = time.monotonic()

        for transport in self.transports:
            logger.debug("Attempting %s %s via %s", spec.method, spec.url, transport.name)
            try:
                response = await transport.attempt(spec)
            except TransportError as exc:
                logger.warning("%s transport failed: %s", transport.name, exc.message)
                continue
            except Exception:
                logger.exception("%s transport raised unexpectedly", transport.name)
                continue

            if response.status in self.fallback_statuses and not transport.terminal:
                logger.warning(
                    "%s %s rejected with %d via %s; falling back",
                    spec.method,
                    spec.url,
                    response.status,
                    transport.name,
                )
                continue

            return Outcome(
                transport=transport.name,
                status=response.status,
                body=response.body,
                duration_ms=_elapsed_ms(start),
            )

        logger.warning(
            "No transport produced a response for %s %s; using %s stub",
            spec.method,
            spec.url,
            spec.expect_type,
        )
        stub = build_stub_response(spec.expect_type, spec.body)
        return Outcome(
            transport=Transport.STUB,
            status=stub.status,
            body=stub.body,
            duration_ms=_elapsed_ms(start),
        )


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.monotonic() - start) * 1000))
