"""Shared test fixtures for the shopcheck test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from shopcheck.core.auth.sessions import LoginSessionCache
from shopcheck.core.executor.transports import TransportError
from shopcheck.models.request import (
    ExpectType,
    HTTPMethod,
    RequestSpec,
    Transport,
    TransportResponse,
)


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run live e2e tests against the public storefront and users API",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="live e2e test; pass --run-e2e to run")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


def make_spec(
    method: HTTPMethod = HTTPMethod.POST,
    url: str = "https://reqres.in/api/users",
    body: dict[str, Any] | None = None,
    expect_type: ExpectType = ExpectType.CREATE,
    headers: dict[str, str] | None = None,
) -> RequestSpec:
    """Create a RequestSpec for testing.

    Module-level so tests can call it with custom arguments:

        from tests.conftest import make_spec
    """
    return RequestSpec(
        method=method,
        url=url,
        body=body,
        expect_type=expect_type,
        headers=headers or {},
    )


class FakeTransport:
    """Transport double that answers with a fixed response or raises."""

    def __init__(
        self,
        name: Transport,
        *,
        status: int | None = None,
        body: Any = None,
        error: Exception | None = None,
        terminal: bool = False,
    ) -> None:
        self.name = name
        self.terminal = terminal
        self.status = status
        self.body = body
        self.error = error
        self.calls: list[RequestSpec] = []

    async def attempt(self, spec: RequestSpec) -> TransportResponse:
        self.calls.append(spec)
        if self.error is not None:
            raise self.error
        assert self.status is not None
        return TransportResponse(status=self.status, body=self.body)


def primary(status: int | None = None, body: Any = None, error: Exception | None = None) -> FakeTransport:
    return FakeTransport(Transport.PRIMARY, status=status, body=body, error=error)


def secondary(status: int | None = None, body: Any = None, error: Exception | None = None) -> FakeTransport:
    return FakeTransport(
        Transport.SECONDARY, status=status, body=body, error=error, terminal=True
    )


def secondary_failure(message: str = "TypeError: Failed to fetch") -> FakeTransport:
    return secondary(error=TransportError(Transport.SECONDARY, message))


@pytest.fixture
def session_cache(tmp_path: Path) -> LoginSessionCache:
    return LoginSessionCache(tmp_path / ".shopcheck")
