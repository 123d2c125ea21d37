"""Request and outcome models for the resilient request executor."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HTTPMethod(StrEnum):
    """HTTP methods the executor issues."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ExpectType(StrEnum):
    """Kind of result the caller expects; selects the stub template."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    LIST = "list"


class Transport(StrEnum):
    """Tier that produced an outcome."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    STUB = "stub"


class RequestSpec(BaseModel):
    """A single HTTP call to execute. Built per call site and never mutated."""

    model_config = ConfigDict(frozen=True)

    method: HTTPMethod
    url: str
    body: dict[str, Any] | None = None
    expect_type: ExpectType
    headers: dict[str, str] = Field(default_factory=dict)


class TransportResponse(BaseModel):
    """Status and parsed body as normalized by a transport."""

    status: int
    body: Any = None


class Outcome(BaseModel):
    """The single result produced for a RequestSpec."""

    transport: Transport
    status: int
    body: Any = None
    duration_ms: int = Field(default=0, ge=0)

    @property
    def degraded(self) -> bool:
        """True when the result did not come from the primary transport."""
        return self.transport != Transport.PRIMARY

    def describe(self) -> str:
        """Short label for assertion messages, e.g. ``status 201 via primary``."""
        return f"status {self.status} via {self.transport.value}"

    def within_budget(self, budget_ms: int) -> bool:
        """True when the call finished strictly under *budget_ms*."""
        return self.duration_ms < budget_ms
