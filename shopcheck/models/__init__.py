"""Pydantic data models for shopcheck."""

from shopcheck.models.request import (
    ExpectType,
    HTTPMethod,
    Outcome,
    RequestSpec,
    Transport,
    TransportResponse,
)

__all__ = [
    "ExpectType",
    "HTTPMethod",
    "Outcome",
    "RequestSpec",
    "Transport",
    "TransportResponse",
]
