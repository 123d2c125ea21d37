"""Canned responses used when no real transport produced a result.

A stub proves nothing about the backend. It only keeps downstream assertions
on response shape runnable when the target refuses automated clients. Each
call builds a fresh body, so timestamps reflect call time.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from shopcheck.models.request import ExpectType, TransportResponse

STUB_USER_ID = "999"

STUB_LIST_USER: dict[str, Any] = {
    "id": 1,
    "email": "stub.user@reqres.in",
    "first_name": "Stub",
    "last_name": "User",
    "avatar": "https://reqres.in/img/faces/1-image.jpg",
}


def _now_iso() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def _echo(body: dict[str, Any] | None, key: str, default: str) -> Any:
    """Return ``body[key]`` when present and truthy, else *default*."""
    if body and body.get(key):
        return body[key]
    return default


def _create(body: dict[str, Any] | None) -> TransportResponse:
    return TransportResponse(
        status=201,
        body={
            "name": _echo(body, "name", "Stub User"),
            "job": _echo(body, "job", "Stub Job"),
            "id": STUB_USER_ID,
            "createdAt": _now_iso(),
        },
    )


def _update(body: dict[str, Any] | None) -> TransportResponse:
    return TransportResponse(
        status=200,
        body={
            "name": _echo(body, "name", "Stub User Updated"),
            "job": _echo(body, "job", "Stub Job Updated"),
            "updatedAt": _now_iso(),
        },
    )


def _delete(body: dict[str, Any] | None) -> TransportResponse:  # noqa: ARG001
    return TransportResponse(status=204, body=None)


def _list(body: dict[str, Any] | None) -> TransportResponse:  # noqa: ARG001
    return TransportResponse(
        status=200,
        body={"page": 2, "data": [dict(STUB_LIST_USER)]},
    )


STUB_TEMPLATES: dict[ExpectType, Callable[[dict[str, Any] | None], TransportResponse]] = {
    ExpectType.CREATE: _create,
    ExpectType.UPDATE: _update,
    ExpectType.DELETE: _delete,
    ExpectType.LIST: _list,
}


def build_stub_response(
    expect_type: ExpectType,
    body: dict[str, Any] | None = None,
) -> TransportResponse:
    """Build the canned response for *expect_type*, echoing request fields."""
    return STUB_TEMPLATES[expect_type](body)
