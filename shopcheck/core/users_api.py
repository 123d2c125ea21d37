"""Users resource helpers on top of the resilient executor."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from shopcheck.core.executor.engine import ResilientRequestExecutor
from shopcheck.models.request import ExpectType, HTTPMethod, Outcome, RequestSpec

CREATE_KEYS = ("name", "job", "id", "createdAt")
UPDATE_KEYS = ("name", "job", "updatedAt")
LIST_USER_KEYS = ("id", "email", "first_name", "last_name", "avatar")

# Used when a create outcome carries no id to update.
FALLBACK_USER_ID = "2"


class UsersApi:
    """Create, update, delete and list users through an executor."""

    def __init__(self, executor: ResilientRequestExecutor, api_url: str) -> None:
        self.executor = executor
        self.api_url = api_url.rstrip("/")

    def users_url(self, user_id: str | int | None = None) -> str:
        if user_id is None:
            return f"{self.api_url}/api/users"
        return f"{self.api_url}/api/users/{user_id}"

    async def create_user(self, name: str, job: str) -> Outcome:
        return await self.executor.execute(RequestSpec(
            method=HTTPMethod.POST,
            url=self.users_url(),
            body={"name": name, "job": job},
            expect_type=ExpectType.CREATE,
        ))

    async def update_user(self, user_id: str | int, name: str, job: str) -> Outcome:
        return await self.executor.execute(RequestSpec(
            method=HTTPMethod.PUT,
            url=self.users_url(user_id),
            body={"name": name, "job": job},
            expect_type=ExpectType.UPDATE,
        ))

    async def delete_user(self, user_id: str | int) -> Outcome:
        return await self.executor.execute(RequestSpec(
            method=HTTPMethod.DELETE,
            url=self.users_url(user_id),
            expect_type=ExpectType.DELETE,
        ))

    async def list_users(self, page: int = 2) -> Outcome:
        return await self.executor.execute(RequestSpec(
            method=HTTPMethod.GET,
            url=f"{self.users_url()}?page={page}",
            expect_type=ExpectType.LIST,
        ))


def created_user_id(outcome: Outcome) -> str:
    """Return the id from a create outcome, or the fallback id."""
    body = outcome.body
    if isinstance(body, dict) and body.get("id"):
        return str(body["id"])
    return FALLBACK_USER_ID


def missing_keys(body: Any, keys: Iterable[str]) -> list[str]:
    """Return the keys absent from *body* (all of them when it is not a mapping)."""
    if not isinstance(body, dict):
        return list(keys)
    return [key for key in keys if key not in body]


def first_listed_user(outcome: Outcome) -> dict[str, Any] | None:
    body = outcome.body
    if not isinstance(body, dict):
        return None
    data = body.get("data")
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        return None
    return data[0]
