"""Request and users command implementations."""

from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from typing import Any

import click

from shopcheck.core.executor import ResilientRequestExecutor, open_executor
from shopcheck.core.users_api import UsersApi
from shopcheck.models.request import ExpectType, HTTPMethod, Outcome, RequestSpec, Transport
from shopcheck.ui.console import render_outcome
from shopcheck.utils.config import ShopcheckConfig


def parse_body(raw: str | None) -> dict[str, Any] | None:
    """Parse a ``--body`` value; it must be a JSON object."""
    if raw is None:
        return None
    try:
        loaded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"body is not valid JSON: {exc}", param_hint="--body") from exc
    if not isinstance(loaded, dict):
        raise click.BadParameter("body must be a JSON object", param_hint="--body")
    return loaded


def emit_outcome(outcome: Outcome, *, quiet: bool = False, strict: bool = False) -> None:
    """Print the outcome as JSON on stdout and a summary on stderr.

    With *strict*, a stub outcome exits with status 2 after printing.
    """
    if not quiet:
        render_outcome(outcome)
    click.echo(outcome.model_dump_json(indent=2))
    if strict and outcome.transport == Transport.STUB:
        click.echo("Error: no transport reached the backend; result is a stub", err=True)
        sys.exit(2)


def _execute(
    config: ShopcheckConfig,
    use_browser: bool,
    call: Callable[[ResilientRequestExecutor], Awaitable[Outcome]],
) -> Outcome:
    async def _run() -> Outcome:
        async with open_executor(config, use_browser=use_browser) as executor:
            return await call(executor)

    return asyncio.run(_run())


def run_request(
    *,
    config: ShopcheckConfig,
    method: str,
    url: str,
    body: str | None,
    expect: str,
    use_browser: bool,
    quiet: bool = False,
    strict: bool = False,
) -> None:
    """Execute a single request through the fallback chain."""
    spec = RequestSpec(
        method=HTTPMethod(method.upper()),
        url=url,
        body=parse_body(body),
        expect_type=ExpectType(expect),
    )
    outcome = _execute(config, use_browser, lambda executor: executor.execute(spec))
    emit_outcome(outcome, quiet=quiet, strict=strict)


def run_users_action(
    *,
    config: ShopcheckConfig,
    action: str,
    use_browser: bool,
    user_id: str | None = None,
    name: str | None = None,
    job: str | None = None,
    page: int = 2,
    quiet: bool = False,
    strict: bool = False,
) -> None:
    """Run one users API operation and print its outcome."""

    async def call(executor: ResilientRequestExecutor) -> Outcome:
        api = UsersApi(executor, config.api_url)
        if action == "create":
            return await api.create_user(name or "", job or "")
        if action == "update":
            return await api.update_user(user_id or "", name or "", job or "")
        if action == "delete":
            return await api.delete_user(user_id or "")
        return await api.list_users(page=page)

    outcome = _execute(config, use_browser, call)
    if outcome.degraded and not quiet:
        click.echo(f"Warning: {action} answered {outcome.describe()}", err=True)
    emit_outcome(outcome, quiet=quiet, strict=strict)
