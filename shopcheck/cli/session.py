"""Login session CLI commands."""

from __future__ import annotations

import asyncio
import sys
import traceback

import click

from shopcheck.cli.playwright_errors import playwright_hint
from shopcheck.core.auth.sessions import LoginSessionCache, session_key
from shopcheck.utils.config import ShopcheckConfig


def _cache(ctx: click.Context) -> LoginSessionCache:
    return LoginSessionCache(ctx.obj["root"])


@click.group("session")
def session_group() -> None:
    """Manage cached storefront login sessions."""


@session_group.command("login")
@click.option("--username", required=True, help="Storefront username")
@click.option(
    "--password",
    required=True,
    prompt=True,
    hide_input=True,
    envvar="SHOPCHECK_PASSWORD",
    help="Storefront password (or SHOPCHECK_PASSWORD)",
)
@click.pass_context
def session_login(ctx: click.Context, username: str, password: str) -> None:
    """Log in to the storefront and cache the session."""
    config: ShopcheckConfig = ctx.obj["config"]
    cache = _cache(ctx)

    async def _do_login() -> bool:
        from playwright.async_api import async_playwright

        from shopcheck.core.storefront.actions import login

        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=config.headless)
            try:
                context = await browser.new_context()
                page = await context.new_page()
                return await login(
                    page,
                    config.base_url,
                    username,
                    password,
                    cache=cache,
                    timeout_ms=config.navigation_timeout_ms,
                )
            finally:
                await browser.close()

    try:
        restored = asyncio.run(_do_login())
    except KeyboardInterrupt:
        click.echo("\nLogin cancelled.")
        sys.exit(0)
    except Exception as exc:
        hint = playwright_hint(exc)
        click.echo(hint or f"Error during login: {exc}", err=True)
        if hint is None and ctx.obj.get("verbose", False):
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        sys.exit(1)

    key = session_key(username, password)
    if restored:
        click.echo(f"Session '{key}' is still valid.")
    else:
        click.echo(f"Session '{key}' saved.")


@session_group.command("status")
@click.option("--key", required=True, help="Session key (see `shopcheck session list`)")
@click.pass_context
def session_status(ctx: click.Context, key: str) -> None:
    """Show the status of a cached session."""
    cache = _cache(ctx)
    try:
        meta = cache.get_meta(key)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    if meta is None:
        click.echo(f"Session '{key}' not found.", err=True)
        sys.exit(1)

    click.echo(f"Session: {key}")
    click.echo(f"  Username: {meta.get('username', 'unknown')}")
    click.echo(f"  Target URL: {meta.get('target_url', 'unknown')}")
    click.echo(f"  Created: {meta.get('created_at', 'unknown')}")
    click.echo(f"  Last used: {meta.get('last_used_at', 'never')}")
    click.echo(f"  Storage state: {'present' if cache.exists(key) else 'missing'}")


@session_group.command("list")
@click.pass_context
def session_list(ctx: click.Context) -> None:
    """List cached sessions."""
    sessions = _cache(ctx).list_sessions()
    if not sessions:
        click.echo("No cached sessions found.")
        return

    for entry in sessions:
        status = "ready" if entry.get("has_storage_state") else "incomplete"
        click.echo(f"  {entry['key']}  ({status})  user={entry.get('username', '?')}")


@session_group.command("clear")
@click.option("--key", help="Session key to delete")
@click.option("--all", "clear_all", is_flag=True, help="Delete every cached session")
@click.pass_context
def session_clear(ctx: click.Context, key: str | None, clear_all: bool) -> None:
    """Delete one cached session, or all of them."""
    cache = _cache(ctx)
    if clear_all:
        removed = cache.clear_all()
        click.echo(f"Cleared {removed} session(s).")
        return
    if not key:
        click.echo("Error: pass --key or --all", err=True)
        sys.exit(1)
    try:
        cleared = cache.clear(key)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    if cleared:
        click.echo(f"Session '{key}' cleared.")
    else:
        click.echo(f"Session '{key}' not found.", err=True)
        sys.exit(1)
