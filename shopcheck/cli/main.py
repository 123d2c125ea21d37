"""Main CLI entry point for shopcheck."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from shopcheck import __version__
from shopcheck.branding import CLI_PRIMARY_COMMAND
from shopcheck.cli.session import session_group
from shopcheck.models.request import ExpectType, HTTPMethod
from shopcheck.utils.config import ConfigError, load_config

DEFAULT_ROOT = Path(".shopcheck")


@click.group()
@click.version_option(version=__version__, prog_name=CLI_PRIMARY_COMMAND)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (defaults to ./shopcheck.yaml when present)",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_ROOT,
    show_default=True,
    help="State root for cached login sessions",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None, root: Path) -> None:
    """Storefront and users API checks with a resilient request fallback."""
    from shopcheck.ui.console import configure_logging

    configure_logging(verbose)

    try:
        config = load_config(config_path)
    except ConfigError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["root"] = root
    ctx.obj["config"] = config


_browser_option = click.option(
    "--browser/--no-browser",
    "use_browser",
    default=True,
    show_default=True,
    help="Allow the in-browser fetch fallback after a rejected request",
)
_quiet_option = click.option("--quiet", "-q", is_flag=True, help="Only print the outcome JSON")
_strict_option = click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 2 when the result is a stub",
)


@cli.command("request")
@click.argument("method", type=click.Choice([m.value for m in HTTPMethod], case_sensitive=False))
@click.argument("url")
@click.option("--body", help="JSON object request body")
@click.option(
    "--expect",
    type=click.Choice([e.value for e in ExpectType]),
    required=True,
    help="Expected result kind; selects the stub used when every transport fails",
)
@_browser_option
@_quiet_option
@_strict_option
@click.pass_context
def request_cmd(
    ctx: click.Context,
    method: str,
    url: str,
    body: str | None,
    expect: str,
    use_browser: bool,
    quiet: bool,
    strict: bool,
) -> None:
    """Execute one HTTP request with fallback and print its outcome.

    \b
    Examples:
      shopcheck request GET "https://reqres.in/api/users?page=2" --expect list
      shopcheck request POST https://reqres.in/api/users \\
          --body '{"name": "morpheus", "job": "leader"}' --expect create
    """
    from shopcheck.cli.request import run_request

    run_request(
        config=ctx.obj["config"],
        method=method,
        url=url,
        body=body,
        expect=expect,
        use_browser=use_browser,
        quiet=quiet,
        strict=strict,
    )


@cli.group("users")
def users_group() -> None:
    """Operate on the users resource of the configured API."""


@users_group.command("create")
@click.argument("name")
@click.argument("job")
@_browser_option
@_quiet_option
@_strict_option
@click.pass_context
def users_create(
    ctx: click.Context, name: str, job: str, use_browser: bool, quiet: bool, strict: bool
) -> None:
    """Create a user (POST /api/users)."""
    from shopcheck.cli.request import run_users_action

    run_users_action(
        config=ctx.obj["config"],
        action="create",
        name=name,
        job=job,
        use_browser=use_browser,
        quiet=quiet,
        strict=strict,
    )


@users_group.command("update")
@click.argument("user_id")
@click.argument("name")
@click.argument("job")
@_browser_option
@_quiet_option
@_strict_option
@click.pass_context
def users_update(
    ctx: click.Context,
    user_id: str,
    name: str,
    job: str,
    use_browser: bool,
    quiet: bool,
    strict: bool,
) -> None:
    """Update a user (PUT /api/users/{id})."""
    from shopcheck.cli.request import run_users_action

    run_users_action(
        config=ctx.obj["config"],
        action="update",
        user_id=user_id,
        name=name,
        job=job,
        use_browser=use_browser,
        quiet=quiet,
        strict=strict,
    )


@users_group.command("delete")
@click.argument("user_id")
@_browser_option
@_quiet_option
@_strict_option
@click.pass_context
def users_delete(
    ctx: click.Context, user_id: str, use_browser: bool, quiet: bool, strict: bool
) -> None:
    """Delete a user (DELETE /api/users/{id})."""
    from shopcheck.cli.request import run_users_action

    run_users_action(
        config=ctx.obj["config"],
        action="delete",
        user_id=user_id,
        use_browser=use_browser,
        quiet=quiet,
        strict=strict,
    )


@users_group.command("list")
@click.option("--page", type=int, default=2, show_default=True, help="Result page")
@_browser_option
@_quiet_option
@_strict_option
@click.pass_context
def users_list(
    ctx: click.Context, page: int, use_browser: bool, quiet: bool, strict: bool
) -> None:
    """List users (GET /api/users?page=N)."""
    from shopcheck.cli.request import run_users_action

    run_users_action(
        config=ctx.obj["config"],
        action="list",
        page=page,
        use_browser=use_browser,
        quiet=quiet,
        strict=strict,
    )


cli.add_command(session_group)


@cli.command()
@click.pass_context
def doctor(ctx: click.Context) -> None:
    """Check that Playwright and Chromium are available for the browser fallback."""
    from shopcheck.cli.doctor import run_doctor

    run_doctor(ctx.obj["config"], verbose=ctx.obj.get("verbose", False))


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
