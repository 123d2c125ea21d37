"""Shared Rich console, log handler setup and outcome rendering.

Human-readable output goes to stderr via ``err_console``; stdout is kept for
machine-readable results.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

from shopcheck.models.request import Outcome, Transport

SHOPCHECK_THEME = Theme(
    {
        "info": "cyan",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "heading": "bold cyan",
        "muted": "dim",
        "transport.primary": "green",
        "transport.secondary": "yellow",
        "transport.stub": "bold red",
    }
)

err_console = Console(stderr=True, theme=SHOPCHECK_THEME)


def configure_logging(verbose: bool, *, console: Console | None = None) -> None:
    """Route ``shopcheck`` loggers to the stderr console."""
    handler = RichHandler(console=console or err_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root_logger = logging.getLogger("shopcheck")
    root_logger.handlers = [handler]
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root_logger.propagate = False


def outcome_table(outcome: Outcome, *, title: str = "Outcome") -> Table:
    """Build a Rich table summarizing an outcome."""
    style = f"transport.{outcome.transport.value}"
    table = Table(title=title, show_header=False, pad_edge=False)
    table.add_column("Field", style="muted")
    table.add_column("Value")
    table.add_row("transport", f"[{style}]{outcome.transport.value}[/{style}]")
    table.add_row("status", str(outcome.status))
    table.add_row("duration", f"{outcome.duration_ms} ms")
    if outcome.transport == Transport.STUB:
        table.add_row("note", "[warning]synthetic response; backend not verified[/warning]")
    return table


def render_outcome(outcome: Outcome, *, console: Console | None = None) -> None:
    (console or err_console).print(outcome_table(outcome))
