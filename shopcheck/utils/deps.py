"""Dependency checks for runtime CLI paths."""

from __future__ import annotations

import importlib.util


def has_playwright_dependency() -> bool:
    """Return True when the `playwright` package is import-discoverable."""
    try:
        spec = importlib.util.find_spec("playwright")
    except (ImportError, ValueError):
        return False
    return spec is not None
