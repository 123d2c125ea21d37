"""Checks on the order of listed products."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def parse_prices(texts: Iterable[str]) -> list[float]:
    """Parse ``"$29.99"``-style labels into floats."""
    return [float(text.replace("$", "").strip()) for text in texts]


def is_sorted_asc(values: Sequence[float]) -> bool:
    return all(values[i - 1] <= values[i] for i in range(1, len(values)))


def is_sorted_desc(values: Sequence[float]) -> bool:
    return all(values[i - 1] >= values[i] for i in range(1, len(values)))


def sorted_names(names: Iterable[str], *, reverse: bool = False) -> list[str]:
    """Sort product names the way the storefront does (case-insensitive)."""
    return sorted(names, key=str.casefold, reverse=reverse)
