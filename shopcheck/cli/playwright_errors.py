"""Install hints for Playwright failures seen by CLI commands."""

from __future__ import annotations

PLAYWRIGHT_MISSING_ERROR = "Error: Playwright not installed. Install with: pip install playwright"
PLAYWRIGHT_BROWSERS_MISSING_ERROR = (
    "Error: Playwright browsers not installed. Run: playwright install chromium"
)


def playwright_hint(exc: BaseException) -> str | None:
    """Return the one-line install hint for *exc*, or None if it is not an install problem."""
    if isinstance(exc, ImportError):
        return PLAYWRIGHT_MISSING_ERROR

    message = str(exc).lower()
    if "executable doesn't exist" in message:
        return PLAYWRIGHT_BROWSERS_MISSING_ERROR
    if "playwright install" in message and ("chromium" in message or "browser" in message):
        return PLAYWRIGHT_BROWSERS_MISSING_ERROR
    return None
