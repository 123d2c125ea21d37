"""Page actions on the storefront, shared by the e2e suite and the CLI."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from playwright.async_api import expect

from shopcheck.core.auth.sessions import LoginSessionCache, session_key
from shopcheck.core.storefront import selectors as sel
from shopcheck.core.storefront.ordering import parse_prices

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 15000


@dataclass(frozen=True)
class CheckoutResult:
    """How a checkout attempt ended."""

    completed: bool
    header: str | None = None
    error: str | None = None


def current_path(page: Any) -> str:
    return urlparse(page.url).path or "/"


def _join(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


async def perform_login(page: Any, base_url: str, username: str, password: str) -> None:
    """Fill and submit the login form."""
    await page.goto(_join(base_url, "/"))
    await page.locator(sel.USERNAME_INPUT).fill(username)
    await page.locator(sel.PASSWORD_INPUT).fill(password)
    await page.locator(sel.LOGIN_BUTTON).click()


async def open_inventory(page: Any, base_url: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
    """Open the inventory page, accepting either ``/inventory.html`` or ``/inventory``."""
    await page.goto(_join(base_url, "/inventory.html"))
    if not re.match(sel.INVENTORY_PATH_RE, current_path(page)):
        await page.goto(_join(base_url, "/inventory"))
    await expect(page.locator(sel.INVENTORY_LIST)).to_be_visible(timeout=timeout_ms)


async def login(
    page: Any,
    base_url: str,
    username: str,
    password: str,
    *,
    cache: LoginSessionCache | None = None,
    use_session: bool = True,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> bool:
    """Log in, reusing a cached session when allowed.

    Without a session (``use_session=False`` or no cache) this only submits
    the form, so callers can assert on login errors. With a session the page
    ends on the inventory list. Returns True when a cached session was
    restored.
    """
    if not use_session or cache is None:
        await perform_login(page, base_url, username, password)
        return False

    key = session_key(username, password)
    state = cache.load(key)
    if state and state.get("cookies"):
        await page.context.add_cookies(state["cookies"])
        await page.goto(_join(base_url, "/inventory.html"))
        if re.match(sel.INVENTORY_PATH_RE, current_path(page)):
            cache.touch(key)
            await expect(page.locator(sel.INVENTORY_LIST)).to_be_visible(timeout=timeout_ms)
            return True
        logger.info("Cached session %s was rejected; logging in again", key)
        cache.clear(key)
        await page.context.clear_cookies()

    await perform_login(page, base_url, username, password)
    await page.wait_for_url(re.compile(r"/inventory"), timeout=timeout_ms)
    # Only cookies are cached; localStorage holds the cart, which must not
    # carry over between logins.
    cache.save(
        key,
        {"cookies": await page.context.cookies(), "origins": []},
        username=username,
        target_url=base_url,
    )
    await open_inventory(page, base_url, timeout_ms)
    return False


async def logout(page: Any) -> None:
    await page.locator(sel.MENU_BUTTON).click()
    await page.locator(sel.LOGOUT_LINK).click()
    await expect(page.locator(sel.LOGIN_BUTTON)).to_be_visible()


async def reset_app_state(page: Any) -> None:
    """Use the side menu's Reset App State link."""
    await page.locator(sel.MENU_BUTTON).click()
    reset = page.locator(sel.RESET_LINK)
    await expect(reset).to_be_visible(timeout=10000)
    await reset.click()


async def add_to_cart(page: Any, product: str) -> None:
    await page.locator(sel.add_to_cart_button(product)).click()


async def remove_from_cart(page: Any, product: str) -> None:
    await page.locator(sel.remove_button(product)).click()


async def add_backpack_to_cart(page: Any) -> None:
    """Add the backpack from the inventory page; the badge must read 1."""
    button = page.locator(sel.add_to_cart_button(sel.BACKPACK))
    await expect(button).to_be_visible()
    await button.click()
    await expect(page.locator(sel.CART_BADGE)).to_contain_text("1")


async def cart_badge_count(page: Any) -> int:
    badge = page.locator(sel.CART_BADGE)
    if await badge.count() == 0:
        return 0
    return int((await badge.inner_text()).strip())


async def select_sort(page: Any, value: str) -> None:
    await page.locator(sel.SORT_SELECT).select_option(value)


async def item_names(page: Any) -> list[str]:
    return [name.strip() for name in await page.locator(sel.ITEM_NAME).all_inner_texts()]


async def item_prices(page: Any) -> list[float]:
    return parse_prices(await page.locator(sel.ITEM_PRICE).all_inner_texts())


async def checkout(
    page: Any,
    first_name: str | None,
    last_name: str | None,
    zip_code: str | None,
) -> CheckoutResult:
    """Check out the current cart.

    Empty fields are left blank; the form then shows a validation error and
    the result carries its text instead of completing.
    """
    await page.locator(sel.CART_LINK).click()
    await expect(page).to_have_url(re.compile(r"/cart\.html"))
    await page.locator(sel.CHECKOUT_BUTTON).click()
    await expect(page).to_have_url(re.compile(r"/checkout-step-one\.html"))

    if first_name:
        await page.locator(sel.FIRST_NAME_INPUT).fill(first_name)
    if last_name:
        await page.locator(sel.LAST_NAME_INPUT).fill(last_name)
    if zip_code:
        await page.locator(sel.POSTAL_CODE_INPUT).fill(zip_code)
    await page.locator(sel.CONTINUE_BUTTON).click()

    if not (first_name and last_name and zip_code):
        error = page.locator(sel.ERROR_MESSAGE)
        await expect(error).to_be_visible()
        return CheckoutResult(completed=False, error=(await error.inner_text()).strip())

    await expect(page).to_have_url(re.compile(r"/checkout-step-two\.html"))
    await page.locator(sel.FINISH_BUTTON).click()
    await expect(page).to_have_url(re.compile(r"/checkout-complete\.html"))
    header = page.locator(sel.COMPLETE_HEADER)
    await expect(header).to_contain_text("Thank you for your order!")
    return CheckoutResult(completed=True, header=(await header.inner_text()).strip())
