"""Fixtures for the live storefront and users API suite."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from playwright.async_api import Page, async_playwright

from shopcheck.core.auth.sessions import LoginSessionCache
from shopcheck.core.executor import ResilientRequestExecutor, open_executor
from shopcheck.core.storefront.actions import login
from shopcheck.core.users_api import UsersApi
from shopcheck.utils.config import ShopcheckConfig, load_config

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def config() -> ShopcheckConfig:
    return load_config()


@pytest.fixture(scope="session")
def users_data() -> dict[str, Any]:
    return json.loads((FIXTURES_DIR / "users.json").read_text(encoding="utf-8"))


@pytest.fixture(scope="session")
def login_cache(tmp_path_factory: pytest.TempPathFactory) -> LoginSessionCache:
    """One cache per run, so the valid user logs in through the form once."""
    return LoginSessionCache(tmp_path_factory.mktemp("shopcheck"))


@pytest_asyncio.fixture
async def page(config: ShopcheckConfig) -> AsyncIterator[Page]:
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=config.headless)
        try:
            context = await browser.new_context()
            new_page = await context.new_page()
            new_page.set_default_timeout(config.navigation_timeout_ms)
            yield new_page
        finally:
            await browser.close()


@pytest_asyncio.fixture
async def logged_in_page(
    page: Page,
    config: ShopcheckConfig,
    users_data: dict[str, Any],
    login_cache: LoginSessionCache,
) -> Page:
    user = users_data["sauceDemo"]["validUser"]
    await login(
        page,
        config.base_url,
        user["username"],
        user["password"],
        cache=login_cache,
        timeout_ms=config.navigation_timeout_ms,
    )
    return page


@pytest_asyncio.fixture
async def executor(config: ShopcheckConfig) -> AsyncIterator[ResilientRequestExecutor]:
    async with open_executor(config) as ready:
        yield ready


@pytest.fixture
def users_api(executor: ResilientRequestExecutor, config: ShopcheckConfig) -> UsersApi:
    return UsersApi(executor, config.api_url)
