"""Tests for the shopcheck CLI."""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from shopcheck.cli.main import cli
from shopcheck.cli.playwright_errors import (
    PLAYWRIGHT_BROWSERS_MISSING_ERROR,
    PLAYWRIGHT_MISSING_ERROR,
    playwright_hint,
)
from shopcheck.core.auth.sessions import LoginSessionCache
from shopcheck.core.executor.engine import ResilientRequestExecutor
from shopcheck.utils.config import ENV_OVERRIDES
from tests.conftest import primary, secondary, secondary_failure

STATE = {"cookies": [{"name": "session-username", "value": "standard_user"}], "origins": []}


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    for var in ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def _patch_executor(*transports):
    """Patch the CLI's executor factory; returns the list of use_browser flags seen."""
    seen: list[bool] = []

    @asynccontextmanager
    async def fake_open_executor(config, *, use_browser=True):
        seen.append(use_browser)
        yield ResilientRequestExecutor(list(transports), fallback_statuses=config.fallback_statuses)

    return patch("shopcheck.cli.request.open_executor", fake_open_executor), seen


class TestRequestCommand:
    def test_primary_outcome_json(self):
        body = {"name": "morpheus", "job": "leader", "id": "1", "createdAt": "2024-01-01T00:00:00Z"}
        patcher, seen = _patch_executor(primary(201, body))
        runner = CliRunner()
        with patcher:
            result = runner.invoke(
                cli,
                [
                    "request",
                    "post",
                    "https://reqres.in/api/users",
                    "--body",
                    '{"name": "morpheus", "job": "leader"}',
                    "--expect",
                    "create",
                    "--quiet",
                ],
            )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["transport"] == "primary"
        assert payload["status"] == 201
        assert payload["body"] == body
        assert seen == [True]

    def test_no_browser_flag(self):
        patcher, seen = _patch_executor(primary(200, {"data": []}))
        with patcher:
            result = CliRunner().invoke(
                cli,
                ["request", "GET", "https://reqres.in/api/users?page=2", "--expect", "list", "--no-browser", "-q"],
            )
        assert result.exit_code == 0, result.output
        assert seen == [False]

    def test_invalid_body(self):
        patcher, _ = _patch_executor(primary(201, {}))
        with patcher:
            result = CliRunner().invoke(
                cli, ["request", "POST", "https://reqres.in/api/users", "--body", "[1, 2]", "--expect", "create"]
            )
        assert result.exit_code == 2
        assert "JSON object" in result.stderr

    def test_expect_is_required(self):
        result = CliRunner().invoke(cli, ["request", "GET", "https://reqres.in/api/users"])
        assert result.exit_code == 2

    def test_strict_exits_on_stub(self):
        patcher, _ = _patch_executor(primary(403), secondary_failure())
        with patcher:
            result = CliRunner().invoke(
                cli,
                ["request", "DELETE", "https://reqres.in/api/users/2", "--expect", "delete", "--strict", "-q"],
            )
        assert result.exit_code == 2
        assert json.loads(result.stdout)["transport"] == "stub"
        assert "result is a stub" in result.stderr


class TestUsersCommands:
    def test_create_degraded_to_stub(self):
        patcher, _ = _patch_executor(primary(403), secondary_failure())
        with patcher:
            result = CliRunner().invoke(cli, ["users", "create", "Alice", "Engineer"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["transport"] == "stub"
        assert payload["status"] == 201
        assert payload["body"]["name"] == "Alice"
        assert payload["body"]["id"] == "999"
        assert "Warning: create answered status 201 via stub" in result.stderr

    def test_update_via_secondary(self):
        body = {"name": "morpheus", "job": "zion resident", "updatedAt": "2024-01-01T00:00:00Z"}
        patcher, _ = _patch_executor(primary(403), secondary(200, body))
        with patcher:
            result = CliRunner().invoke(cli, ["users", "update", "2", "morpheus", "zion resident", "-q"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["transport"] == "secondary"
        assert payload["body"] == body

    def test_list_uses_page(self):
        transport = primary(200, {"page": 3, "data": []})
        patcher, _ = _patch_executor(transport)
        with patcher:
            result = CliRunner().invoke(cli, ["users", "list", "--page", "3", "-q"])

        assert result.exit_code == 0, result.output
        assert transport.calls[0].url == "https://reqres.in/api/users?page=3"

    def test_api_url_from_config_file(self, isolated_config: Path):
        (isolated_config / "shopcheck.yaml").write_text("api_url: http://localhost:9000\n")
        transport = primary(204, None)
        patcher, _ = _patch_executor(transport)
        with patcher:
            result = CliRunner().invoke(cli, ["users", "delete", "5", "-q"])

        assert result.exit_code == 0, result.output
        assert transport.calls[0].url == "http://localhost:9000/api/users/5"


class TestConfigErrors:
    def test_missing_explicit_config(self):
        result = CliRunner().invoke(cli, ["--config", "nope.yaml", "session", "list"])
        assert result.exit_code == 1
        assert "Config file not found" in result.stderr

    def test_invalid_config(self, isolated_config: Path):
        (isolated_config / "shopcheck.yaml").write_text("response_budget_ms: lots\n")
        result = CliRunner().invoke(cli, ["session", "list"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.stderr


class TestSessionCommands:
    def test_list_empty(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["--root", str(tmp_path / "state"), "session", "list"])
        assert result.exit_code == 0
        assert "No cached sessions found." in result.stdout

    def test_status_and_list(self, tmp_path: Path):
        root = tmp_path / "state"
        LoginSessionCache(root).save("sauce-login-standard_user-abc", STATE, username="standard_user", target_url="https://www.saucedemo.com")
        runner = CliRunner()

        listed = runner.invoke(cli, ["--root", str(root), "session", "list"])
        status = runner.invoke(cli, ["--root", str(root), "session", "status", "--key", "sauce-login-standard_user-abc"])

        assert "sauce-login-standard_user-abc  (ready)  user=standard_user" in listed.stdout
        assert status.exit_code == 0
        assert "Username: standard_user" in status.stdout
        assert "Storage state: present" in status.stdout

    def test_status_missing(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "session", "status", "--key", "missing"])
        assert result.exit_code == 1
        assert "not found" in result.stderr

    def test_status_rejects_unsafe_key(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "session", "status", "--key", "../etc"])
        assert result.exit_code == 1
        assert "Error:" in result.stderr

    def test_clear(self, tmp_path: Path):
        cache = LoginSessionCache(tmp_path)
        cache.save("a", STATE, username="u", target_url="t")
        cache.save("b", STATE, username="u", target_url="t")
        runner = CliRunner()

        one = runner.invoke(cli, ["--root", str(tmp_path), "session", "clear", "--key", "a"])
        rest = runner.invoke(cli, ["--root", str(tmp_path), "session", "clear", "--all"])
        neither = runner.invoke(cli, ["--root", str(tmp_path), "session", "clear"])

        assert "Session 'a' cleared." in one.stdout
        assert "Cleared 1 session(s)." in rest.stdout
        assert neither.exit_code == 1

    def test_login_reports_missing_browsers(self, tmp_path: Path):
        p = MagicMock()
        p.chromium.launch = AsyncMock(side_effect=Exception("Executable doesn't exist at /ms-playwright/chromium"))
        manager = MagicMock()
        manager.__aenter__.return_value = p
        manager.__aexit__.return_value = False

        with patch("playwright.async_api.async_playwright", MagicMock(return_value=manager)):
            result = CliRunner().invoke(
                cli,
                ["--root", str(tmp_path), "session", "login", "--username", "standard_user", "--password", "secret_sauce"],
            )

        assert result.exit_code == 1
        assert "playwright install chromium" in result.stderr

    def test_login_other_failure_shows_traceback_when_verbose(self, tmp_path: Path):
        p = MagicMock()
        p.chromium.launch = AsyncMock(side_effect=RuntimeError("boom"))
        manager = MagicMock()
        manager.__aenter__.return_value = p
        manager.__aexit__.return_value = False

        with patch("playwright.async_api.async_playwright", MagicMock(return_value=manager)):
            result = CliRunner().invoke(
                cli,
                ["-v", "--root", str(tmp_path), "session", "login", "--username", "u", "--password", "p"],
            )

        assert result.exit_code == 1
        assert "Error during login: boom" in result.stderr
        assert "Traceback (most recent call last):" in result.stderr

    def test_list_survives_corrupt_metadata(self, tmp_path: Path):
        LoginSessionCache(tmp_path).save("k1", STATE, username="standard_user", target_url="t")
        (tmp_path / "sessions" / "k1" / "meta.json").write_text("{not json")

        result = CliRunner().invoke(cli, ["--root", str(tmp_path), "session", "list"])

        assert result.exit_code == 0, result.output
        assert "k1  (ready)  user=?" in result.stdout


class TestDoctor:
    def test_missing_playwright(self):
        with patch("shopcheck.cli.doctor.has_playwright_dependency", return_value=False):
            result = CliRunner().invoke(cli, ["doctor"])
        assert result.exit_code == 1
        assert "Playwright not installed" in result.stderr
        assert "Doctor failed." in result.stderr

    def test_passes_when_chromium_launches(self):
        with (
            patch("shopcheck.cli.doctor.has_playwright_dependency", return_value=True),
            patch("shopcheck.cli.doctor._launch_chromium", AsyncMock()),
        ):
            result = CliRunner().invoke(cli, ["-v", "doctor"])
        assert result.exit_code == 0, result.output
        assert "Doctor check passed." in result.stderr
        assert "Fallback statuses: [403]" in result.stderr


class TestPlaywrightHint:
    def test_import_error(self):
        assert playwright_hint(ImportError("No module named playwright")) == PLAYWRIGHT_MISSING_ERROR

    def test_missing_executable(self):
        exc = RuntimeError("BrowserType.launch: Executable doesn't exist at /root/.cache/ms-playwright")
        assert playwright_hint(exc) == PLAYWRIGHT_BROWSERS_MISSING_ERROR

    def test_install_command_in_message(self):
        exc = RuntimeError("Please run the following command: playwright install chromium")
        assert playwright_hint(exc) == PLAYWRIGHT_BROWSERS_MISSING_ERROR

    def test_unrelated_failure_has_no_hint(self):
        assert playwright_hint(RuntimeError("Timeout 30000ms exceeded")) is None
