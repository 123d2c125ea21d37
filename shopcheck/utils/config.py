"""Explicit configuration for shopcheck components.

Values come from an optional YAML file, then ``SHOPCHECK_*`` environment
variables, then keyword overrides. Components receive the resolved
``ShopcheckConfig``; nothing reads the environment after load.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

DEFAULT_CONFIG_PATH = Path("shopcheck.yaml")

ENV_OVERRIDES: dict[str, str] = {
    "SHOPCHECK_BASE_URL": "base_url",
    "SHOPCHECK_API_URL": "api_url",
    "SHOPCHECK_API_KEY": "api_key",
    "SHOPCHECK_HEADLESS": "headless",
    "SHOPCHECK_TIMEOUT": "request_timeout_s",
}


class ConfigError(ValueError):
    """Configuration could not be read or is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ShopcheckConfig(BaseModel):
    """Resolved settings shared by the CLI, the executor and the e2e suite."""

    base_url: str = "https://www.saucedemo.com"
    api_url: str = "https://reqres.in"
    api_key: str | None = None
    api_headers: dict[str, str] = Field(
        default_factory=lambda: {
            "Content-Type": "application/json",
            "accept": "application/json",
        }
    )
    fallback_statuses: list[int] = Field(default_factory=lambda: [403])
    request_timeout_s: float = 30.0
    response_budget_ms: int = 2000
    headless: bool = True
    navigation_timeout_ms: int = 15000

    def request_headers(self) -> dict[str, str]:
        """Default headers for API calls, including the API key when set."""
        headers = dict(self.api_headers)
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    def api_endpoint(self, path: str) -> str:
        return f"{self.api_url.rstrip('/')}/{path.lstrip('/')}"

    def page_url(self, path: str = "/") -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


def load_config(
    path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    **overrides: Any,
) -> ShopcheckConfig:
    """Resolve configuration from file, environment and explicit overrides.

    A missing file is an error only when *path* was given explicitly.
    """
    payload: dict[str, Any] = {}

    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if config_path.exists():
        payload.update(_read_yaml(config_path))
    elif path is not None:
        raise ConfigError(f"Config file not found: {config_path}")

    environ = os.environ if env is None else env
    for var, field in ENV_OVERRIDES.items():
        value = environ.get(var)
        if value:
            payload[field] = value

    payload.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ShopcheckConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    return loaded
