"""Environment-driven configuration for the Classavo E2E harness."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field


def get_logger(name: str) -> logging.Logger:
    """Create a namespaced logger for a harness component."""
    return logging.getLogger(f"classavo-e2e.{name}")


DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_COMMAND_TIMEOUT_MS = 10_000
DEFAULT_LOADING_TIMEOUT_MS = 5_000
DEFAULT_PAGE_LOAD_TIMEOUT_MS = 30_000
DEFAULT_SETTLE_MS = 300
DEFAULT_VIEWPORT = {"width": 1280, "height": 720}

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    """Return a boolean environment toggle ("true"/"1"/"yes"/"on" are truthy)."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Return an integer environment value, rejecting garbage loudly."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass
class HarnessConfig:
    """Settings shared by fixtures, commands and flows."""

    base_url: str = DEFAULT_BASE_URL
    headless: bool = True
    browser: str = "chromium"
    slow_mo: int = 0
    command_timeout_ms: int = DEFAULT_COMMAND_TIMEOUT_MS
    loading_timeout_ms: int = DEFAULT_LOADING_TIMEOUT_MS
    page_load_timeout_ms: int = DEFAULT_PAGE_LOAD_TIMEOUT_MS
    settle_ms: int = DEFAULT_SETTLE_MS
    run_security_tests: bool = False
    security_sample_only: bool = False
    viewport: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_VIEWPORT))

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        if self.browser not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser {self.browser!r}; expected one of {SUPPORTED_BROWSERS}"
            )


def load_config() -> HarnessConfig:
    """Build a HarnessConfig from the current environment."""
    return HarnessConfig(
        base_url=os.environ.get("CLASSAVO_BASE_URL", "").strip() or DEFAULT_BASE_URL,
        headless=env_flag("PLAYWRIGHT_HEADLESS", default=True),
        browser=os.environ.get("PLAYWRIGHT_BROWSER", "chromium").strip().lower() or "chromium",
        slow_mo=env_int("CLASSAVO_SLOW_MO", 0),
        command_timeout_ms=env_int("CLASSAVO_COMMAND_TIMEOUT_MS", DEFAULT_COMMAND_TIMEOUT_MS),
        loading_timeout_ms=env_int("CLASSAVO_LOADING_TIMEOUT_MS", DEFAULT_LOADING_TIMEOUT_MS),
        page_load_timeout_ms=env_int("CLASSAVO_PAGE_LOAD_TIMEOUT_MS", DEFAULT_PAGE_LOAD_TIMEOUT_MS),
        settle_ms=env_int("CLASSAVO_SETTLE_MS", DEFAULT_SETTLE_MS),
        run_security_tests=env_flag("RUN_SECURITY_TESTS"),
        security_sample_only=env_flag("SECURITY_SAMPLE_ONLY"),
    )
