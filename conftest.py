"""Root conftest: command-line switches and fixtures shared by all test layers."""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from classavo_e2e.datasets import DataProvider
from classavo_e2e.utils.config import HarnessConfig, load_config
from classavo_e2e.utils.logging_utils import configure_json_logging

HARNESS_ENV_VARS = (
    "CLASSAVO_BASE_URL",
    "PLAYWRIGHT_HEADLESS",
    "PLAYWRIGHT_BROWSER",
    "CLASSAVO_SLOW_MO",
    "CLASSAVO_COMMAND_TIMEOUT_MS",
    "CLASSAVO_LOADING_TIMEOUT_MS",
    "CLASSAVO_PAGE_LOAD_TIMEOUT_MS",
    "CLASSAVO_SETTLE_MS",
    "RUN_SECURITY_TESTS",
    "SECURITY_SAMPLE_ONLY",
)


def pytest_addoption(parser):
    group = parser.getgroup("classavo", "Classavo E2E harness")
    group.addoption(
        "--run-security",
        action="store_true",
        default=False,
        help="Run the security fuzzing suite (same as RUN_SECURITY_TESTS=true).",
    )
    group.addoption(
        "--security-sample",
        action="store_true",
        default=False,
        help="Fuzz only every third payload (same as SECURITY_SAMPLE_ONLY=true).",
    )
    group.addoption(
        "--base-app-url",
        action="store",
        default=None,
        help="Base URL of the application under test (overrides CLASSAVO_BASE_URL).",
    )


def pytest_configure(config):
    configure_json_logging(os.environ.get("CLASSAVO_LOG_LEVEL", "INFO"))


@pytest.fixture(scope="session")
def harness_config(pytestconfig) -> HarnessConfig:
    """Environment configuration with command-line overrides applied."""
    config = load_config()
    if pytestconfig.getoption("--run-security"):
        config.run_security_tests = True
    if pytestconfig.getoption("--security-sample"):
        config.security_sample_only = True
    base_url = pytestconfig.getoption("--base-app-url")
    if base_url:
        config.base_url = base_url.rstrip("/")
    return config


@pytest.fixture(scope="session")
def data() -> DataProvider:
    """Fixture data provider; datasets load once and stay cached for the session."""
    provider = DataProvider()
    provider.preload()
    return provider


@pytest.fixture()
def fixture_dir(tmp_path: Path) -> Path:
    """Write a minimal users/courses/payloads fixture set to a temp directory."""
    directory = tmp_path / "fixtures"
    directory.mkdir()
    (directory / "users.json").write_text(
        json.dumps(
            {
                "validUser": {"email": "student@classavo.com", "password": "password123", "verified": True},
                "invalidUser": {"email": "ghost@classavo.com", "password": "nope", "verified": False},
                "unverifiedUser": {"email": "unverified@classavo.com", "password": "password123"},
            }
        )
    )
    (directory / "courses.json").write_text(
        json.dumps(
            {
                "validCourse": {
                    "code": "CS101",
                    "password": "intro2023",
                    "title": "Introduction to Computer Science",
                    "state": "open",
                },
                "invalidCourse": {"code": "INVALID123", "password": "intro2023"},
                "fullCourse": {"code": "FULL101", "password": "fullcourse", "state": "full"},
            }
        )
    )
    (directory / "security-payloads.json").write_text(
        json.dumps(
            {
                "xssPayloads": ["<script>alert(1)</script>", "<img src=x onerror=alert(1)>"],
                "sqlInjectionPayloads": ["' OR '1'='1", "admin'--", "'; DROP TABLE users;--"],
                "bufferOverflowPayloads": ["REPEAT_A_500"],
                "specialCharacters": ["!#$%", "<>?"],
            }
        )
    )
    return directory


@pytest.fixture()
def clean_env():
    """Clear harness environment variables for isolation."""
    with patch.dict(os.environ, {name: "" for name in HARNESS_ENV_VARS}, clear=False):
        yield
