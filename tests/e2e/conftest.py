"""Pytest configuration for E2E tests with Playwright."""

from __future__ import annotations

import pytest
from playwright.sync_api import sync_playwright

from classavo_e2e.app_state import AppStateProbe
from classavo_e2e.commands import AppCommands, DialogRecorder, PageErrorGuard
from classavo_e2e.flows import UserFlows
from classavo_e2e.pages import CourseJoinPage, DashboardPage, LoginPage
from classavo_e2e.utils.readiness import app_is_reachable


@pytest.fixture(scope="session")
def base_url(harness_config) -> str:
    """Base URL for the application; skips the E2E layer when nothing answers."""
    if not app_is_reachable(harness_config.base_url):
        pytest.skip(f"Application under test is not reachable at {harness_config.base_url}")
    return harness_config.base_url


@pytest.fixture(scope="session")
def browser(harness_config, base_url):
    """Launch browser for E2E tests."""
    with sync_playwright() as p:
        launcher = getattr(p, harness_config.browser)
        browser = launcher.launch(
            headless=harness_config.headless,
            slow_mo=harness_config.slow_mo,
        )
        yield browser
        browser.close()


@pytest.fixture(scope="function")
def page(browser, harness_config):
    """Create a new page for each test; fail it on non-benign uncaught errors."""
    context = browser.new_context(viewport=dict(harness_config.viewport))
    context.set_default_timeout(harness_config.command_timeout_ms)
    context.set_default_navigation_timeout(harness_config.page_load_timeout_ms)
    page = context.new_page()
    guard = PageErrorGuard().attach(page)
    yield page
    page.close()
    context.close()
    guard.raise_if_errors()


@pytest.fixture
def state(page) -> AppStateProbe:
    return AppStateProbe(page)


@pytest.fixture
def commands(page, state, harness_config) -> AppCommands:
    return AppCommands(page, state, timeout_ms=harness_config.command_timeout_ms)


@pytest.fixture
def dialogs(page) -> DialogRecorder:
    """Confirm/alert recorder; confirms are accepted unless a test flips it."""
    return DialogRecorder(confirm=True).attach(page)


@pytest.fixture
def login_page(page, base_url, harness_config) -> LoginPage:
    return LoginPage(page, base_url, timeout=harness_config.command_timeout_ms)


@pytest.fixture
def course_join_page(page, base_url, harness_config) -> CourseJoinPage:
    return CourseJoinPage(page, base_url, timeout=harness_config.command_timeout_ms)


@pytest.fixture
def dashboard_page(page, base_url, harness_config) -> DashboardPage:
    return DashboardPage(
        page,
        base_url,
        timeout=harness_config.command_timeout_ms,
        loading_timeout=harness_config.loading_timeout_ms,
    )


@pytest.fixture
def flows(page, base_url, harness_config) -> UserFlows:
    return UserFlows(
        page,
        base_url,
        settle_ms=harness_config.settle_ms,
        timeout_ms=harness_config.command_timeout_ms,
    )


@pytest.fixture
def fresh_app(login_page, commands) -> LoginPage:
    """Load the login screen and reset the session explicitly."""
    login_page.visit()
    commands.reset_app()
    return login_page


@pytest.fixture
def valid_user(data):
    return data.get_valid_user()


@pytest.fixture
def valid_course(data):
    return data.get_valid_course()
