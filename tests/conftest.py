"""Test-layer conftest: markers and mocked Playwright page builders."""

from __future__ import annotations

from typing import Iterable
from unittest.mock import MagicMock

import pytest


# ---------------------------------------------------------------------------
# Pytest configuration hook – wire up markers
# ---------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom markers so --strict-markers does not complain."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no browser)")
    config.addinivalue_line("markers", "e2e: End-to-end Playwright tests against the running app")
    config.addinivalue_line("markers", "smoke: Fast happy-path checks")
    config.addinivalue_line("markers", "critical: Must-pass acceptance checks")
    config.addinivalue_line("markers", "debug: Scenarios under investigation")
    config.addinivalue_line("markers", "ui: Layout and attribute checks")
    config.addinivalue_line("markers", "course_join: Course join flow")
    config.addinivalue_line("markers", "security: Security fuzzing (opt-in)")
    config.addinivalue_line("markers", "slow: Slow-running tests")


# ---------------------------------------------------------------------------
# Mock page helpers
# ---------------------------------------------------------------------------

def build_mock_page(visible: Iterable[str] = ()) -> MagicMock:
    """Return a MagicMock page whose locators are distinct per selector.

    ``page.locator(sel).first.is_visible()`` is True only for selectors in
    *visible*.  The locator mocks are exposed as ``page.locators``.
    """
    visible = set(visible)
    page = MagicMock()
    page.locators = {}

    def _locator(selector):
        if selector not in page.locators:
            locator = MagicMock(name=f"locator({selector})")
            locator.first.is_visible.return_value = selector in visible
            page.locators[selector] = locator
        return page.locators[selector]

    page.locator.side_effect = _locator
    return page


@pytest.fixture()
def mock_page() -> MagicMock:
    return build_mock_page()


@pytest.fixture()
def page_factory():
    """Build mock pages with a chosen set of visible selectors."""
    return build_mock_page
