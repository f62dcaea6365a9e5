"""Centralized selector registry.

Each screen of the student platform gets one mapping from a logical element
name to its DOM locator.  Locators lean on ``data-cy`` attributes and stable
container IDs so visual restructuring does not break the suite.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

LOGIN: Mapping[str, str] = MappingProxyType(
    {
        "form": "#loginForm",
        "html_form": "#login",
        "email_input": '[data-cy="email-input"]',
        "password_input": '[data-cy="password-input"]',
        "submit_button": '[data-cy="login-button"]',
        "error_container": "#loginError",
        "success_container": "#loginSuccess",
        "logo": ".logo h1",
    }
)

COURSE_JOIN: Mapping[str, str] = MappingProxyType(
    {
        "form": "#courseJoinForm",
        "html_form": "#courseJoin",
        "code_input": '[data-cy="course-code-input"]',
        "password_input": '[data-cy="course-password-input"]',
        "submit_button": '[data-cy="join-course-button"]',
        "error_container": "#courseError",
        "logo": "#courseJoinForm .logo h1",
    }
)

DASHBOARD: Mapping[str, str] = MappingProxyType(
    {
        "container": "#courseDashboard",
        "logo": "#courseDashboard .logo h1",
        "course_title": '[data-cy="course-title"]',
        "course_code": '[data-cy="course-code-display"]',
        "start_button": '[data-cy="start-course-button"]',
        "loading_indicator": "#loadingIndicator",
        "spinner": "#loadingIndicator .spinner",
    }
)

SELECTORS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "login": LOGIN,
        "courseJoin": COURSE_JOIN,
        "dashboard": DASHBOARD,
    }
)

# Declared keyboard tab order per screen, as data-cy values.
TAB_ORDER: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "login": ("email-input", "password-input", "login-button"),
        "courseJoin": ("course-code-input", "course-password-input", "join-course-button"),
        "dashboard": ("start-course-button",),
    }
)

# Container whose visibility identifies the active screen, checked in order.
CONTEXT_CONTAINERS: tuple[tuple[str, str], ...] = (
    ("dashboard", DASHBOARD["container"]),
    ("courseJoin", COURSE_JOIN["form"]),
    ("login", LOGIN["form"]),
)


def data_cy(name: str) -> str:
    """Build an attribute selector for a ``data-cy`` value."""
    return f'[data-cy="{name}"]'


def invalid(selector: str) -> str:
    """Selector matching *selector* only while it fails HTML5 validation."""
    return f"{selector}:invalid"
