"""Dashboard page object for E2E testing."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from playwright.sync_api import Page

from ..selectors import DASHBOARD
from .base_page import DEFAULT_TIMEOUT_MS, BasePage

if TYPE_CHECKING:
    from ..datasets import Course


class DashboardPage(BasePage):
    """Page object for the course dashboard.

    The Start Course button moves through three states: hidden while the
    loading indicator spins, visible once loading completes, and disabled
    after the student confirms the start dialog.
    """

    selectors = DASHBOARD

    HEADING = "Course Dashboard"
    START_LABEL = "Start Course"
    CONFIRM_PROMPT = "Are you ready to start the course?"

    def __init__(
        self,
        page: Page,
        base_url: str = "http://localhost:3000",
        *,
        timeout: float = DEFAULT_TIMEOUT_MS,
        loading_timeout: float = 5_000,
    ) -> None:
        super().__init__(page, base_url, timeout=timeout)
        self.loading_timeout = loading_timeout

    @staticmethod
    def start_message(course_title: str) -> str:
        """Alert text shown once a course is started."""
        return f"Starting {course_title}! This would redirect to the course content."

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def start_course(self) -> "DashboardPage":
        self.click("start_button")
        return self

    def wait_for_content_load(self) -> "DashboardPage":
        """Block until loading finished: indicator hidden AND button shown."""
        self.expect_hidden("loading_indicator", timeout=self.loading_timeout)
        self.expect_visible("start_button", timeout=self.loading_timeout)
        self.expect_class_not_hidden("start_button")
        return self

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def verify_elements(self, course: "Course") -> "DashboardPage":
        self.expect_text("logo", self.HEADING)
        self.expect_text("course_title", course.title)
        self.expect_text("course_code", f"Course Code: {course.code}")
        return self

    def verify_loading_state(self) -> "DashboardPage":
        """Hidden-Loading: spinner showing, start button carries ``hidden``."""
        self.expect_visible("loading_indicator")
        self.expect_class_hidden("start_button")
        return self

    def verify_ready(self) -> "DashboardPage":
        """Visible-Ready: loading gone, start button usable."""
        self.expect_class_hidden("loading_indicator")
        self.expect_visible("start_button")
        self.expect_enabled("start_button")
        self.expect_text("start_button", self.START_LABEL)
        return self

    def verify_started(self) -> "DashboardPage":
        """Disabled-Started: the course was confirmed and the button locked."""
        self.expect_disabled("start_button")
        return self

    def verify_aria_attributes(self) -> "DashboardPage":
        self.expect_attribute("container", "role", "main")
        self.expect_attribute("loading_indicator", "aria-live", "polite")
        self.expect_attribute("start_button", "role", "button")
        self.expect_has_attribute("course_title", "aria-label")
        self.expect_has_attribute("course_code", "aria-label")
        self.expect_attribute("start_button", "aria-label", re.compile("Start"))
        return self
