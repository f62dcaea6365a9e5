"""Common user flows: reusable journeys composed from page objects."""

from __future__ import annotations

from playwright.sync_api import Page, expect

from .pages import CourseJoinPage, DashboardPage, LoginPage
from .utils.config import DEFAULT_COMMAND_TIMEOUT_MS, DEFAULT_SETTLE_MS, get_logger

logger = get_logger("flows")


class UserFlows:
    """Sequence page-object actions, asserting each stage settled."""

    def __init__(
        self,
        page: Page,
        base_url: str = "http://localhost:3000",
        *,
        settle_ms: int = DEFAULT_SETTLE_MS,
        timeout_ms: float = DEFAULT_COMMAND_TIMEOUT_MS,
    ) -> None:
        self.page = page
        self.settle_ms = settle_ms
        self.timeout_ms = timeout_ms
        self.login_page = LoginPage(page, base_url, timeout=timeout_ms)
        self.course_join_page = CourseJoinPage(page, base_url, timeout=timeout_ms)
        self.dashboard_page = DashboardPage(page, base_url, timeout=timeout_ms)

    def complete_login(self, email: str, password: str) -> CourseJoinPage:
        self.login_page.visit().login(email, password)
        self.course_join_page.expect_visible("form", timeout=self.timeout_ms)
        return self.course_join_page

    def complete_course_join(self, code: str, password: str) -> DashboardPage:
        self.course_join_page.join_course(code, password)
        self.dashboard_page.expect_visible("container", timeout=self.timeout_ms)
        return self.dashboard_page

    def settle_after_login(self, settle_ms: int | None = None) -> None:
        """Let the course join form finish its focus transition.

        Waits for the course code input to become editable, then pauses for
        the settle delay: the form moves focus after it is shown and that
        step has no DOM signal to poll.
        """
        expect(self.course_join_page.element("code_input")).to_be_editable(
            timeout=self.timeout_ms
        )
        delay = self.settle_ms if settle_ms is None else settle_ms
        if delay > 0:
            self.page.wait_for_timeout(delay)

    def complete_full_flow(
        self,
        email: str,
        password: str,
        course_code: str,
        course_password: str,
        *,
        settle_ms: int | None = None,
    ) -> DashboardPage:
        """Login through to the dashboard."""
        logger.info("Full flow: %s -> %s", email, course_code)
        self.complete_login(email, password)
        self.settle_after_login(settle_ms)
        return self.complete_course_join(course_code, course_password)
