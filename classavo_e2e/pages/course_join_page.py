"""Course join page object for E2E testing."""

from __future__ import annotations

from ..selectors import COURSE_JOIN
from .base_page import BasePage


class CourseJoinPage(BasePage):
    """Page object for the course join form shown after login.

    The form lives on the same document as the login screen, so there is no
    separate URL to navigate to.
    """

    selectors = COURSE_JOIN

    HEADING = "Join Course"

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def fill_course_info(self, code: str, password: str) -> "CourseJoinPage":
        self.fill("code_input", code)
        # The password field is re-enabled only once the code field settles.
        self.expect_enabled("password_input")
        self.fill("password_input", password)
        return self

    def submit(self) -> "CourseJoinPage":
        self.click("submit_button")
        return self

    def join_course(self, code: str, password: str) -> "CourseJoinPage":
        return self.fill_course_info(code, password).submit()

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def verify_elements(self) -> "CourseJoinPage":
        self.expect_text("logo", self.HEADING)
        self.expect_visible("code_input")
        self.expect_visible("password_input")
        self.expect_visible("submit_button")
        return self

    def verify_input_attributes(self) -> "CourseJoinPage":
        self.expect_attribute("code_input", "type", "text")
        self.expect_has_attribute("code_input", "required")
        self.expect_attribute("password_input", "type", "password")
        self.expect_has_attribute("password_input", "required")
        return self

    def verify_aria_attributes(self) -> "CourseJoinPage":
        self.expect_has_attribute("code_input", "aria-label")
        self.expect_has_attribute("password_input", "aria-label")
        self.expect_attribute("submit_button", "role", "button")
        return self

    def verify_error(self, message: str) -> "CourseJoinPage":
        self.expect_message("error_container", message)
        return self
