"""Login page object for E2E testing."""

from __future__ import annotations

from playwright.sync_api import expect

from ..selectors import LOGIN
from .base_page import BasePage


class LoginPage(BasePage):
    """Page object for the login/authentication screen."""

    path = "/"
    selectors = LOGIN

    TITLE = "Classavo - Student Platform"
    BRAND = "Classavo"

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def visit(self) -> "LoginPage":
        self.navigate()
        return self

    def fill_credentials(self, email: str, password: str) -> "LoginPage":
        self.fill("email_input", email)
        self.fill("password_input", password)
        return self

    def submit(self) -> "LoginPage":
        self.click("submit_button")
        return self

    def login(self, email: str, password: str) -> "LoginPage":
        """Convenience: fill both fields and submit."""
        return self.fill_credentials(email, password).submit()

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def verify_elements(self) -> "LoginPage":
        expect(self.page).to_have_title(self.TITLE, timeout=self.timeout)
        self.expect_text("logo", self.BRAND)
        self.expect_visible("email_input")
        self.expect_visible("password_input")
        self.expect_visible("submit_button")
        return self

    def verify_input_attributes(self) -> "LoginPage":
        self.expect_attribute("email_input", "type", "email")
        self.expect_has_attribute("email_input", "required")
        self.expect_attribute("password_input", "type", "password")
        self.expect_has_attribute("password_input", "required")
        return self

    def verify_aria_attributes(self) -> "LoginPage":
        self.expect_has_attribute("email_input", "aria-label")
        self.expect_has_attribute("password_input", "aria-label")
        self.expect_attribute("submit_button", "role", "button")
        return self

    def verify_error(self, message: str) -> "LoginPage":
        self.expect_message("error_container", message)
        return self

    def verify_success(self, message: str) -> "LoginPage":
        self.expect_message("success_container", message)
        return self
