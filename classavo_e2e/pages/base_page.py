"""Base Page Object for the Classavo student platform.

Implements the Page Object Model (POM) pattern for Playwright E2E tests.
Each page class binds a selector map from :mod:`classavo_e2e.selectors` and
exposes high-level actions instead of raw selectors.  Actions return ``self``
so calls chain; verifications are hard assertions built on Playwright's
``expect`` and fail the test immediately.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping

from playwright.sync_api import Locator, Page, expect

logger = logging.getLogger("classavo-e2e.pom")

DEFAULT_TIMEOUT_MS = 10_000

HIDDEN_CLASS = re.compile(r"(^|\s)hidden(\s|$)")
ANY_VALUE = re.compile(r".*")


class BasePage:
    """Abstract base for all page objects."""

    # Subclasses should override with the page-specific path segment.
    path: str = "/"
    selectors: Mapping[str, str] = {}

    def __init__(
        self,
        page: Page,
        base_url: str = "http://localhost:3000",
        *,
        timeout: float = DEFAULT_TIMEOUT_MS,
    ) -> None:
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self) -> None:
        """Go to the page's canonical URL."""
        url = f"{self.base_url}{self.path}"
        logger.info("Navigating to %s", url)
        self.page.goto(url)

    def reload(self) -> None:
        self.page.reload()

    @property
    def title(self) -> str:
        return self.page.title()

    @property
    def url(self) -> str:
        return self.page.url

    # ------------------------------------------------------------------
    # Locators
    # ------------------------------------------------------------------

    def selector(self, name: str) -> str:
        """Return the raw selector registered under *name*."""
        try:
            return self.selectors[name]
        except KeyError:
            raise KeyError(
                f"{type(self).__name__} has no selector named '{name}'"
            ) from None

    def element(self, name: str) -> Locator:
        """Locator for the first element matching the named selector."""
        return self.page.locator(self.selector(name)).first

    # ------------------------------------------------------------------
    # Primitive interactions
    # ------------------------------------------------------------------

    def click(self, name: str, **kwargs) -> None:
        self.element(name).click(**kwargs)

    def fill(self, name: str, value: str) -> None:
        """Fill a form input, replacing whatever it held."""
        self.element(name).fill(value)

    def get_text(self, name: str) -> str:
        return self.element(name).inner_text()

    def is_visible(self, name: str) -> bool:
        """Non-waiting visibility probe."""
        return self.element(name).is_visible()

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def _wait(self, timeout: float | None) -> float:
        return self.timeout if timeout is None else timeout

    def expect_visible(self, name: str, *, timeout: float | None = None) -> None:
        expect(self.element(name)).to_be_visible(timeout=self._wait(timeout))

    def expect_hidden(self, name: str, *, timeout: float | None = None) -> None:
        expect(self.element(name)).to_be_hidden(timeout=self._wait(timeout))

    def expect_text(self, name: str, text: str, *, timeout: float | None = None) -> None:
        """Assert that an element contains the given text."""
        expect(self.element(name)).to_contain_text(text, timeout=self._wait(timeout))

    def expect_message(self, name: str, text: str, *, timeout: float | None = None) -> None:
        """Assert a message container is visible and carries *text*.

        Both conditions are polled together so a visible container with
        stale text does not pass.
        """
        locator = self.element(name)
        wait = self._wait(timeout)
        expect(locator).to_be_visible(timeout=wait)
        expect(locator).to_contain_text(text, timeout=wait)

    def expect_attribute(self, name: str, attribute: str, value: str | re.Pattern[str]) -> None:
        expect(self.element(name)).to_have_attribute(attribute, value, timeout=self.timeout)

    def expect_has_attribute(self, name: str, attribute: str) -> None:
        """Assert the attribute is present, whatever its value."""
        self.expect_attribute(name, attribute, ANY_VALUE)

    def expect_class_hidden(self, name: str, *, timeout: float | None = None) -> None:
        expect(self.element(name)).to_have_class(HIDDEN_CLASS, timeout=self._wait(timeout))

    def expect_class_not_hidden(self, name: str, *, timeout: float | None = None) -> None:
        expect(self.element(name)).not_to_have_class(HIDDEN_CLASS, timeout=self._wait(timeout))

    def expect_disabled(self, name: str) -> None:
        expect(self.element(name)).to_be_disabled(timeout=self.timeout)

    def expect_enabled(self, name: str) -> None:
        expect(self.element(name)).to_be_enabled(timeout=self.timeout)

    def expect_value(self, name: str, value: str) -> None:
        expect(self.element(name)).to_have_value(value, timeout=self.timeout)

    def expect_invalid(self, name: str) -> None:
        """Assert the field currently fails HTML5 constraint validation."""
        expect(self.page.locator(f"{self.selector(name)}:invalid")).to_have_count(
            1, timeout=self.timeout
        )
