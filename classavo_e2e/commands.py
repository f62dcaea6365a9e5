"""Reusable action and assertion vocabulary for the student platform.

:class:`AppCommands` wraps a Playwright ``Page`` with the imperative steps
scenarios repeat everywhere: logging in, joining a course, waiting out the
dashboard loading sequence, checking messages, resetting and inspecting the
application session, and keyboard tab navigation.  Commands hold no state of
their own beyond the page they drive.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from playwright.sync_api import Dialog, Locator, Page, expect
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .app_state import AppStateProbe, accessor_for
from .errors import UncaughtAppError
from .selectors import (
    CONTEXT_CONTAINERS,
    COURSE_JOIN,
    DASHBOARD,
    LOGIN,
    TAB_ORDER,
    data_cy,
)
from .utils.config import DEFAULT_COMMAND_TIMEOUT_MS, DEFAULT_LOADING_TIMEOUT_MS, get_logger

logger = get_logger("commands")

BENIGN_ERROR_PATTERN = re.compile(r"Script error", re.IGNORECASE)

_FOCUSED_DATA_CY_SCRIPT = """() => {
    const el = document.activeElement;
    return el ? el.getAttribute('data-cy') : null;
}"""

_STATE_EQUALS_SCRIPT = """(args) => {
    const accessor = window[args.accessor];
    return typeof accessor === 'function' && accessor() === args.expected;
}"""

_STATE_DIFFERS_SCRIPT = """(args) => {
    const accessor = window[args.accessor];
    return typeof accessor === 'function' && accessor() !== args.expected;
}"""

STATE_HOLD_MS = 2_000


class AppCommands:
    """Stateless command layer bound to one page."""

    def __init__(
        self,
        page: Page,
        state: AppStateProbe | None = None,
        *,
        timeout_ms: float = DEFAULT_COMMAND_TIMEOUT_MS,
    ) -> None:
        self.page = page
        self.state = state or AppStateProbe(page)
        self.timeout_ms = timeout_ms

    def _get(self, selector: str) -> Locator:
        return self.page.locator(selector).first

    def _replace_text(self, selector: str, value: str) -> None:
        target = self._get(selector)
        target.clear()
        target.fill(value)

    # ------------------------------------------------------------------
    # Journeys
    # ------------------------------------------------------------------

    def login(self, email: str, password: str, wait_for_redirect: bool = True) -> "AppCommands":
        """Fill and submit the login form.

        With *wait_for_redirect* the call blocks until the course join form is
        shown and the login form is gone.  Success versus failure is left to
        the caller to assert.
        """
        logger.info("Logging in as %s", email)
        self._replace_text(LOGIN["email_input"], email)
        self._replace_text(LOGIN["password_input"], password)
        self._get(LOGIN["submit_button"]).click()
        if wait_for_redirect:
            expect(self._get(COURSE_JOIN["form"])).to_be_visible(timeout=self.timeout_ms)
            expect(self._get(LOGIN["form"])).to_be_hidden(timeout=self.timeout_ms)
        return self

    def join_course(
        self, code: str, password: str, wait_for_dashboard: bool = True
    ) -> "AppCommands":
        logger.info("Joining course %s", code)
        self._replace_text(COURSE_JOIN["code_input"], code)
        self._replace_text(COURSE_JOIN["password_input"], password)
        self._get(COURSE_JOIN["submit_button"]).click()
        if wait_for_dashboard:
            expect(self._get(DASHBOARD["container"])).to_be_visible(timeout=self.timeout_ms)
            expect(self._get(COURSE_JOIN["form"])).to_be_hidden(timeout=self.timeout_ms)
        return self

    def login_and_join_course(
        self, email: str, password: str, course_code: str, course_password: str
    ) -> "AppCommands":
        return self.login(email, password).join_course(course_code, course_password)

    # ------------------------------------------------------------------
    # Waiting
    # ------------------------------------------------------------------

    def wait_for_loading(self, timeout_ms: float = DEFAULT_LOADING_TIMEOUT_MS) -> "AppCommands":
        """Two-condition barrier for the dashboard loading sequence.

        The loading indicator and the start button are toggled separately, so
        both must have flipped before returning.
        """
        expect(self._get(DASHBOARD["loading_indicator"])).to_be_hidden(timeout=timeout_ms)
        expect(self._get(DASHBOARD["start_button"])).to_be_visible(timeout=timeout_ms)
        return self

    def wait_for_app_state(
        self, state_type: str, expected: Any, timeout_ms: float | None = None
    ) -> "AppCommands":
        """Poll a session accessor until it returns *expected*."""
        self.page.wait_for_function(
            _STATE_EQUALS_SCRIPT,
            arg={"accessor": accessor_for(state_type), "expected": expected},
            timeout=self.timeout_ms if timeout_ms is None else timeout_ms,
        )
        return self

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def should_contain_text(self, selector: str, text: str) -> "AppCommands":
        expect(self._get(selector)).to_contain_text(text, timeout=self.timeout_ms)
        return self

    def should_show_error(self, selector: str, message: str) -> "AppCommands":
        """Assert an error container is visible AND carries *message*."""
        return self._should_show_message(selector, message)

    def should_show_success(self, selector: str, message: str) -> "AppCommands":
        return self._should_show_message(selector, message)

    def _should_show_message(self, selector: str, message: str) -> "AppCommands":
        container = self._get(selector)
        expect(container).to_be_visible(timeout=DEFAULT_COMMAND_TIMEOUT_MS)
        expect(container).to_contain_text(message, timeout=DEFAULT_COMMAND_TIMEOUT_MS)
        return self

    def verify_app_state(self, state_type: str, expected_value: Any = None) -> "AppCommands":
        """Assert one exposed session accessor equals *expected_value*.

        The accessor is polled until it matches so async state updates do not
        need a fixed pause.  An unknown *state_type* raises before anything
        is read.
        """
        accessor_for(state_type)
        try:
            self.wait_for_app_state(state_type, expected_value)
        except PlaywrightTimeoutError as exc:
            actual = self.state.read(state_type)
            raise AssertionError(
                f"Expected app state '{state_type}' to equal {expected_value!r}, got {actual!r}"
            ) from exc
        return self

    def verify_app_state_held(
        self, state_type: str, expected_value: Any, hold_ms: float = STATE_HOLD_MS
    ) -> "AppCommands":
        """Assert an accessor keeps returning *expected_value* for *hold_ms*.

        Fails as soon as the accessor reports anything else.
        """
        try:
            self.page.wait_for_function(
                _STATE_DIFFERS_SCRIPT,
                arg={"accessor": accessor_for(state_type), "expected": expected_value},
                timeout=hold_ms,
            )
        except PlaywrightTimeoutError:
            return self
        actual = self.state.read(state_type)
        raise AssertionError(
            f"App state '{state_type}' changed from {expected_value!r} to {actual!r}"
        )

    # ------------------------------------------------------------------
    # Application hooks
    # ------------------------------------------------------------------

    def reset_app(self) -> "AppCommands":
        """Reset the session through ``window.resetApp``; no-op if absent."""
        self.state.reset()
        return self

    def get_mock_data(self, data_type: str) -> Any:
        return self.state.mock_data(data_type)

    # ------------------------------------------------------------------
    # Keyboard navigation
    # ------------------------------------------------------------------

    def focused_data_cy(self) -> str | None:
        return self.page.evaluate(_FOCUSED_DATA_CY_SCRIPT)

    def current_context(self) -> str:
        """Name of the screen currently shown (``login``, ``courseJoin``...)."""
        for name, container in CONTEXT_CONTAINERS:
            if self._get(container).is_visible():
                return name
        raise AssertionError("No known page context is visible")

    def tab(self) -> Locator:
        """Move focus forward through the active screen's declared tab order.

        Focus goes to the element after the currently focused one, wrapping
        to the first after the last.  When focus is outside the list it lands
        on the first element.  Returns the newly focused element.
        """
        order = TAB_ORDER[self.current_context()]
        current = self.focused_data_cy()
        if current in order:
            target = order[(order.index(current) + 1) % len(order)]
        else:
            target = order[0]
        focused = self._get(data_cy(target))
        focused.focus()
        logger.debug("Tab focus %s -> %s", current, target)
        return focused


@dataclass
class DialogRecorder:
    """Answer and record browser dialogs raised by the application.

    ``confirm`` dialogs are accepted or dismissed according to *confirm*;
    ``alert`` dialogs are always accepted.  Every dialog is recorded as a
    ``(type, message)`` pair.
    """

    confirm: bool = True
    dialogs: list[tuple[str, str]] = field(default_factory=list)

    def attach(self, page: Page) -> "DialogRecorder":
        page.on("dialog", self.handle)
        return self

    def handle(self, dialog: Dialog) -> None:
        self.dialogs.append((dialog.type, dialog.message))
        if dialog.type == "confirm" and not self.confirm:
            dialog.dismiss()
        else:
            dialog.accept()

    def messages(self, dialog_type: str) -> list[str]:
        return [message for kind, message in self.dialogs if kind == dialog_type]

    @property
    def confirms(self) -> list[str]:
        return self.messages("confirm")

    @property
    def alerts(self) -> list[str]:
        return self.messages("alert")


@dataclass
class PageErrorGuard:
    """Collect uncaught page errors, ignoring the known benign pattern."""

    benign: re.Pattern[str] = BENIGN_ERROR_PATTERN
    errors: list[str] = field(default_factory=list)
    suppressed: list[str] = field(default_factory=list)

    def attach(self, page: Page) -> "PageErrorGuard":
        page.on("pageerror", self.handle)
        return self

    def handle(self, error: Any) -> None:
        message = getattr(error, "message", None) or str(error)
        if self.benign.search(message):
            logger.debug("Suppressed benign page error: %s", message)
            self.suppressed.append(message)
            return
        logger.warning("Uncaught page error: %s", message)
        self.errors.append(message)

    def raise_if_errors(self) -> None:
        if self.errors:
            raise UncaughtAppError(list(self.errors))
