"""Narrow test-support interface over the application's exposed globals.

The mock application publishes a handful of functions on ``window`` so tests
can inspect and reset its session.  Everything the harness reads from the
page goes through :class:`AppStateProbe`, keeping that boundary explicit.
"""

from __future__ import annotations

from typing import Any

from playwright.sync_api import Page

from .errors import UnknownDataTypeError, UnknownStateTypeError
from .utils.config import get_logger

logger = get_logger("app-state")

# state type -> window accessor function
STATE_ACCESSORS: dict[str, str] = {
    "user": "getCurrentUser",
    "course": "getCurrentCourse",
    "currentCourse": "getCurrentCourse",
    "sessionId": "getCurrentSessionId",
}

# data type -> window global
MOCK_DATA_GLOBALS: dict[str, str] = {
    "users": "mockUsers",
    "courses": "mockCourses",
}

_RESET_SCRIPT = """() => {
    if (typeof window.resetApp === 'function') {
        window.resetApp();
        return true;
    }
    return false;
}"""

_HAS_FUNCTION_SCRIPT = "(name) => typeof window[name] === 'function'"

_CALL_ACCESSOR_SCRIPT = "(name) => window[name]()"

_READ_GLOBAL_SCRIPT = "(name) => window[name]"


def accessor_for(state_type: str) -> str:
    """Return the window accessor name for *state_type* or raise."""
    try:
        return STATE_ACCESSORS[state_type]
    except KeyError:
        raise UnknownStateTypeError(state_type) from None


class AppStateProbe:
    """Read and reset the application's session through its window hooks."""

    def __init__(self, page: Page) -> None:
        self.page = page

    def reset(self) -> bool:
        """Invoke ``window.resetApp`` if the app exposes it.

        Returns ``False`` (and does nothing else) when the hook is absent,
        e.g. before the first page load.
        """
        was_reset = bool(self.page.evaluate(_RESET_SCRIPT))
        if not was_reset:
            logger.debug("window.resetApp not available; reset skipped")
        return was_reset

    def has_hook(self, name: str) -> bool:
        return bool(self.page.evaluate(_HAS_FUNCTION_SCRIPT, name))

    def read(self, state_type: str) -> Any:
        """Return the current value of one session accessor."""
        return self.page.evaluate(_CALL_ACCESSOR_SCRIPT, accessor_for(state_type))

    def current_user(self) -> str | None:
        return self.read("user")

    def current_course(self) -> str | None:
        return self.read("course")

    def current_session_id(self) -> str | None:
        return self.read("sessionId")

    def mock_data(self, data_type: str) -> Any:
        """Return the application's own mock dataset (``users`` or ``courses``)."""
        try:
            name = MOCK_DATA_GLOBALS[data_type]
        except KeyError:
            raise UnknownDataTypeError(data_type) from None
        return self.page.evaluate(_READ_GLOBAL_SCRIPT, name)

    def snapshot(self) -> dict[str, Any]:
        """Read user and course together, for consistency checks."""
        return {"user": self.current_user(), "course": self.current_course()}
