"""Security payload expansion, sampling and the form-field fuzz driver.

The payload fixture stays small by describing stress inputs with a compact
``REPEAT_<pattern>_<count>`` grammar.  :func:`expand_payload` turns those
descriptors into literal strings; :class:`FieldSecurityProbe` pushes every
payload of the selected categories through one guarded form field and fails
loudly when the application accepts one without any validation feedback.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Mapping, Sequence, Union

from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .errors import SecurityRejectionError
from .selectors import COURSE_JOIN, LOGIN
from .utils.config import get_logger

if TYPE_CHECKING:
    from .commands import AppCommands
    from .datasets import DataProvider

logger = get_logger("security")

REPEAT_PATTERN = re.compile(r"REPEAT_(.+)_(\d+)", re.DOTALL)
UNICODE_ESCAPE = re.compile(r"\\u([0-9a-fA-F]{4})")
PERCENT_ESCAPE = re.compile(r"%([0-9a-fA-F]{2})")

# Payloads longer than this are assigned straight to the element value.
DIRECT_ASSIGN_THRESHOLD = 100
SAMPLE_STRIDE = 3
REJECTION_TIMEOUT_MS = 10_000

PAYLOAD_CATEGORIES: Mapping[str, tuple[str, ...]] = {
    "injection": (
        "xssPayloads",
        "sqlInjectionPayloads",
        "nosqlInjectionPayloads",
        "ldapInjectionPayloads",
        "commandInjectionPayloads",
    ),
    "traversal": ("pathTraversalPayloads", "headerInjectionPayloads"),
    "bypass": ("encodingBypassPayloads", "protocolBypassPayloads"),
    "overflow": ("bufferOverflowPayloads", "specialCharacters"),
}

ALL_CATEGORIES: tuple[str, ...] = tuple(
    category for group in PAYLOAD_CATEGORIES.values() for category in group
)

InputValue = Union[str, Callable[["DataProvider"], str]]


@dataclass(frozen=True)
class AuxiliaryInput:
    """A companion input the form needs before it can be submitted."""

    selector: str
    value: InputValue

    def resolve(self, data: "DataProvider") -> str:
        return self.value(data) if callable(self.value) else self.value


@dataclass(frozen=True)
class FieldConfig:
    """Everything the fuzz driver needs to attack one form field."""

    selector: str
    submit_selector: str
    error_selector: str
    error_message: str
    additional_inputs: tuple[AuxiliaryInput, ...] = field(default_factory=tuple)
    requires_login: bool = False


FIELD_CONFIGS: Mapping[str, FieldConfig] = {
    "email": FieldConfig(
        selector=LOGIN["email_input"],
        submit_selector=LOGIN["submit_button"],
        error_selector=LOGIN["error_container"],
        error_message="Invalid email or password",
        additional_inputs=(AuxiliaryInput(LOGIN["password_input"], "password123"),),
    ),
    "courseCode": FieldConfig(
        selector=COURSE_JOIN["code_input"],
        submit_selector=COURSE_JOIN["submit_button"],
        error_selector=COURSE_JOIN["error_container"],
        error_message="Invalid course code. Please check with your instructor.",
        additional_inputs=(
            AuxiliaryInput(
                COURSE_JOIN["password_input"],
                lambda data: data.get_valid_course().password,
            ),
        ),
        requires_login=True,
    ),
}


def _decode_escapes(pattern: str) -> str:
    decoded = UNICODE_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), pattern)
    decoded = PERCENT_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), decoded)
    # Escaped surrogate pairs combine into one astral character.
    return decoded.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def expand_payload(payload: str) -> str:
    """Expand a ``REPEAT_<pattern>_<count>`` descriptor into a literal string.

    ``\\uXXXX`` and ``%XX`` escapes inside the pattern are decoded before
    repetition.  Anything else is returned unchanged.
    """
    match = REPEAT_PATTERN.fullmatch(payload)
    if not match:
        return payload
    pattern, count = match.groups()
    return _decode_escapes(pattern) * int(count)


def resolve_categories(names: Iterable[str]) -> list[str]:
    """Expand family names (``injection``...) into payload categories."""
    resolved: list[str] = []
    for name in names:
        resolved.extend(PAYLOAD_CATEGORIES.get(name, (name,)))
    return resolved


def collect_payloads(payloads: Mapping[str, Sequence[str]], categories: Iterable[str]) -> list[str]:
    """Flatten the chosen categories in order; unknown categories add nothing."""
    collected: list[str] = []
    for category in categories:
        collected.extend(payloads.get(category, ()))
    return collected


def sample_payloads(payloads: Sequence[str], sample_only: bool) -> list[str]:
    """Keep every third payload (indexes 0, 3, 6...) when sampling."""
    if not sample_only:
        return list(payloads)
    return [payload for index, payload in enumerate(payloads) if index % SAMPLE_STRIDE == 0]


_REJECTION_SCRIPT = """(args) => {
    const field = document.querySelector(args.field);
    if (field && field.matches(':invalid')) {
        return true;
    }
    if (args.invalidOnly) {
        return false;
    }
    const error = document.querySelector(args.error);
    return !!error
        && !error.classList.contains('hidden')
        && error.offsetParent !== null
        && (error.textContent || '').includes(args.message);
}"""

_ASSIGN_VALUE_SCRIPT = """(el, value) => {
    el.value = value;
    el.dispatchEvent(new Event('input', { bubbles: true }));
}"""


class FieldSecurityProbe:
    """Drive categories of malicious payloads through one form field."""

    def __init__(
        self,
        page: Page,
        commands: "AppCommands",
        data: "DataProvider",
        *,
        sample_only: bool = False,
        field_configs: Mapping[str, FieldConfig] = FIELD_CONFIGS,
        timeout_ms: float = REJECTION_TIMEOUT_MS,
    ) -> None:
        self.page = page
        self.commands = commands
        self.data = data
        self.sample_only = sample_only
        self.field_configs = field_configs
        self.timeout_ms = timeout_ms

    def probe(
        self,
        field_name: str,
        categories: Iterable[str],
        *,
        sample_only: bool = False,
        expect_invalid: bool = False,
    ) -> list[str]:
        """Submit each payload and assert it was rejected.

        Returns the expanded payloads that were exercised.  Raises
        :class:`SecurityRejectionError` on the first payload that produced
        neither an HTML5-invalid field nor a visible error container carrying
        the field's configured error text.
        """
        config = self.field_configs[field_name]
        all_payloads = collect_payloads(
            self.data.get_security_payloads(), resolve_categories(categories)
        )
        selected = sample_payloads(all_payloads, self.sample_only or sample_only)
        logger.info(
            "Probing field %s with %d/%d payloads", field_name, len(selected), len(all_payloads)
        )

        exercised: list[str] = []
        for index, payload in enumerate(selected):
            if index > 0:
                self.commands.reset_app()
            if config.requires_login and (index > 0 or not self._authenticated()):
                user = self.data.get_valid_user()
                self.commands.login(user.email, user.password)

            expanded = expand_payload(payload)
            self._inject(config, expanded)
            self.page.locator(config.submit_selector).first.click()
            self._assert_rejected(field_name, config, expanded, invalid_only=expect_invalid)
            exercised.append(expanded)
        return exercised

    def _authenticated(self) -> bool:
        return self.commands.state.current_user() is not None

    def _inject(self, config: FieldConfig, payload: str) -> None:
        target = self.page.locator(config.selector).first
        if len(payload) > DIRECT_ASSIGN_THRESHOLD:
            target.evaluate(_ASSIGN_VALUE_SCRIPT, payload)
        else:
            target.fill(payload)
        for extra in config.additional_inputs:
            self.page.locator(extra.selector).first.fill(extra.resolve(self.data))

    def _assert_rejected(
        self, field_name: str, config: FieldConfig, payload: str, *, invalid_only: bool
    ) -> None:
        try:
            self.page.wait_for_function(
                _REJECTION_SCRIPT,
                arg={
                    "field": config.selector,
                    "error": config.error_selector,
                    "message": config.error_message,
                    "invalidOnly": invalid_only,
                },
                timeout=self.timeout_ms,
            )
        except PlaywrightTimeoutError:
            logger.error("Payload accepted by %s: %r", field_name, payload[:50])
            raise SecurityRejectionError(payload, field=field_name) from None
