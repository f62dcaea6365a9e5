"""Exception taxonomy for the harness."""

from __future__ import annotations


class HarnessError(Exception):
    """Base class for errors raised by the harness itself."""


class FixtureLoadError(HarnessError):
    """A fixture file is missing or does not contain valid JSON."""


class UnknownStateTypeError(HarnessError, ValueError):
    """``verify_app_state`` was asked about a state it cannot read."""

    def __init__(self, state_type: str) -> None:
        super().__init__(f"Unknown state type: {state_type}")
        self.state_type = state_type


class UnknownDataTypeError(HarnessError, ValueError):
    """A data accessor was asked for a dataset it does not know."""

    def __init__(self, data_type: str, kind: str = "mock data") -> None:
        super().__init__(f"Unknown {kind} type: {data_type}")
        self.data_type = data_type


class SecurityRejectionError(HarnessError, AssertionError):
    """A malicious payload was accepted without validation feedback."""

    PREVIEW_LENGTH = 50

    def __init__(self, payload: str, field: str = "") -> None:
        preview = payload[: self.PREVIEW_LENGTH]
        where = f" in field '{field}'" if field else ""
        super().__init__(f"Security payload was not properly rejected{where}: {preview}...")
        self.payload = payload
        self.field = field


class UncaughtAppError(HarnessError, AssertionError):
    """The application under test raised an uncaught, non-benign error."""

    def __init__(self, messages: list[str]) -> None:
        joined = "; ".join(messages)
        super().__init__(f"Application raised {len(messages)} uncaught error(s): {joined}")
        self.messages = messages
