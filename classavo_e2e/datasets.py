"""Centralized test data management with lazy, cached fixture loading.

Fixture files live in ``classavo_e2e/fixtures`` as JSON.  A
:class:`DataProvider` is constructed once per test session and handed to
scenarios through a pytest fixture; there is no module-level singleton.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from .errors import FixtureLoadError, UnknownDataTypeError
from .utils.config import get_logger

logger = get_logger("datasets")

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

USERS = "users"
COURSES = "courses"
SECURITY_PAYLOADS = "security-payloads"

COURSE_STATES = ("open", "full", "closed", "archived")


@dataclass(frozen=True)
class User:
    """A login identity from the users fixture."""

    email: str
    password: str
    verified: bool = False

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "User":
        return cls(
            email=payload["email"],
            password=payload["password"],
            verified=bool(payload.get("verified", False)),
        )


@dataclass(frozen=True)
class Course:
    """A joinable course from the courses fixture."""

    code: str
    password: str
    title: str = ""
    state: str = "open"

    def __post_init__(self) -> None:
        if self.state not in COURSE_STATES:
            raise ValueError(f"Unknown course state {self.state!r} for {self.code}")

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Course":
        return cls(
            code=payload["code"],
            password=payload["password"],
            title=payload.get("title", ""),
            state=payload.get("state", "open"),
        )

    @staticmethod
    def normalize_code(code: str) -> str:
        """Course codes compare trimmed and case-insensitively."""
        return code.strip().upper()

    def matches(self, code: str) -> bool:
        return self.normalize_code(code) == self.normalize_code(self.code)


def read_json_fixture(path: Path) -> Any:
    """Read one fixture file, converting IO and parse errors to FixtureLoadError."""
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise FixtureLoadError(f"Fixture not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise FixtureLoadError(f"Fixture {path.name} is not valid JSON: {exc}") from exc


class DataProvider:
    """Single source of truth for fixture data, loaded on first use."""

    def __init__(
        self,
        fixtures_dir: str | Path | None = None,
        loader: Callable[[str], Any] | None = None,
    ) -> None:
        self.fixtures_dir = Path(fixtures_dir) if fixtures_dir else FIXTURES_DIR
        self._loader = loader or self._load_from_disk
        self._data: dict[str, Any] = {}

    def _load_from_disk(self, name: str) -> Any:
        return read_json_fixture(self.fixtures_dir / f"{name}.json")

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def load_fixture(self, name: str) -> Any:
        """Return fixture *name*, fetching it only the first time."""
        if name not in self._data:
            logger.debug("Loading fixture %s", name)
            self._data[name] = self._loader(name)
        return self._data[name]

    def is_loaded(self, name: str) -> bool:
        return name in self._data

    def reset(self) -> None:
        """Drop the cache so the next access re-fetches."""
        self._data = {}

    def preload(self) -> tuple[Any, Any]:
        """Warm the cache with the commonly used datasets."""
        return self.get_users(), self.get_courses()

    # ------------------------------------------------------------------
    # Datasets
    # ------------------------------------------------------------------

    def get_users(self) -> dict[str, Any]:
        return self.load_fixture(USERS)

    def get_courses(self) -> dict[str, Any]:
        return self.load_fixture(COURSES)

    def get_security_payloads(self) -> dict[str, list[str]]:
        return self.load_fixture(SECURITY_PAYLOADS)

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def get_user(self, key: str) -> User:
        users = self.get_users()
        if key not in users:
            raise UnknownDataTypeError(key, kind="user fixture")
        return User.from_dict(users[key])

    def get_course(self, key: str) -> Course:
        courses = self.get_courses()
        if key not in courses:
            raise UnknownDataTypeError(key, kind="course fixture")
        return Course.from_dict(courses[key])

    def get_valid_user(self) -> User:
        return self.get_user("validUser")

    def get_invalid_user(self) -> User:
        return self.get_user("invalidUser")

    def get_unverified_user(self) -> User:
        return self.get_user("unverifiedUser")

    def get_valid_course(self) -> Course:
        return self.get_course("validCourse")

    def get_invalid_course(self) -> Course:
        return self.get_course("invalidCourse")

    def get_test_data(self, data_type: str) -> Any:
        """Look up a dataset or projection by name."""
        accessors: dict[str, Callable[[], Any]] = {
            "users": self.get_users,
            "courses": self.get_courses,
            "securityPayloads": self.get_security_payloads,
            "validUser": self.get_valid_user,
            "validCourse": self.get_valid_course,
        }
        try:
            accessor = accessors[data_type]
        except KeyError:
            raise UnknownDataTypeError(data_type, kind="test data") from None
        return accessor()
