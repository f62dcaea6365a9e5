"""End-to-end test harness for the Classavo student platform."""

from .app_state import AppStateProbe
from .commands import AppCommands, DialogRecorder, PageErrorGuard
from .datasets import Course, DataProvider, User
from .flows import UserFlows
from .pages import CourseJoinPage, DashboardPage, LoginPage
from .security import FIELD_CONFIGS, PAYLOAD_CATEGORIES, FieldSecurityProbe, expand_payload
from .selectors import SELECTORS, TAB_ORDER

__all__ = [
    "AppCommands",
    "AppStateProbe",
    "Course",
    "CourseJoinPage",
    "DashboardPage",
    "DataProvider",
    "DialogRecorder",
    "FIELD_CONFIGS",
    "FieldSecurityProbe",
    "LoginPage",
    "PAYLOAD_CATEGORIES",
    "PageErrorGuard",
    "SELECTORS",
    "TAB_ORDER",
    "User",
    "UserFlows",
    "expand_payload",
]
