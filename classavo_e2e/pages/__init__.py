"""Page Object Model classes for the student platform screens."""

from .base_page import BasePage
from .course_join_page import CourseJoinPage
from .dashboard_page import DashboardPage
from .login_page import LoginPage

__all__ = ["BasePage", "CourseJoinPage", "DashboardPage", "LoginPage"]
