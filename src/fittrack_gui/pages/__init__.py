"""
Application pages, one per Route.
"""

from .dashboard import Dashboard, TrainerPanelPage, WorkoutLogPage
from .login_page import LoginPage
from .register_page import RegisterPage

__all__ = [
    "Dashboard",
    "LoginPage",
    "RegisterPage",
    "TrainerPanelPage",
    "WorkoutLogPage",
]
