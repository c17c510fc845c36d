"""
Page routing for the FitTrack Pro client.

The main window shows one page per Route. Navigator decides which route is
current and enforces that protected pages are only reachable with a
logged-in user.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from PySide6.QtCore import QObject, QTimer, Signal


class Route(Enum):
    """Pages of the application."""

    HOME = "home"
    LOGIN = "login"
    LOG_WORKOUT = "log_workout"
    TRAINER_PANEL = "trainer_panel"

    @property
    def protected(self) -> bool:
        return self in (Route.LOG_WORKOUT, Route.TRAINER_PANEL)


# The registration page doubles as the landing page
REGISTER = Route.HOME


def route_for_role(role: str | None) -> Route:
    """Landing page after login for the given role."""
    return Route.TRAINER_PANEL if role == "trainer" else Route.LOG_WORKOUT


class Navigator(QObject):
    """
    Tracks the current route.

    Signals:
        routeChanged(object): The new current Route
    """

    routeChanged = Signal(object)

    def __init__(
        self,
        user_provider: Callable[[], dict[str, Any] | None],
        initial: Route = Route.HOME,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._user_provider = user_provider
        self._current = initial

        self._pending: Route | None = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timer)

    @property
    def current(self) -> Route:
        return self._current

    @property
    def pending(self) -> Route | None:
        """Route scheduled by navigate_later, if any."""
        return self._pending

    def navigate(self, route: Route) -> Route:
        """
        Switch to a route.

        Protected routes fall back to the login page when nobody is logged in.

        Returns:
            The route actually shown
        """
        if route.protected and not self._user_provider():
            self._logger.info(f"No logged-in user, redirecting {route.value} to login")
            route = Route.LOGIN

        self._current = route
        self._logger.debug(f"Navigating to {route.value}")
        self.routeChanged.emit(route)
        return route

    def navigate_later(self, route: Route, delay_ms: int) -> None:
        """Navigate after a delay. A later call replaces an earlier pending one."""
        self._pending = route
        self._timer.start(max(0, delay_ms))

    def cancel_pending(self) -> None:
        self._timer.stop()
        self._pending = None

    def _on_timer(self) -> None:
        route, self._pending = self._pending, None
        if route is not None:
            self.navigate(route)
