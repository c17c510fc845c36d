"""
Main window for the FitTrack Pro client.

Hosts one page per Route in a stacked widget, the toast container and the
modal overlays.
"""

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent, QKeySequence, QResizeEvent
from PySide6.QtWidgets import QMainWindow, QStackedWidget, QWidget

from fittrack_core.config import APP_NAME
from fittrack_gui.app_context import AppContext
from fittrack_gui.forms.orchestrator import RequestFunction
from fittrack_gui.navigation import Route
from fittrack_gui.pages import LoginPage, RegisterPage, TrainerPanelPage, WorkoutLogPage
from fittrack_gui.widgets.toast import ToastContainer

TOAST_WIDTH = 360
TOAST_MARGIN = 16


class MainWindow(QMainWindow):
    """Application window; routes the navigator's current page into view."""

    def __init__(self, context: AppContext | None = None, request: RequestFunction | None = None) -> None:
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self.setWindowTitle(APP_NAME)
        self.resize(960, 720)

        self.context = context or AppContext(parent=self)
        self.context.init()

        self.stack = QStackedWidget(self)
        self.setCentralWidget(self.stack)

        self.pages: dict[Route, QWidget] = {
            Route.HOME: RegisterPage(self.context, modal_host=self, request=request),
            Route.LOGIN: LoginPage(self.context, request=request),
            Route.LOG_WORKOUT: WorkoutLogPage(self.context, request=request),
            Route.TRAINER_PANEL: TrainerPanelPage(self.context, request=request),
        }
        for page in self.pages.values():
            self.stack.addWidget(page)

        self.toast_container = ToastContainer(self.context.toasts, self)
        self.toast_container.setFixedWidth(TOAST_WIDTH)
        self._place_toasts()

        self._setup_shortcuts()
        self.context.navigator.routeChanged.connect(self._show_route)
        self._show_route(self.context.navigator.current)

    def _setup_shortcuts(self) -> None:
        escape_action = QAction(self)
        escape_action.setShortcut(QKeySequence(Qt.Key.Key_Escape))
        escape_action.triggered.connect(self.context.modals.hide_all)
        self.addAction(escape_action)

    def current_page(self) -> QWidget:
        return self.stack.currentWidget()

    def _show_route(self, route: Route) -> None:
        page = self.pages[route]
        self.stack.setCurrentWidget(page)
        page.on_enter()
        self._logger.debug(f"Showing page {route.value}")

    def _place_toasts(self) -> None:
        self.toast_container.move(self.width() - TOAST_WIDTH - TOAST_MARGIN, TOAST_MARGIN)
        self.toast_container.raise_()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._place_toasts()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Wait for in-flight requests and release shared resources."""
        for page in self.pages.values():
            page.shutdown()
        self.context.teardown()
        event.accept()
