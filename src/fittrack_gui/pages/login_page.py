"""
Login page.
"""

from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from fittrack_gui.app_context import AppContext
from fittrack_gui.forms import LOGIN, FormOrchestrator
from fittrack_gui.forms.orchestrator import RequestFunction
from fittrack_gui.navigation import Route
from fittrack_gui.widgets.form_view import FormView


class LoginPage(QWidget):
    def __init__(
        self,
        context: AppContext,
        request: RequestFunction | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.context = context
        self.orchestrator = FormOrchestrator(LOGIN, context, request=request, parent=self)

        layout = QVBoxLayout(self)
        title = QLabel("Welcome Back")
        title.setStyleSheet("font-size: 22px; font-weight: bold;")
        layout.addWidget(title)
        layout.addWidget(QLabel("Log in to continue your fitness journey"))

        self.form_view = FormView(self.orchestrator, "Log In", self)
        layout.addWidget(self.form_view)

        register_link = QPushButton("Don't have an account? Sign up")
        register_link.setFlat(True)
        register_link.clicked.connect(lambda: context.navigator.navigate(Route.HOME))
        layout.addWidget(register_link)
        layout.addStretch(1)

    def on_enter(self) -> None:
        # Keep a previously typed email, drop the password
        self.form_view.set_value("password-login", "")

    def shutdown(self) -> None:
        self.orchestrator.shutdown()
