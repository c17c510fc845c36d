"""
Landing page: client or trainer registration.
"""

from PySide6.QtWidgets import QButtonGroup, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from fittrack_gui.app_context import AppContext
from fittrack_gui.forms import SUCCESS_MODAL, RegistrationFlow
from fittrack_gui.forms.orchestrator import RequestFunction
from fittrack_gui.navigation import Route
from fittrack_gui.widgets.form_view import FormView
from fittrack_gui.widgets.modal import ModalOverlay


class RegisterPage(QWidget):
    """Role toggle, the two registration forms and the success modal."""

    def __init__(
        self,
        context: AppContext,
        modal_host: QWidget | None = None,
        request: RequestFunction | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.context = context
        self.flow = RegistrationFlow(context, request=request, parent=self)

        layout = QVBoxLayout(self)

        self.title_label = QLabel()
        self.title_label.setStyleSheet("font-size: 22px; font-weight: bold;")
        self.subtitle_label = QLabel()
        layout.addWidget(self.title_label)
        layout.addWidget(self.subtitle_label)

        toggle_row = QHBoxLayout()
        self.role_buttons = QButtonGroup(self)
        self.role_buttons.setExclusive(True)
        self.toggle_buttons: dict[str, QPushButton] = {}
        for role, text in (("client", "I'm a Client"), ("trainer", "I'm a Trainer")):
            button = QPushButton(text)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, r=role: self.flow.switch_to_role(r))
            self.role_buttons.addButton(button)
            self.toggle_buttons[role] = button
            toggle_row.addWidget(button)
        layout.addLayout(toggle_row)

        self.form_views = {
            role: FormView(orchestrator, "Create Account", self) for role, orchestrator in self.flow.forms.items()
        }
        for view in self.form_views.values():
            layout.addWidget(view)

        login_link = QPushButton("Already have an account? Log in")
        login_link.setFlat(True)
        login_link.clicked.connect(lambda: context.navigator.navigate(Route.LOGIN))
        layout.addWidget(login_link)
        layout.addStretch(1)

        self.success_modal = ModalOverlay(
            "Account created!",
            "Your account is ready. Log in to start tracking your fitness journey.",
            modal_host or self,
        )
        self.success_modal.add_action("Go to Login", self._go_to_login, primary=True)
        context.modals.register(SUCCESS_MODAL, self.success_modal)

        self.flow.roleChanged.connect(self._on_role_changed)
        self._on_role_changed(self.flow.role)

    def _on_role_changed(self, role: str) -> None:
        self.title_label.setText(self.flow.title)
        self.subtitle_label.setText(self.flow.subtitle)
        self.toggle_buttons[role].setChecked(True)

    def _go_to_login(self) -> None:
        self.context.modals.hide(SUCCESS_MODAL)
        self.context.navigator.navigate(Route.LOGIN)

    def on_enter(self) -> None:
        pass

    def shutdown(self) -> None:
        self.flow.shutdown()
