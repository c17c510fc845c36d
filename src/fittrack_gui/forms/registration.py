"""
Client/trainer registration with a role toggle.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from fittrack_gui.app_context import AppContext

from .definitions import CLIENT_REGISTRATION, TRAINER_REGISTRATION
from .orchestrator import FormOrchestrator, RequestFunction

ROLE_TITLES = {
    "client": ("Create Your Client Account", "Start tracking your fitness journey today"),
    "trainer": ("Create Your Trainer Account", "Join our platform and help others achieve their fitness goals"),
}


class RegistrationFlow(QObject):
    """
    Owns the client and trainer registration forms; exactly one is visible.

    Switching roles shows the chosen form and empties the other one, values
    and validation state alike.

    Signals:
        roleChanged(str): The newly selected role
    """

    roleChanged = Signal(str)

    def __init__(
        self,
        context: AppContext,
        request: RequestFunction | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self.forms = {
            "client": FormOrchestrator(CLIENT_REGISTRATION, context, request=request, parent=self),
            "trainer": FormOrchestrator(TRAINER_REGISTRATION, context, request=request, parent=self),
        }
        self._role = ""
        self.title = ""
        self.subtitle = ""
        self.switch_to_role("client")

    @property
    def role(self) -> str:
        return self._role

    @property
    def active(self) -> FormOrchestrator:
        return self.forms[self._role]

    def switch_to_role(self, role: str) -> None:
        """Show the form for ``role`` and clear the hidden one."""
        if role not in self.forms:
            raise ValueError(f"Unknown role: {role}")

        self._role = role
        self.title, self.subtitle = ROLE_TITLES[role]
        for name, orchestrator in self.forms.items():
            if name == role:
                orchestrator.model.set_visible(True)
            else:
                orchestrator.model.set_visible(False)
                orchestrator.clear()

        self._logger.debug(f"Registration role set to {role}")
        self.roleChanged.emit(role)

    def submit(self):
        return self.active.submit()

    def shutdown(self) -> None:
        for orchestrator in self.forms.values():
            orchestrator.shutdown()
