"""
Application-wide collaborators.

AppContext is created once by the main window and handed to every page and
form at construction; nothing in the GUI reaches for module-level state.
"""

from __future__ import annotations

import logging
from typing import Any

from PySide6.QtCore import QObject, Signal

from fittrack_core.api_client import ApiClient
from fittrack_core.config_manager import ConfigManager
from fittrack_core.session_store import SessionStore
from fittrack_gui.navigation import Navigator
from fittrack_gui.widgets.modal import ModalManager
from fittrack_gui.widgets.toast import ToastManager


class AppContext(QObject):
    """
    Holds config, the API client, the session store, the toast and modal
    managers, the navigator and the current user.

    Signals:
        userChanged(object): The current user record, or None after logout
    """

    userChanged = Signal(object)

    def __init__(
        self,
        config: ConfigManager | None = None,
        api: ApiClient | None = None,
        session: SessionStore | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)

        self.config = config or ConfigManager()
        self.api = api or ApiClient(self.config.api_base_url)
        self.session = session or SessionStore()
        self.toasts = ToastManager(self.config.toast_duration_ms, self)
        self.modals = ModalManager(self)
        self.navigator = Navigator(lambda: self.current_user, parent=self)
        self._current_user: dict[str, Any] | None = None

    @property
    def current_user(self) -> dict[str, Any] | None:
        return self._current_user

    @property
    def debounce_ms(self) -> int:
        return self.config.debounce_ms

    @property
    def redirect_delay_ms(self) -> int:
        return self.config.redirect_delay_ms

    def init(self) -> None:
        """Restore the logged-in user from client-local storage."""
        self._current_user = self.session.get_user()
        if self._current_user:
            self._logger.info(f"Restored session for {self._current_user.get('email', '<unknown>')}")
        self.userChanged.emit(self._current_user)

    def login(self, user: dict[str, Any]) -> bool:
        """
        Persist the user record and make it current.

        Returns:
            False if the record could not be stored; the user is still current
            for this run
        """
        stored = self.session.set_user(user)
        self._current_user = user
        self.userChanged.emit(user)
        return stored

    def logout(self) -> bool:
        removed = self.session.remove_user()
        self._current_user = None
        self.userChanged.emit(None)
        return removed

    def teardown(self) -> None:
        """Stop pending timers and release the HTTP session."""
        self.navigator.cancel_pending()
        self.toasts.cleanup()
        self.modals.hide_all()
        self.api.close()
        self._current_user = None
