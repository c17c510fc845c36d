"""
Client-local storage for the logged-in user.

The user record returned by the login endpoint is kept as JSON in QSettings.
Read or write failures never propagate: a record that cannot be read is
treated as "nobody is logged in".
"""

import json
import logging
from typing import Any

from PySide6.QtCore import QSettings

from .config import setup_qsettings
from .error_handler import get_error_handler
from .errors import ErrorCode, StorageError

logger = logging.getLogger(__name__)

USER_KEY = "session/user"


class SessionStore:
    """Stores, retrieves and removes the logged-in user's identity record."""

    def __init__(self, settings: QSettings | None = None) -> None:
        if settings is None:
            setup_qsettings()
            settings = QSettings()
        self._settings = settings

    def get_user(self) -> dict[str, Any] | None:
        """
        Return the stored user record.

        Returns:
            The record, or None if nothing is stored or the stored value is unreadable
        """
        try:
            raw = self._settings.value(USER_KEY, None)
            if not raw:
                return None
            user = json.loads(raw)
            if not isinstance(user, dict):
                raise ValueError(f"stored user is a {type(user).__name__}, not an object")
            return user
        except Exception as e:
            self._report(ErrorCode.STORAGE_READ_FAILED, "Error getting user from local storage", e)
            return None

    def set_user(self, user: dict[str, Any]) -> bool:
        """
        Store the user record.

        Returns:
            True on success, False if the record could not be written
        """
        try:
            self._settings.setValue(USER_KEY, json.dumps(user))
            self._settings.sync()
            return True
        except Exception as e:
            self._report(ErrorCode.STORAGE_WRITE_FAILED, "Error saving user to local storage", e)
            return False

    def remove_user(self) -> bool:
        """
        Forget the stored user record.

        Returns:
            True on success, False if the record could not be removed
        """
        try:
            self._settings.remove(USER_KEY)
            self._settings.sync()
            return True
        except Exception as e:
            self._report(ErrorCode.STORAGE_WRITE_FAILED, "Error removing user from local storage", e)
            return False

    def _report(self, code: ErrorCode, message: str, exc: Exception) -> None:
        error = StorageError(code=code, user_message=message, technical_message=f"{type(exc).__name__}: {exc}")
        get_error_handler().handle(error, {"setting": USER_KEY})
