"""
Tests for the SessionStore.
"""

import json
from unittest.mock import Mock

from fittrack_core.session_store import USER_KEY, SessionStore

USER = {"success": True, "fullname": "Ada Lovelace", "email": "ada@example.com", "role": "client"}


class TestSessionStore:
    """Test storing the logged-in user."""

    def setup_method(self):
        """Create a store over mock settings."""
        self.settings = Mock()
        self.store = SessionStore(self.settings)

    def test_set_user(self, qapp):
        """Test that the record is stored as JSON."""
        assert self.store.set_user(USER)

        self.settings.setValue.assert_called_once_with(USER_KEY, json.dumps(USER))
        self.settings.sync.assert_called_once()

    def test_get_user(self, qapp):
        """Test reading a stored record."""
        self.settings.value.return_value = json.dumps(USER)

        assert self.store.get_user() == USER

    def test_get_user_when_empty(self, qapp):
        """Test that nothing stored means nobody is logged in."""
        self.settings.value.return_value = None

        assert self.store.get_user() is None

    def test_get_user_corrupt_json(self, qapp):
        """Test that an unreadable record degrades to None."""
        self.settings.value.return_value = "{not json"

        assert self.store.get_user() is None

    def test_get_user_not_an_object(self, qapp):
        """Test that a stored non-object degrades to None."""
        self.settings.value.return_value = "[1, 2]"

        assert self.store.get_user() is None

    def test_set_user_failure(self, qapp):
        """Test that a write failure is reported, not raised."""
        self.settings.setValue.side_effect = RuntimeError("read-only")

        assert self.store.set_user(USER) is False

    def test_remove_user(self, qapp):
        """Test forgetting the user."""
        assert self.store.remove_user()
        self.settings.remove.assert_called_once_with(USER_KEY)

    def test_remove_user_failure(self, qapp):
        """Test that a removal failure is reported, not raised."""
        self.settings.remove.side_effect = RuntimeError("locked")

        assert self.store.remove_user() is False
