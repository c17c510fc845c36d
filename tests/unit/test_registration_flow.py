"""
Tests for switching between client and trainer registration.
"""

import pytest

from fittrack_gui.forms import RegistrationFlow
from fittrack_gui.validation import ValidationState


class TestRoleSwitch:
    """Test the role toggle."""

    def test_initial_role_is_client(self, qapp, context, fake_request):
        """Test the state after construction."""
        flow = RegistrationFlow(context, request=fake_request)

        assert flow.role == "client"
        assert flow.title == "Create Your Client Account"
        assert flow.subtitle == "Start tracking your fitness journey today"
        assert flow.forms["client"].model.visible
        assert not flow.forms["trainer"].model.visible

    def test_switch_to_trainer(self, qtbot, context, fake_request):
        """Test the trainer titles and visibility."""
        flow = RegistrationFlow(context, request=fake_request)

        with qtbot.waitSignal(flow.roleChanged, timeout=1000) as blocker:
            flow.switch_to_role("trainer")

        assert blocker.args == ["trainer"]
        assert flow.title == "Create Your Trainer Account"
        assert flow.subtitle == "Join our platform and help others achieve their fitness goals"
        assert flow.active is flow.forms["trainer"]
        assert not flow.forms["client"].model.visible

    def test_round_trip_clears_client_form(self, qapp, context, fake_request):
        """Test client -> trainer -> client leaves the client form empty."""
        flow = RegistrationFlow(context, request=fake_request)
        client = flow.forms["client"]
        client.model.set_value("client-fullname", "Ada")
        client.model.set_value("client-email", "not-an-email")
        client.validator.validate(client.model["client-email"])
        assert client.model["client-email"].state is ValidationState.INVALID

        flow.switch_to_role("trainer")
        flow.switch_to_role("client")

        assert all(value == "" for value in client.model.values().values())
        assert client.model["client-email"].state is ValidationState.UNTOUCHED
        assert client.model["client-email"].message == ""

    def test_hidden_form_is_not_submitted(self, qtbot, context, fake_request):
        """Test that submit goes to the visible form only."""
        flow = RegistrationFlow(context, request=fake_request)
        flow.switch_to_role("trainer")

        flow.submit()

        assert flow.forms["trainer"].model["trainer-fullname"].state is ValidationState.INVALID
        assert flow.forms["client"].model["client-fullname"].state is ValidationState.UNTOUCHED
        assert fake_request.calls == []

    def test_unknown_role(self, qapp, context, fake_request):
        """Test that an unknown role is refused."""
        flow = RegistrationFlow(context, request=fake_request)

        with pytest.raises(ValueError, match="admin"):
            flow.switch_to_role("admin")
