"""
Tests for the field models and the FieldValidationController.
"""

import pytest

from fittrack_gui.validation import FieldKind, FieldValidationController, FormField, FormModel, ValidationState


def _password_form():
    return FormModel(
        "client-form",
        [
            FormField("client-password", FieldKind.PASSWORD, rules=("required", "password")),
            FormField(
                "client-confirm-password",
                FieldKind.PASSWORD,
                rules=("required", "confirmPassword"),
                reference_key="client-password",
            ),
            FormField("trainer-certification"),
        ],
    )


class TestFormModel:
    """Test the form model."""

    def test_reference_wiring(self, qapp):
        """Test that confirm fields point at their reference."""
        model = _password_form()
        assert model["client-confirm-password"].reference is model["client-password"]

    def test_duplicate_key(self, qapp):
        """Test that duplicate field keys are refused."""
        with pytest.raises(ValueError, match="Duplicate field key"):
            FormModel("f", [FormField("a"), FormField("a")])

    def test_unknown_reference(self, qapp):
        """Test that a dangling reference is refused."""
        with pytest.raises(ValueError, match="unknown field"):
            FormModel("f", [FormField("b", reference_key="missing")])

    def test_label_defaults_to_friendly_name(self, qapp):
        """Test the field label."""
        assert FormField("client-goal").label == "Fitness Goal"

    def test_reset_restores_defaults(self, qtbot):
        """Test reset against clear."""
        model = FormModel("f", [FormField("role-login", default="client")])
        model.set_value("role-login", "trainer")

        with qtbot.waitSignal(model.valuesReset, timeout=1000):
            model.reset()
        assert model.values() == {"role-login": "client"}

        model.clear()
        assert model.values() == {"role-login": ""}

    def test_set_visible(self, qapp):
        """Test hiding a whole form."""
        model = _password_form()
        model.set_visible(False)

        assert not model.visible
        assert model.visible_fields() == []


class TestValidate:
    """Test one-shot validation."""

    def setup_method(self):
        """Create a controller and a form."""
        self.controller = FieldValidationController(debounce_ms=50)
        self.model = _password_form()

    def test_required_checked_first(self, qapp):
        """Test that an empty field reports required, not password strength."""
        field = self.model["client-password"]

        assert not self.controller.validate(field)
        assert field.state is ValidationState.INVALID
        assert field.message == "Password is required"

    def test_valid_value(self, qapp):
        """Test that a passing value marks the field valid."""
        field = self.model["client-password"]
        field.value = "abc123"

        assert self.controller.validate(field)
        assert field.state is ValidationState.VALID
        assert field.message == ""

    def test_optional_empty_field_stays_untouched(self, qapp):
        """Test a field without rules and without a value."""
        field = self.model["trainer-certification"]

        assert self.controller.validate(field)
        assert field.state is ValidationState.UNTOUCHED

    def test_value_is_trimmed(self, qapp):
        """Test that surrounding whitespace is ignored."""
        field = self.model["client-password"]
        field.value = "  abc123  "

        assert self.controller.validate(field)

    def test_changed_password_invalidates_confirmation(self, qapp):
        """Test that confirmation follows the current password."""
        password = self.model["client-password"]
        confirm = self.model["client-confirm-password"]
        password.value = "abc123"
        confirm.value = "abc123"
        assert self.controller.validate(confirm)

        password.value = "abc1234"

        assert not self.controller.validate(confirm)
        assert confirm.message == "Passwords do not match"

    def test_state_change_signal(self, qtbot):
        """Test that state changes are announced."""
        field = self.model["client-password"]
        field.value = "abc"

        with qtbot.waitSignal(self.controller.fieldStateChanged, timeout=1000) as blocker:
            self.controller.validate(field)

        assert blocker.args == [
            "client-password",
            ValidationState.INVALID,
            "Password must be at least 6 characters and contain a number",
        ]


class TestDebounce:
    """Test input and blur handling."""

    def setup_method(self):
        """Create a controller and a form."""
        self.controller = FieldValidationController(debounce_ms=50)
        self.model = _password_form()

    def teardown_method(self):
        """Stop timers."""
        self.controller.cleanup()

    def test_input_validates_after_delay(self, qtbot):
        """Test that typing schedules a validation."""
        field = self.model["client-password"]
        field.value = "abc"

        self.controller.on_input(field)

        assert self.controller.has_pending(field)
        assert field.state is ValidationState.UNTOUCHED
        qtbot.waitUntil(lambda: field.state is ValidationState.INVALID, timeout=1000)

    def test_last_keystroke_wins(self, qtbot):
        """Test that a later keystroke supersedes the pending validation."""
        field = self.model["client-password"]
        field.value = "abc"
        self.controller.on_input(field)
        field.value = "abc123"
        self.controller.on_input(field)

        qtbot.waitUntil(lambda: not self.controller.has_pending(field), timeout=1000)
        assert field.state is ValidationState.VALID

    def test_emptied_field_is_cleared(self, qapp):
        """Test that emptying a field clears it at once."""
        field = self.model["client-password"]
        self.controller.validate(field)
        assert field.state is ValidationState.INVALID

        field.value = "   "
        self.controller.on_input(field)

        assert field.state is ValidationState.UNTOUCHED
        assert field.message == ""
        assert not self.controller.has_pending(field)

    def test_blur_cancels_pending(self, qapp):
        """Test that blur validates at once."""
        field = self.model["client-password"]
        field.value = "abc123"
        self.controller.on_input(field)

        assert self.controller.on_blur(field)
        assert not self.controller.has_pending(field)
        assert field.state is ValidationState.VALID
