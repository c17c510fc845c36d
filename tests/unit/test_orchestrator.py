"""
Tests for the FormOrchestrator submission pipeline.
"""

import gc

from request_fixtures import FakeRequest, toast_messages

from fittrack_core.api_client import ApiResult
from fittrack_core.submission_state import SubmissionState
from fittrack_gui.forms import CLIENT_REGISTRATION, SUCCESS_MODAL, WORKOUT, FormOrchestrator
from fittrack_gui.validation import ValidationState
from fittrack_gui.widgets.modal import ModalOverlay


CLIENT_VALUES = {
    "client-fullname": "  Ada Lovelace ",
    "client-email": " Ada@Example.COM ",
    "client-password": "abc123",
    "client-confirm-password": "abc123",
    "client-goal": "Endurance",
}


def _fill(orchestrator, values):
    for key, value in values.items():
        orchestrator.model.set_value(key, value)


def _submit_and_wait(qtbot, orchestrator):
    with qtbot.waitSignal(orchestrator.submissionFinished, timeout=3000) as blocker:
        assert orchestrator.submit() is SubmissionState.SUBMITTING
    return blocker.args[0]


class TestRejection:
    """Test submissions stopped by validation."""

    def test_empty_required_field_rejects(self, qtbot, context, fake_request):
        """Test that nothing is sent while a required field is empty."""
        orchestrator = FormOrchestrator(CLIENT_REGISTRATION, context, request=fake_request)
        _fill(orchestrator, {**CLIENT_VALUES, "client-goal": ""})

        with qtbot.waitSignal(orchestrator.submissionFinished, timeout=1000) as blocker:
            state = orchestrator.submit()

        assert state is SubmissionState.REJECTED
        assert blocker.args == [SubmissionState.REJECTED]
        assert fake_request.calls == []
        assert orchestrator.model["client-goal"].message == "Fitness Goal is required"
        assert toast_messages(context) == [("error", "Please fix the errors in the form")]
        assert orchestrator.state is SubmissionState.IDLE

    def test_every_invalid_field_is_marked(self, qapp, context, fake_request):
        """Test that validation does not stop at the first failure."""
        orchestrator = FormOrchestrator(CLIENT_REGISTRATION, context, request=fake_request)
        _fill(orchestrator, {**CLIENT_VALUES, "client-email": "a.com", "client-confirm-password": "abc124"})

        orchestrator.submit()

        assert orchestrator.model["client-email"].state is ValidationState.INVALID
        assert orchestrator.model["client-confirm-password"].message == "Passwords do not match"

    def test_hidden_fields_are_skipped(self, qtbot, context, fake_request):
        """Test that a hidden form's fields are not validated."""
        orchestrator = FormOrchestrator(CLIENT_REGISTRATION, context, request=fake_request)
        _fill(orchestrator, {**CLIENT_VALUES, "client-goal": ""})
        orchestrator.model["client-goal"].visible = False

        assert _submit_and_wait(qtbot, orchestrator) is SubmissionState.SUCCEEDED

    def test_login_required(self, qapp, context, fake_request):
        """Test that user-owned records need a logged-in user."""
        orchestrator = FormOrchestrator(WORKOUT, context, request=fake_request)
        _fill(
            orchestrator,
            {"workout-type": "Running", "workout-duration": "30", "workout-calories": "250", "workout-date": "2024-05-01"},
        )

        assert orchestrator.submit() is SubmissionState.REJECTED
        assert toast_messages(context) == [("error", "Please log in to continue")]
        assert fake_request.calls == []


class TestSuccess:
    """Test accepted submissions."""

    def test_client_registration(self, qtbot, context, fake_request):
        """Test the payload, reset, modal and submit control on success."""
        overlay = ModalOverlay("Account created!")
        context.modals.register(SUCCESS_MODAL, overlay)
        orchestrator = FormOrchestrator(CLIENT_REGISTRATION, context, request=fake_request)
        enabled = []
        orchestrator.submitEnabledChanged.connect(enabled.append)
        _fill(orchestrator, CLIENT_VALUES)

        assert _submit_and_wait(qtbot, orchestrator) is SubmissionState.SUCCEEDED

        assert len(fake_request.calls) == 1
        submission = fake_request.calls[0]
        assert submission.endpoint == "/register"
        assert submission.role == "client"
        assert submission.payload == {
            "fullname": "Ada Lovelace",
            "email": "ada@example.com",
            "password": "abc123",
            "goal": "Endurance",
            "role": "client",
        }
        assert enabled == [False, True]
        assert all(value == "" for value in orchestrator.model.values().values())
        assert all(field.state is ValidationState.UNTOUCHED for field in orchestrator.model)
        assert context.modals.is_open(SUCCESS_MODAL)
        assert ("success", "Account created successfully! Please log in.") in toast_messages(context)

    def test_workout_payload_uses_current_user(self, qtbot, context, fake_request):
        """Test the supplemented workout form."""
        context.login({"email": "ada@example.com", "fullname": "Ada", "role": "client"})
        orchestrator = FormOrchestrator(WORKOUT, context, request=fake_request)
        _fill(
            orchestrator,
            {
                "workout-type": "Running",
                "workout-duration": "30",
                "workout-calories": "250.5",
                "workout-date": "2024-05-01",
            },
        )

        with qtbot.waitSignal(orchestrator.submissionSucceeded, timeout=3000):
            orchestrator.submit()

        assert fake_request.calls[0].payload == {
            "email": "ada@example.com",
            "type": "Running",
            "duration": 30,
            "calories": 250.5,
            "date": "2024-05-01",
        }


class TestFailure:
    """Test refused and broken submissions."""

    def test_backend_message_shown(self, qtbot, context):
        """Test that the backend's message reaches the toast and values stay."""
        request = FakeRequest(ApiResult(success=False, error="User already exists", status_code=400))
        orchestrator = FormOrchestrator(CLIENT_REGISTRATION, context, request=request)
        _fill(orchestrator, CLIENT_VALUES)

        assert _submit_and_wait(qtbot, orchestrator) is SubmissionState.FAILED

        assert toast_messages(context)[-1] == ("error", "User already exists")
        assert orchestrator.model["client-email"].value == CLIENT_VALUES["client-email"]

    def test_generic_failure_message(self, qtbot, context):
        """Test the fallback when the backend gives no message."""
        request = FakeRequest(ApiResult(success=False))
        orchestrator = FormOrchestrator(CLIENT_REGISTRATION, context, request=request)
        _fill(orchestrator, CLIENT_VALUES)

        _submit_and_wait(qtbot, orchestrator)

        assert toast_messages(context)[-1] == ("error", "Registration failed")

    def test_unexpected_exception(self, qtbot, context):
        """Test that an exception in the request re-enables the form."""
        request = FakeRequest(error=RuntimeError("socket closed"))
        orchestrator = FormOrchestrator(CLIENT_REGISTRATION, context, request=request)
        enabled = []
        orchestrator.submitEnabledChanged.connect(enabled.append)
        _fill(orchestrator, CLIENT_VALUES)

        assert _submit_and_wait(qtbot, orchestrator) is SubmissionState.FAILED

        assert toast_messages(context)[-1] == ("error", "An unexpected error occurred")
        assert enabled == [False, True]

    def test_second_submit_ignored_while_in_flight(self, qtbot, context, fake_request):
        """Test that the request is sent once."""
        fake_request.gate.clear()
        orchestrator = FormOrchestrator(CLIENT_REGISTRATION, context, request=fake_request)
        _fill(orchestrator, CLIENT_VALUES)

        assert orchestrator.submit() is SubmissionState.SUBMITTING
        assert orchestrator.submit() is SubmissionState.SUBMITTING

        with qtbot.waitSignal(orchestrator.submissionFinished, timeout=3000):
            fake_request.gate.set()

        assert len(fake_request.calls) == 1
        assert orchestrator.state is SubmissionState.IDLE


class TestOwnership:
    """Test that finished requests do not keep their orchestrator alive."""

    def test_default_request_posts_through_api(self, qtbot, context):
        """Test that the shared API client receives the submission."""
        context.api.post.return_value = ApiResult(success=True, data={"msg": "User registered"})
        orchestrator = FormOrchestrator(CLIENT_REGISTRATION, context)
        _fill(orchestrator, CLIENT_VALUES)

        assert _submit_and_wait(qtbot, orchestrator) is SubmissionState.SUCCEEDED

        endpoint, payload = context.api.post.call_args.args
        assert endpoint == "/register"
        assert payload["email"] == "ada@example.com"

    def test_orchestrator_released_after_submission(self, qtbot, context, fake_request):
        """Test that dropping an orchestrator right after it finishes is safe."""
        orchestrator = FormOrchestrator(CLIENT_REGISTRATION, context, request=fake_request)
        _fill(orchestrator, CLIENT_VALUES)
        assert _submit_and_wait(qtbot, orchestrator) is SubmissionState.SUCCEEDED

        del orchestrator
        gc.collect()
        qtbot.wait(100)

        assert len(fake_request.calls) == 1
        assert ("success", "Account created successfully! Please log in.") in toast_messages(context)
