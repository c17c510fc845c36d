"""
Form submission pipeline.

FormOrchestrator validates every visible field, builds the submission
payload, runs the request on a worker thread and reports the outcome through
toasts, the success modal and navigation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QObject, Signal, Slot

from fittrack_core.api_client import ApiClient, ApiResult
from fittrack_core.error_handler import get_error_handler
from fittrack_core.errors import ErrorCode, UnexpectedError
from fittrack_core.submission_state import SubmissionState
from fittrack_core.threading import RequestController
from fittrack_gui.app_context import AppContext
from fittrack_gui.navigation import route_for_role
from fittrack_gui.validation import FieldValidationController, FormModel

from .definitions import FormDefinition, FormSubmission

SUCCESS_MODAL = "registration-success"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"
LOGIN_REQUIRED_MESSAGE = "Please log in to continue"

RequestFunction = Callable[[FormSubmission], ApiResult]


def _poster(api: ApiClient) -> RequestFunction:
    """POST a submission through the shared API client."""

    def post(submission: FormSubmission) -> ApiResult:
        return api.post(submission.endpoint, submission.payload)

    return post


class FormOrchestrator(QObject):
    """
    Drives one form from submit to a terminal outcome.

    Signals:
        stateChanged(object): The new SubmissionState
        submitEnabledChanged(bool): Whether the submit control accepts clicks
        submissionFinished(object): Terminal SubmissionState of a submit()
        submissionSucceeded(object): Decoded response body of a successful request
    """

    stateChanged = Signal(object)
    submitEnabledChanged = Signal(bool)
    submissionFinished = Signal(object)
    submissionSucceeded = Signal(object)

    def __init__(
        self,
        definition: FormDefinition,
        context: AppContext,
        model: FormModel | None = None,
        validator: FieldValidationController | None = None,
        request: RequestFunction | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self.definition = definition
        self.context = context
        self.model = model or definition.create_model()
        self.validator = validator or FieldValidationController(context.debounce_ms, self)
        self._request = request or _poster(context.api)
        self._error_handler = get_error_handler()

        self._state = SubmissionState.IDLE
        self._submission: FormSubmission | None = None
        self._result: ApiResult | None = None
        self._worker_error: tuple[str, str] | None = None

        self._controller = RequestController(self)
        self._controller.requestCompleted.connect(self._on_request_completed)
        self._controller.requestError.connect(self._on_request_error)
        self._controller.requestFinished.connect(self._on_request_finished)

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def is_submitting(self) -> bool:
        return self._state is SubmissionState.SUBMITTING

    @property
    def last_submission(self) -> FormSubmission | None:
        return self._submission

    @property
    def controller(self) -> RequestController:
        return self._controller

    def _set_state(self, state: SubmissionState) -> None:
        if state is not self._state:
            self._state = state
            self.stateChanged.emit(state)

    def validate_all(self) -> bool:
        """
        Validate every visible field that has rules.

        Every field is checked, so each invalid one shows its own message.
        """
        valid = True
        for form_field in self.model.visible_fields():
            if form_field.rules and not self.validator.validate(form_field):
                valid = False
        return valid

    def submit(self) -> SubmissionState:
        """
        Start a submission.

        Returns:
            REJECTED when validation fails, SUBMITTING once the request runs,
            FAILED if the submission could not be started. A call made while
            a request is in flight is ignored and returns SUBMITTING.
        """
        if self.is_submitting:
            self._logger.debug(f"{self.definition.name}: submit ignored, request in flight")
            return SubmissionState.SUBMITTING

        self._set_state(SubmissionState.VALIDATING)
        if not self.validate_all():
            self.context.toasts.error(self.definition.invalid_message)
            return self._finish(SubmissionState.REJECTED)

        if self.definition.requires_user and not self.context.current_user:
            self.context.toasts.error(LOGIN_REQUIRED_MESSAGE)
            return self._finish(SubmissionState.REJECTED)

        try:
            payload = self.definition.build_payload(self.model.values(), self.context.current_user)
        except Exception as e:
            self._report_unexpected(e)
            return self._finish(SubmissionState.FAILED)

        submission = FormSubmission(self.definition.endpoint, payload, self.definition.role)
        self._submission = submission
        self._result = None
        self._worker_error = None

        self._set_state(SubmissionState.SUBMITTING)
        self.submitEnabledChanged.emit(False)
        request = self._request
        if not self._controller.start(lambda: request(submission), label=self.definition.name):
            self.submitEnabledChanged.emit(True)
            self.context.toasts.error(UNEXPECTED_ERROR_MESSAGE)
            return self._finish(SubmissionState.FAILED)

        self._logger.info(f"{self.definition.name}: submitting to {submission.endpoint}")
        return SubmissionState.SUBMITTING

    @Slot(object)
    def _on_request_completed(self, result: ApiResult) -> None:
        self._result = result

    @Slot(str, str)
    def _on_request_error(self, error_type: str, message: str) -> None:
        self._worker_error = (error_type, message)

    @Slot()
    def _on_request_finished(self) -> None:
        """Resolve the submission once the worker has been released."""
        outcome = SubmissionState.FAILED
        try:
            if self._worker_error is not None:
                error_type, message = self._worker_error
                raise UnexpectedError(
                    code=ErrorCode.UNKNOWN,
                    technical_message=f"{error_type}: {message}",
                )
            if self._result is None:
                raise UnexpectedError(
                    code=ErrorCode.INVALID_RESPONSE,
                    technical_message="Request finished without a result",
                )
            outcome = self._handle_result(self._result)
        except Exception as e:
            self._report_unexpected(e)
            outcome = SubmissionState.FAILED
        finally:
            self.submitEnabledChanged.emit(True)
            self._finish(outcome)

    def _handle_result(self, result: ApiResult) -> SubmissionState:
        if not self._accepted(result):
            message = result.error or self.definition.failure_message
            self._error_handler.handle(result.to_error(), {"form": self.definition.name})
            self.context.toasts.error(message)
            return SubmissionState.FAILED

        if self.definition.stores_user:
            self._complete_login(result.data)
        else:
            self.context.toasts.success(self.definition.success_message)

        if self.definition.show_success_modal:
            self.context.modals.show(SUCCESS_MODAL)

        if self.definition.reset_on_success:
            self.reset()

        self.submissionSucceeded.emit(result.data)
        return SubmissionState.SUCCEEDED

    def _accepted(self, result: ApiResult) -> bool:
        if not result.success:
            return False
        if self.definition.stores_user:
            return isinstance(result.data, dict) and bool(result.data.get("success"))
        return True

    def _complete_login(self, user: dict[str, Any]) -> None:
        self.context.login(user)
        self.context.toasts.success(f"Welcome back, {user.get('fullname', '')}!")
        self.context.navigator.navigate_later(route_for_role(user.get("role")), self.context.redirect_delay_ms)

    def _report_unexpected(self, exc: Exception) -> None:
        self._error_handler.handle(exc, {"form": self.definition.name})
        self.context.toasts.error(UNEXPECTED_ERROR_MESSAGE)

    def _finish(self, outcome: SubmissionState) -> SubmissionState:
        self._set_state(outcome)
        self._logger.info(f"{self.definition.name}: submission {outcome.name.lower()}")
        self.submissionFinished.emit(outcome)
        self._set_state(SubmissionState.IDLE)
        return outcome

    def reset(self) -> None:
        """Restore default values and clear every validation state."""
        for form_field in self.model:
            self.validator.cancel_pending(form_field)
        self.model.reset()

    def clear(self) -> None:
        """Empty every field and clear every validation state."""
        for form_field in self.model:
            self.validator.cancel_pending(form_field)
        self.model.clear()

    def shutdown(self) -> None:
        self._controller.shutdown()
        self.validator.cleanup()
