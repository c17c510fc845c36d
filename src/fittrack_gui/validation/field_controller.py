"""
Real-time field validation for FitTrack Pro forms.

This module applies a field's rule set, records the outcome on the field
model and schedules debounced re-validation while the user types.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from fittrack_core.error_handler import get_error_handler
from fittrack_core.errors import ErrorCode, ValidationError
from fittrack_core.rules import evaluate_rule

from .field import FormField, ValidationState

DEFAULT_DEBOUNCE_MS = 300


class FieldValidationController(QObject):
    """
    Validates single fields and owns their pending debounced validations.

    Each field gets one single-shot QTimer. Restarting it supersedes the
    previous pending validation, so only the last keystroke counts.
    """

    # key, ValidationState, message
    fieldStateChanged = Signal(str, object, str)

    def __init__(self, debounce_ms: int = DEFAULT_DEBOUNCE_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._debounce_ms = debounce_ms
        self._timers: dict[int, QTimer] = {}
        self._fields: dict[int, FormField] = {}
        self._error_handler = get_error_handler()

    @property
    def debounce_ms(self) -> int:
        return self._debounce_ms

    def validate(self, field: FormField) -> bool:
        """
        Run the field's rules against its current value.

        ``required`` is checked first; the remaining rules run in declaration
        order and the first failure wins.

        Returns:
            True if every rule passes
        """
        self._set_state(field, ValidationState.UNTOUCHED)

        value = field.value.strip()
        reference = field.reference.value if field.reference is not None else None

        rules = field.rules
        ordered = ([r for r in rules if r.name == "required"]) + list(rules.without_required())

        for rule in ordered:
            result = evaluate_rule(rule, value, reference=reference, field_label=field.label)
            if not result.passed:
                self._set_state(field, ValidationState.INVALID, result.message)
                self._error_handler.handle(
                    ValidationError(
                        code=result.code or ErrorCode.INVALID_INPUT,
                        user_message=result.message,
                        field=field.key,
                        technical_message=f"Rule '{rule}' failed for field '{field.key}'",
                    )
                )
                return False

        if value:
            self._set_state(field, ValidationState.VALID)

        return True

    def on_blur(self, field: FormField) -> bool:
        """Validate immediately when the field loses focus, dropping any pending validation."""
        self.cancel_pending(field)
        return self.validate(field)

    def on_input(self, field: FormField) -> None:
        """
        React to a keystroke.

        A non-empty field is re-validated after the debounce delay; an
        emptied field has its state cleared at once.
        """
        if field.has_value:
            self._timer_for(field).start(self._debounce_ms)
        else:
            self.clear(field)

    def clear(self, field: FormField) -> None:
        """Drop any pending validation and reset the field to untouched."""
        self.cancel_pending(field)
        self._set_state(field, ValidationState.UNTOUCHED)

    def cancel_pending(self, field: FormField) -> None:
        timer = self._timers.get(id(field))
        if timer is not None:
            timer.stop()

    def has_pending(self, field: FormField) -> bool:
        timer = self._timers.get(id(field))
        return timer is not None and timer.isActive()

    def _timer_for(self, field: FormField) -> QTimer:
        timer = self._timers.get(id(field))
        if timer is None:
            timer = QTimer(self)
            timer.setSingleShot(True)
            timer.setProperty("fieldId", id(field))
            timer.timeout.connect(self._on_timer_timeout)
            self._timers[id(field)] = timer
            self._fields[id(field)] = field
        return timer

    @Slot()
    def _on_timer_timeout(self) -> None:
        timer = self.sender()
        field = self._fields.get(int(timer.property("fieldId"))) if timer is not None else None
        if field is not None:
            self.validate(field)

    def _set_state(self, field: FormField, state: ValidationState, message: str = "") -> None:
        changed = field.state is not state or field.message != message
        field.set_state(state, message)
        if changed:
            self.fieldStateChanged.emit(field.key, state, field.message)

    def cleanup(self) -> None:
        """Stop every timer and forget the fields."""
        for timer in self._timers.values():
            timer.stop()
            timer.deleteLater()
        self._timers.clear()
        self._fields.clear()
