"""
Field and form models shared by the validation controller, the form
orchestrator and the form views.

The models hold values and validation state only. Views observe them;
nothing here touches a widget.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from PySide6.QtCore import QObject, Signal

from fittrack_core.rules import FieldRuleSet, friendly_field_name


class ValidationState(Enum):
    """Per-field validation state."""

    UNTOUCHED = "untouched"
    VALID = "valid"
    INVALID = "invalid"


class FieldKind(Enum):
    """Input widget used to edit a field."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    TEXTAREA = "textarea"


@dataclass(eq=False)
class FormField:
    """
    One input of a form.

    ``reference`` names the field a confirmPassword rule compares against;
    it is wired up by FormModel from the field declarations.
    """

    key: str
    kind: FieldKind = FieldKind.TEXT
    rules: FieldRuleSet = field(default_factory=FieldRuleSet)
    label: str = ""
    placeholder: str = ""
    options: tuple[str, ...] = ()
    default: str = ""
    reference_key: str | None = None
    value: str = ""
    visible: bool = True
    state: ValidationState = ValidationState.UNTOUCHED
    message: str = ""
    reference: FormField | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.rules, FieldRuleSet):
            self.rules = FieldRuleSet(self.rules)
        if not self.label:
            self.label = friendly_field_name(self.key)
        if not self.value:
            self.value = self.default

    @property
    def is_valid(self) -> bool:
        return self.state is not ValidationState.INVALID

    @property
    def has_value(self) -> bool:
        return bool(self.value.strip())

    def set_state(self, state: ValidationState, message: str = "") -> None:
        self.state = state
        self.message = message if state is ValidationState.INVALID else ""

    def reset(self) -> None:
        """Restore the default value and forget any validation state."""
        self.value = self.default
        self.set_state(ValidationState.UNTOUCHED)


class FormModel(QObject):
    """
    Ordered collection of the fields of one form.

    Signals:
        valuesReset(): Field values were changed programmatically (reset/clear)
        visibilityChanged(bool): The whole form was shown or hidden
    """

    valuesReset = Signal()
    visibilityChanged = Signal(bool)

    def __init__(self, name: str, fields: Iterable[FormField], parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.name = name
        self._fields: dict[str, FormField] = {}
        for form_field in fields:
            if form_field.key in self._fields:
                raise ValueError(f"Duplicate field key in form '{name}': {form_field.key}")
            self._fields[form_field.key] = form_field

        for form_field in self._fields.values():
            if form_field.reference_key is not None:
                if form_field.reference_key not in self._fields:
                    raise ValueError(
                        f"Field '{form_field.key}' references unknown field '{form_field.reference_key}'"
                    )
                form_field.reference = self._fields[form_field.reference_key]

        self._visible = True

    def __iter__(self) -> Iterator[FormField]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, key: str) -> FormField:
        return self._fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    @property
    def visible(self) -> bool:
        return self._visible

    def set_visible(self, visible: bool) -> None:
        """Show or hide every field of the form."""
        self._visible = visible
        for form_field in self._fields.values():
            form_field.visible = visible
        self.visibilityChanged.emit(visible)

    def visible_fields(self) -> list[FormField]:
        return [f for f in self._fields.values() if f.visible]

    def set_value(self, key: str, value: str) -> None:
        self._fields[key].value = value

    def values(self) -> dict[str, str]:
        """Current raw values of every field, keyed by field key."""
        return {key: f.value for key, f in self._fields.items()}

    def reset(self) -> None:
        """Restore every field's default value and clear all validation state."""
        for form_field in self._fields.values():
            form_field.reset()
        self.valuesReset.emit()

    def clear(self) -> None:
        """Empty every field, ignoring defaults, and clear all validation state."""
        for form_field in self._fields.values():
            form_field.value = ""
            form_field.set_state(ValidationState.UNTOUCHED)
        self.valuesReset.emit()
