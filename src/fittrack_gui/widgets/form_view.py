"""
Widget rendering of a FormModel.

FormView builds one input per field, forwards edits to the model and the
validation controller, and mirrors validation state back onto the inputs.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QEvent, QObject
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from fittrack_gui.forms.orchestrator import FormOrchestrator
from fittrack_gui.utils.styling import StyleSheets, apply_validation_state
from fittrack_gui.validation import FieldKind, FormField, ValidationState


class PasswordInput(QWidget):
    """Password line edit with a show/hide toggle."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.line_edit = QLineEdit()
        self.line_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.toggle_button = QToolButton()
        self.toggle_button.setCheckable(True)
        self.toggle_button.setText("Show")
        self.toggle_button.setToolTip("Show password")
        self.toggle_button.toggled.connect(self.set_revealed)

        layout.addWidget(self.line_edit, 1)
        layout.addWidget(self.toggle_button)

    @property
    def revealed(self) -> bool:
        return self.line_edit.echoMode() == QLineEdit.EchoMode.Normal

    def set_revealed(self, revealed: bool) -> None:
        self.line_edit.setEchoMode(QLineEdit.EchoMode.Normal if revealed else QLineEdit.EchoMode.Password)
        self.toggle_button.setText("Hide" if revealed else "Show")
        self.toggle_button.setToolTip("Hide password" if revealed else "Show password")


class FormView(QWidget):
    """
    Renders the fields of one orchestrated form plus its submit button.

    Live validation follows the form: every field validates on focus-out,
    and forms with live validation also re-validate while typing after the
    controller's debounce delay.
    """

    def __init__(self, orchestrator: FormOrchestrator, submit_text: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self.orchestrator = orchestrator
        self.model = orchestrator.model
        self.validator = orchestrator.validator

        self.inputs: dict[str, QWidget] = {}
        self.error_labels: dict[str, QLabel] = {}
        self._editors: dict[QObject, FormField] = {}

        self.setObjectName(self.model.name)
        self.setStyleSheet(StyleSheets.get_form_style())

        layout = QVBoxLayout(self)
        form_layout = QFormLayout()
        for form_field in self.model:
            form_layout.addRow(form_field.label, self._build_field(form_field))
        layout.addLayout(form_layout)

        self.submit_button = QPushButton(submit_text)
        self.submit_button.setProperty("role", "submit")
        self.submit_button.clicked.connect(orchestrator.submit)
        layout.addWidget(self.submit_button)

        orchestrator.submitEnabledChanged.connect(self.submit_button.setEnabled)
        self.validator.fieldStateChanged.connect(self._on_field_state_changed)
        self.model.valuesReset.connect(self._refresh_values)
        self.model.visibilityChanged.connect(self.setVisible)
        if not self.model.visible:
            self.hide()

    def _build_field(self, form_field: FormField) -> QWidget:
        container = QWidget()
        column = QVBoxLayout(container)
        column.setContentsMargins(0, 0, 0, 0)

        editor: QWidget
        if form_field.kind is FieldKind.SELECT:
            combo = QComboBox()
            for option in form_field.options:
                combo.addItem(option or f"Select {form_field.label}", option)
            combo.currentIndexChanged.connect(lambda _i, f=form_field, c=combo: self._on_selected(f, c))
            editor = combo
            self._editors[combo] = form_field
            combo.installEventFilter(self)
        elif form_field.kind is FieldKind.TEXTAREA:
            text_edit = QPlainTextEdit()
            text_edit.setPlaceholderText(form_field.placeholder)
            text_edit.textChanged.connect(lambda f=form_field, t=text_edit: self._on_edited(f, t.toPlainText()))
            editor = text_edit
            self._editors[text_edit] = form_field
            text_edit.installEventFilter(self)
        elif form_field.kind is FieldKind.PASSWORD:
            password = PasswordInput()
            password.line_edit.setPlaceholderText(form_field.placeholder)
            password.line_edit.textEdited.connect(lambda text, f=form_field: self._on_edited(f, text))
            editor = password
            self._editors[password.line_edit] = form_field
            password.line_edit.installEventFilter(self)
        else:
            line_edit = QLineEdit()
            line_edit.setPlaceholderText(form_field.placeholder)
            line_edit.textEdited.connect(lambda text, f=form_field: self._on_edited(f, text))
            editor = line_edit
            self._editors[line_edit] = form_field
            line_edit.installEventFilter(self)

        editor.setObjectName(form_field.key)
        editor.setAccessibleName(form_field.label)
        self.inputs[form_field.key] = editor

        error_label = QLabel()
        error_label.setProperty("role", "fieldError")
        error_label.setWordWrap(True)
        error_label.hide()
        self.error_labels[form_field.key] = error_label

        column.addWidget(editor)
        column.addWidget(error_label)
        return container

    def _on_edited(self, form_field: FormField, text: str) -> None:
        form_field.value = text
        if self.orchestrator.definition.live_validation:
            self.validator.on_input(form_field)

    def _on_selected(self, form_field: FormField, combo: QComboBox) -> None:
        form_field.value = combo.currentData() or ""
        if self.orchestrator.definition.live_validation:
            self.validator.on_blur(form_field)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.Type.FocusOut and watched in self._editors:
            self.validator.on_blur(self._editors[watched])
        return super().eventFilter(watched, event)

    def _styled_widget(self, key: str) -> QWidget:
        editor = self.inputs[key]
        return editor.line_edit if isinstance(editor, PasswordInput) else editor

    def _on_field_state_changed(self, key: str, state: ValidationState, message: str) -> None:
        if key not in self.inputs:
            return
        apply_validation_state(self._styled_widget(key), state.value)
        label = self.error_labels[key]
        label.setText(message)
        label.setVisible(bool(message))

    def _refresh_values(self) -> None:
        """Copy model values back into the inputs after a reset or clear."""
        for form_field in self.model:
            editor = self.inputs[form_field.key]
            editor.blockSignals(True)
            try:
                if isinstance(editor, QComboBox):
                    index = editor.findData(form_field.value)
                    editor.setCurrentIndex(max(index, 0))
                elif isinstance(editor, QPlainTextEdit):
                    editor.setPlainText(form_field.value)
                elif isinstance(editor, PasswordInput):
                    editor.line_edit.setText(form_field.value)
                    editor.set_revealed(False)
                    editor.toggle_button.setChecked(False)
                else:
                    editor.setText(form_field.value)
            finally:
                editor.blockSignals(False)
            self._on_field_state_changed(form_field.key, form_field.state, form_field.message)

    def set_value(self, key: str, value: str) -> None:
        """Set a field's value as if the user had entered it. Used by pages and tests."""
        editor = self.inputs[key]
        if isinstance(editor, QComboBox):
            editor.setCurrentIndex(max(editor.findData(value), 0))
        elif isinstance(editor, QPlainTextEdit):
            editor.setPlainText(value)
        elif isinstance(editor, PasswordInput):
            editor.line_edit.setText(value)
            self._on_edited(self.model[key], value)
        else:
            editor.setText(value)
            self._on_edited(self.model[key], value)
