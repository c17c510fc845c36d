"""
Real-time input validation for FitTrack Pro forms.

Field and form models plus the controller that validates them on blur and,
debounced, while the user types.
"""

from .field import FieldKind, FormField, FormModel, ValidationState
from .field_controller import FieldValidationController

__all__ = [
    "FieldKind",
    "FieldValidationController",
    "FormField",
    "FormModel",
    "ValidationState",
]
