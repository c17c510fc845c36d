"""
Shared styling for the FitTrack Pro client.

Colors follow WCAG AA contrast; validation styling is driven by the
``validationState`` dynamic property so one stylesheet covers every input.
"""

from typing import Any, Protocol


class StyleableWidget(Protocol):
    """Protocol for widgets that can be styled."""

    def setProperty(self, name: str, value: Any) -> bool: ...
    def style(self) -> Any: ...


class AccessiblePalette:
    """Centralized color palette."""

    # Severity colors
    SUCCESS_TEXT = "#0f5132"
    SUCCESS_BG = "#d1e7dd"
    ERROR_TEXT = "#721c24"
    ERROR_BG = "#f8d7da"
    WARNING_TEXT = "#856404"
    WARNING_BG = "#fff3cd"
    INFO_TEXT = "#055160"
    INFO_BG = "#cff4fc"

    # UI element colors
    BORDER_DEFAULT = "#dee2e6"
    BORDER_FOCUS = "#0d6efd"
    BORDER_ERROR = "#dc3545"
    BORDER_SUCCESS = "#198754"

    BACKGROUND_DEFAULT = "#ffffff"
    BACKGROUND_SECONDARY = "#f8f9fa"
    BACKGROUND_DISABLED = "#e9ecef"
    OVERLAY_BG = "rgba(0, 0, 0, 0.5)"

    TEXT_PRIMARY = "#212529"
    TEXT_SECONDARY = "#6c757d"
    TEXT_DISABLED = "#adb5bd"

    BUTTON_PRIMARY_BG = "#0d6efd"
    BUTTON_PRIMARY_TEXT = "#ffffff"


SEVERITY_COLORS: dict[str, tuple[str, str]] = {
    "success": (AccessiblePalette.SUCCESS_TEXT, AccessiblePalette.SUCCESS_BG),
    "error": (AccessiblePalette.ERROR_TEXT, AccessiblePalette.ERROR_BG),
    "warning": (AccessiblePalette.WARNING_TEXT, AccessiblePalette.WARNING_BG),
    "info": (AccessiblePalette.INFO_TEXT, AccessiblePalette.INFO_BG),
}


class StyleSheets:
    """Collection of reusable stylesheet definitions."""

    @staticmethod
    def get_form_style() -> str:
        """Stylesheet for form inputs and their error/success states."""
        return f"""
            QLineEdit, QComboBox, QPlainTextEdit {{
                border: 1px solid {AccessiblePalette.BORDER_DEFAULT};
                border-radius: 4px;
                padding: 6px;
                background-color: {AccessiblePalette.BACKGROUND_DEFAULT};
                color: {AccessiblePalette.TEXT_PRIMARY};
            }}
            QLineEdit:focus, QComboBox:focus, QPlainTextEdit:focus {{
                border: 2px solid {AccessiblePalette.BORDER_FOCUS};
            }}
            *[validationState="invalid"] {{
                border: 2px solid {AccessiblePalette.BORDER_ERROR};
            }}
            *[validationState="valid"] {{
                border: 2px solid {AccessiblePalette.BORDER_SUCCESS};
            }}
            QLabel[role="fieldError"] {{
                color: {AccessiblePalette.BORDER_ERROR};
                font-size: 12px;
            }}
            QPushButton[role="submit"] {{
                background-color: {AccessiblePalette.BUTTON_PRIMARY_BG};
                color: {AccessiblePalette.BUTTON_PRIMARY_TEXT};
                border-radius: 4px;
                padding: 8px 16px;
                font-weight: bold;
            }}
            QPushButton[role="submit"]:disabled {{
                background-color: {AccessiblePalette.BACKGROUND_DISABLED};
                color: {AccessiblePalette.TEXT_DISABLED};
            }}
        """

    @staticmethod
    def get_toast_style(severity: str) -> str:
        """Stylesheet for a single toast of the given severity."""
        text, background = SEVERITY_COLORS.get(severity, SEVERITY_COLORS["info"])
        return f"""
            QFrame {{
                background-color: {background};
                border: 1px solid {text};
                border-radius: 6px;
            }}
            QLabel {{
                color: {text};
                border: none;
                padding: 4px;
            }}
            QToolButton {{
                border: none;
                color: {text};
            }}
        """

    @staticmethod
    def get_modal_style() -> str:
        return f"""
            QWidget#modalOverlay {{
                background-color: {AccessiblePalette.OVERLAY_BG};
            }}
            QFrame#modalContent {{
                background-color: {AccessiblePalette.BACKGROUND_DEFAULT};
                border-radius: 8px;
            }}
        """


def apply_validation_state(widget: StyleableWidget, state: str) -> None:
    """Set the validationState property and re-polish so the stylesheet applies."""
    widget.setProperty("validationState", state)
    widget.style().unpolish(widget)
    widget.style().polish(widget)
