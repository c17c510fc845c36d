"""
Toast notifications for the FitTrack Pro client.

ToastManager owns the live toasts and their dismissal timers; ToastContainer
renders them as stacked frames in a corner of the main window.
"""

import itertools
import logging
from dataclasses import dataclass

from PySide6.QtCore import QObject, Qt, QTimer, Signal, Slot
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QToolButton, QVBoxLayout, QWidget

from fittrack_gui.utils.styling import StyleSheets

DEFAULT_TOAST_DURATION_MS = 5000

SEVERITIES = ("success", "error", "warning", "info")

ICONS = {
    "success": "✓",
    "error": "✕",
    "warning": "⚠",
    "info": "ℹ",
}


@dataclass(frozen=True)
class Toast:
    id: int
    message: str
    severity: str = "info"


class ToastManager(QObject):
    """
    Shows and dismisses toasts.

    Every toast auto-dismisses after ``duration_ms``; hide() removes one
    early. A duration of 0 keeps the toast until it is hidden by hand.

    Signals:
        toastShown(object): A Toast was added
        toastHidden(int): The toast with this id was removed
    """

    toastShown = Signal(object)
    toastHidden = Signal(int)

    def __init__(self, duration_ms: int = DEFAULT_TOAST_DURATION_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._duration_ms = duration_ms
        self._ids = itertools.count(1)
        self._toasts: dict[int, Toast] = {}
        self._timers: dict[int, QTimer] = {}

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    def toasts(self) -> list[Toast]:
        """Live toasts, oldest first."""
        return list(self._toasts.values())

    def show(self, message: str, severity: str = "info", duration_ms: int | None = None) -> int:
        """
        Show a toast.

        Args:
            message: Text to display
            severity: One of 'success', 'error', 'warning', 'info'
            duration_ms: Overrides the manager's default lifetime

        Returns:
            The toast id, usable with hide()
        """
        if severity not in SEVERITIES:
            self._logger.warning(f"Unknown toast severity '{severity}', using 'info'")
            severity = "info"

        toast = Toast(next(self._ids), message, severity)
        self._toasts[toast.id] = toast
        self._logger.info(f"Toast [{severity}] {message}")
        self.toastShown.emit(toast)

        lifetime = self._duration_ms if duration_ms is None else duration_ms
        if lifetime > 0:
            timer = QTimer(self)
            timer.setSingleShot(True)
            timer.setProperty("toastId", toast.id)
            timer.timeout.connect(self._on_timer_timeout)
            self._timers[toast.id] = timer
            timer.start(lifetime)

        return toast.id

    @Slot()
    def _on_timer_timeout(self) -> None:
        timer = self.sender()
        if timer is not None:
            self.hide(int(timer.property("toastId")))

    def success(self, message: str) -> int:
        return self.show(message, "success")

    def error(self, message: str) -> int:
        return self.show(message, "error")

    def warning(self, message: str) -> int:
        return self.show(message, "warning")

    def info(self, message: str) -> int:
        return self.show(message, "info")

    def hide(self, toast_id: int) -> bool:
        """
        Remove a toast.

        Returns:
            False if no toast with this id is showing
        """
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()

        if self._toasts.pop(toast_id, None) is None:
            return False

        self.toastHidden.emit(toast_id)
        return True

    def clear(self) -> None:
        for toast_id in list(self._toasts):
            self.hide(toast_id)

    def cleanup(self) -> None:
        """Stop every timer and drop all toasts."""
        self.clear()
        self._timers.clear()


class ToastWidget(QFrame):
    """
    A single rendered toast with a close button.

    Signals:
        dismissRequested(int): The close button was clicked for this toast id
    """

    dismissRequested = Signal(int)

    def __init__(self, toast: Toast, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.toast = toast
        self.setObjectName(f"toast-{toast.id}")
        self.setStyleSheet(StyleSheets.get_toast_style(toast.severity))
        self.setAccessibleName(f"{toast.severity} notification")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 4, 4)

        self.icon_label = QLabel(ICONS[toast.severity])
        self.message_label = QLabel(toast.message)
        self.message_label.setWordWrap(True)
        self.close_button = QToolButton()
        self.close_button.setText("×")
        self.close_button.setToolTip("Dismiss")
        self.close_button.clicked.connect(self._on_close_clicked)

        layout.addWidget(self.icon_label)
        layout.addWidget(self.message_label, 1)
        layout.addWidget(self.close_button)

    @Slot()
    def _on_close_clicked(self) -> None:
        self.dismissRequested.emit(self.toast.id)


class ToastContainer(QWidget):
    """Stacks ToastWidgets for every toast the manager is showing."""

    def __init__(self, manager: ToastManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._manager = manager
        self._widgets: dict[int, ToastWidget] = {}
        self.setObjectName("toastContainer")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(6)
        self._layout.setAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignRight)

        manager.toastShown.connect(self._on_toast_shown)
        manager.toastHidden.connect(self._on_toast_hidden)

    def widget_for(self, toast_id: int) -> ToastWidget | None:
        return self._widgets.get(toast_id)

    def _on_toast_shown(self, toast: Toast) -> None:
        widget = ToastWidget(toast, self)
        widget.dismissRequested.connect(self._manager.hide)
        self._widgets[toast.id] = widget
        self._layout.addWidget(widget)
        widget.show()
        self.adjustSize()
        self.raise_()

    def _on_toast_hidden(self, toast_id: int) -> None:
        widget = self._widgets.pop(toast_id, None)
        if widget is not None:
            self._layout.removeWidget(widget)
            widget.hide()
            widget.deleteLater()
            self.adjustSize()
