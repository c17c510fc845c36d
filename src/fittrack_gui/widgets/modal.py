"""
In-window modal dialogs.

A ModalOverlay dims the window it covers and centers a content frame on it.
ModalManager keeps the overlays by name so pages can show and hide them
without holding widget references.
"""

import logging

from PySide6.QtCore import QEvent, QObject, Qt, Signal
from PySide6.QtGui import QKeyEvent, QMouseEvent
from PySide6.QtWidgets import QFrame, QLabel, QPushButton, QVBoxLayout, QWidget

from fittrack_gui.utils.styling import StyleSheets


class ModalManager(QObject):
    """
    Registry of named modal overlays.

    Signals:
        modalShown(str): The named modal became visible
        modalHidden(str): The named modal was hidden
    """

    modalShown = Signal(str)
    modalHidden = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._overlays: dict[str, ModalOverlay] = {}
        self._open: list[str] = []

    def register(self, name: str, overlay: "ModalOverlay") -> None:
        if name in self._overlays:
            raise ValueError(f"Modal '{name}' is already registered")
        self._overlays[name] = overlay
        overlay.bind(self, name)

    def names(self) -> list[str]:
        return list(self._overlays)

    def is_open(self, name: str) -> bool:
        return name in self._open

    def open_modals(self) -> list[str]:
        return list(self._open)

    def show(self, name: str) -> bool:
        """
        Show the named modal.

        Returns:
            False if no modal is registered under that name
        """
        overlay = self._overlays.get(name)
        if overlay is None:
            self._logger.warning(f"Unknown modal '{name}'")
            return False

        overlay.present()
        if name not in self._open:
            self._open.append(name)
            self.modalShown.emit(name)
        return True

    def hide(self, name: str) -> bool:
        overlay = self._overlays.get(name)
        if overlay is None:
            return False

        overlay.hide()
        if name in self._open:
            self._open.remove(name)
            self.modalHidden.emit(name)
        return True

    def hide_all(self) -> None:
        """Hide every open modal. Bound to the Escape key."""
        for name in list(self._open):
            self.hide(name)


class ModalOverlay(QWidget):
    """
    Translucent overlay with a centered content frame.

    Clicking the overlay outside the frame, or pressing Escape, hides it
    through the manager it is registered with.
    """

    def __init__(self, title: str, message: str = "", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._manager: ModalManager | None = None
        self._name = ""

        self.setObjectName("modalOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(StyleSheets.get_modal_style())
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        outer = QVBoxLayout(self)
        outer.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.content = QFrame(self)
        self.content.setObjectName("modalContent")
        self.content.setMinimumWidth(320)
        self.content_layout = QVBoxLayout(self.content)
        self.content_layout.setContentsMargins(24, 24, 24, 24)

        self.title_label = QLabel(title)
        self.title_label.setStyleSheet("font-size: 18px; font-weight: bold;")
        self.message_label = QLabel(message)
        self.message_label.setWordWrap(True)
        self.content_layout.addWidget(self.title_label)
        self.content_layout.addWidget(self.message_label)

        outer.addWidget(self.content)
        self.hide()

        if parent is not None:
            parent.installEventFilter(self)

    @property
    def name(self) -> str:
        return self._name

    def bind(self, manager: ModalManager, name: str) -> None:
        self._manager = manager
        self._name = name

    def add_action(self, text: str, callback, *, primary: bool = False) -> QPushButton:
        """Append a button to the content frame."""
        button = QPushButton(text)
        if primary:
            button.setProperty("role", "submit")
        button.clicked.connect(callback)
        self.content_layout.addWidget(button)
        return button

    def present(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())
        self.show()
        self.raise_()
        self.setFocus()

    def dismiss(self) -> None:
        if self._manager is not None:
            self._manager.hide(self._name)
        else:
            self.hide()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if not self.content.geometry().contains(event.position().toPoint()):
            self.dismiss()
            event.accept()
            return
        super().mousePressEvent(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key.Key_Escape:
            if self._manager is not None:
                self._manager.hide_all()
            else:
                self.hide()
            event.accept()
            return
        super().keyPressEvent(event)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        # Track the covered window's size
        if watched is self.parentWidget() and event.type() == QEvent.Type.Resize and self.isVisible():
            self.setGeometry(self.parentWidget().rect())
        return super().eventFilter(watched, event)
