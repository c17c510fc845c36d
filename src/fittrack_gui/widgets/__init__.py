"""
Reusable widgets for the FitTrack Pro client.
"""

from .modal import ModalManager, ModalOverlay
from .toast import Toast, ToastContainer, ToastManager

__all__ = [
    "ModalManager",
    "ModalOverlay",
    "Toast",
    "ToastContainer",
    "ToastManager",
]
