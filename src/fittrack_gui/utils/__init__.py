"""
GUI-specific utilities for the FitTrack Pro client.
"""

from .styling import AccessiblePalette, StyleSheets, apply_validation_state

__all__ = [
    "AccessiblePalette",
    "StyleSheets",
    "apply_validation_state",
]
