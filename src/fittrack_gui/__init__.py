"""
PySide6 user interface for the FitTrack Pro client.
"""
