"""
Configuration defaults for the FitTrack Pro client.

This module provides application identifiers, the default configuration
and helpers for locating application directories.
"""

from pathlib import Path
from typing import Any

from PySide6.QtCore import QCoreApplication, QStandardPaths

# Application identifiers for QSettings
APP_ORGANIZATION = "FitTrack"
APP_NAME = "FitTrack Pro"

# Service name stamped on every file log record
SERVICE_NAME = "fitness-tracker"

# Default configuration with all supported keys and JSON-serializable types
DEFAULT_CONFIG: dict[str, Any] = {
    # Backend
    "api_base_url": "http://localhost:3000/api/auth",
    # UI timings (milliseconds)
    "toast_duration_ms": 5000,
    "debounce_ms": 300,
    "redirect_delay_ms": 1000,
    # Debug settings
    "log_level": "INFO",  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
}


def get_app_data_dir() -> Path:
    """
    Get the writable application data directory.

    Falls back to the config location when no app data location is available.
    """
    app_data_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    if app_data_location:
        return Path(app_data_location)

    config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
    return Path(config_location) / APP_ORGANIZATION / APP_NAME


def get_logs_dir() -> Path:
    """Get the directory where rotating log files are written."""
    return get_app_data_dir() / "logs"


def setup_qsettings() -> None:
    """
    Configure QSettings with application identifiers.

    This should be called early in application startup to ensure
    QSettings uses the correct organization and application names.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
