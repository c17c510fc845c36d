"""
Main entry point for the FitTrack Pro client.
"""

import sys

from PySide6.QtWidgets import QApplication

from fittrack_core.config import APP_NAME, APP_ORGANIZATION
from fittrack_core.config_manager import ConfigManager
from fittrack_core.error_handler import init_logging, setup_error_handling
from fittrack_gui.main_window import MainWindow


def main() -> int:
    """Main application entry point."""
    app = QApplication(sys.argv)
    app.setOrganizationName(APP_ORGANIZATION)
    app.setApplicationName(APP_NAME)

    init_logging(ConfigManager().log_level)
    setup_error_handling()

    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
