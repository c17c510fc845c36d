"""
Configuration manager for the FitTrack Pro client.

Provides QSettings-backed configuration management with default fallbacks
and type safety.
"""

import logging
from typing import Any

from PySide6.QtCore import QSettings

from .config import DEFAULT_CONFIG, setup_qsettings

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    QSettings-backed configuration manager with robust defaults.

    Values are coerced to the type of their default; a stored value that
    cannot be coerced falls back to the default.
    """

    def __init__(self) -> None:
        """Initialize the ConfigManager with QSettings."""
        setup_qsettings()
        self._settings = QSettings()
        self._defaults = DEFAULT_CONFIG.copy()

    def get(self, key: str, default: Any | None = None) -> Any:
        """
        Get a configuration value with fallback to defaults.

        Args:
            key: Configuration key
            default: Override default value (if None, uses DEFAULT_CONFIG)

        Returns:
            Configuration value with type coercion and default fallback
        """
        fallback = default if default is not None else self._defaults.get(key)
        value = self._settings.value(key, fallback)

        if fallback is not None:
            try:
                expected_type = type(fallback)
                if expected_type is bool:
                    # QSettings returns strings for booleans
                    value = value.lower() in ("true", "1", "yes", "on") if isinstance(value, str) else bool(value)
                elif expected_type in (int, float, str):
                    value = expected_type(value)
                elif not isinstance(value, expected_type):
                    logger.warning(f"Config key '{key}' has unexpected type, using default")
                    value = fallback
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to coerce config key '{key}': {e}, using default")
                value = fallback

        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value and persist it immediately."""
        self._settings.setValue(key, value)
        self._settings.sync()

    def load_all(self) -> dict[str, Any]:
        """
        Load all configuration values merged with defaults.

        Returns:
            Dictionary with every known key
        """
        return {key: self.get(key) for key in self._defaults}

    def reset_to_defaults(self) -> None:
        """Clear all stored settings so every key reverts to its default."""
        self._settings.clear()
        self._settings.sync()
        logger.info("Configuration reset to defaults")

    @property
    def api_base_url(self) -> str:
        return str(self.get("api_base_url")).rstrip("/")

    @property
    def toast_duration_ms(self) -> int:
        return int(self.get("toast_duration_ms"))

    @property
    def debounce_ms(self) -> int:
        return int(self.get("debounce_ms"))

    @property
    def redirect_delay_ms(self) -> int:
        return int(self.get("redirect_delay_ms"))

    @property
    def log_level(self) -> str:
        return str(self.get("log_level")).upper()
