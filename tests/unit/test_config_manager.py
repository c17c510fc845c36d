"""
Tests for the ConfigManager class.
"""

from unittest.mock import Mock, patch

from fittrack_core.config import DEFAULT_CONFIG
from fittrack_core.config_manager import ConfigManager


class TestConfigManager:
    """Test cases for ConfigManager."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        # Mock QSettings so tests never touch the real settings store
        self.settings_patcher = patch("fittrack_core.config_manager.QSettings")
        self.mock_qsettings_class = self.settings_patcher.start()
        self.mock_qsettings = Mock()
        self.mock_qsettings_class.return_value = self.mock_qsettings

        self.setup_patcher = patch("fittrack_core.config_manager.setup_qsettings")
        self.mock_setup = self.setup_patcher.start()

    def teardown_method(self) -> None:
        """Clean up test fixtures."""
        self.settings_patcher.stop()
        self.setup_patcher.stop()

    def test_init(self) -> None:
        """Test ConfigManager initialization."""
        ConfigManager()

        self.mock_setup.assert_called_once()
        self.mock_qsettings_class.assert_called_once()

    def test_every_default_has_accessor(self) -> None:
        """Test that each configuration key is read through a typed property."""
        for key in DEFAULT_CONFIG:
            assert isinstance(getattr(ConfigManager, key, None), property), key

    def test_get_with_default(self) -> None:
        """Test getting a value with default fallback."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.side_effect = lambda key, default: default

        assert config_manager.get("toast_duration_ms") == 5000
        self.mock_qsettings.value.assert_called_with("toast_duration_ms", 5000)

    def test_get_int_coercion(self) -> None:
        """Test that stored strings are coerced to the default's type."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = "750"

        assert config_manager.debounce_ms == 750

    def test_get_bad_value_falls_back(self) -> None:
        """Test that an uncoercible value yields the default."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = "soon"

        assert config_manager.redirect_delay_ms == 1000

    def test_api_base_url_strips_slash(self) -> None:
        """Test the base URL property."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.return_value = "https://api.example.com/auth/"

        assert config_manager.api_base_url == "https://api.example.com/auth"

    def test_set_persists(self) -> None:
        """Test that set writes and syncs."""
        config_manager = ConfigManager()

        config_manager.set("debounce_ms", 500)

        self.mock_qsettings.setValue.assert_called_once_with("debounce_ms", 500)
        self.mock_qsettings.sync.assert_called_once()

    def test_load_all(self) -> None:
        """Test that every known key is loaded."""
        config_manager = ConfigManager()
        self.mock_qsettings.value.side_effect = lambda key, default: default

        assert config_manager.load_all() == DEFAULT_CONFIG

    def test_reset_to_defaults(self) -> None:
        """Test clearing stored settings."""
        config_manager = ConfigManager()

        config_manager.reset_to_defaults()

        self.mock_qsettings.clear.assert_called_once()
        self.mock_qsettings.sync.assert_called_once()
