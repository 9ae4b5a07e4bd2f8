"""Tests for logging configuration."""

import os
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

from api_surface.logging import get_surface_logger, setup_logging
from api_surface.logging.logging_config import DEFAULT_LOG_LEVELS, LoggingConfig


class TestLoggingConfig:
    """Test LoggingConfig class."""

    def test_default_config_path_from_env(self):
        """Test getting config path from environment."""
        with patch.dict(os.environ, {"API_SURFACE_LOGGING_CONFIG": "/path/to/config.yml"}):
            config = LoggingConfig()
            assert config.config_path == Path("/path/to/config.yml")

    def test_no_config_path_returns_none(self):
        """Test that no env vars results in None config path."""
        with patch.dict(os.environ, clear=True):
            config = LoggingConfig()
            assert config.config_path is None

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        """Test loading config from YAML file."""
        config_file = tmp_path / "logging.yml"
        config_file.write_text("""
version: 1
disable_existing_loggers: false
handlers:
  console:
    class: logging.StreamHandler
""")

        config = LoggingConfig(config_path=config_file)
        loaded = config.load_config()

        assert loaded["version"] == 1
        assert loaded["disable_existing_loggers"] is False
        assert "console" in loaded["handlers"]

    def test_load_default_config_when_no_file(self, tmp_path: Path) -> None:
        """Test loading default config when the configured file does not exist."""
        config = LoggingConfig(config_path=tmp_path / "missing.yml")
        loaded = config.load_config()

        assert loaded["version"] == 1
        assert "formatters" in loaded
        assert "handlers" in loaded
        assert "api_surface" in loaded["loggers"]

    def test_default_level_from_env(self):
        with patch.dict(os.environ, {"API_SURFACE_LOG_LEVEL": "DEBUG"}, clear=True):
            loaded = LoggingConfig().load_config()
        assert loaded["loggers"]["api_surface"]["level"] == "DEBUG"

    def test_config_cached(self):
        config = LoggingConfig()
        assert config.load_config() is config.load_config()

    @patch("logging.config.dictConfig")
    def test_apply_config(self, mock_dict_config: Mock) -> None:
        """Test applying logging configuration."""
        config = LoggingConfig()
        config.apply()

        mock_dict_config.assert_called_once()
        call_args = mock_dict_config.call_args[0][0]
        assert call_args["version"] == 1


class TestSetupLogging:
    """Test setup_logging function."""

    @patch("api_surface.logging.logging_config.LoggingConfig.apply")
    def test_setup_logging_basic(self, mock_apply: Mock) -> None:
        setup_logging()
        mock_apply.assert_called_once()

    @patch("api_surface.logging.logging_config.getLogger")
    @patch("api_surface.logging.logging_config.LoggingConfig.apply")
    def test_setup_logging_with_level(self, mock_apply: Mock, mock_get_logger: Mock) -> None:
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        setup_logging(level="DEBUG")

        assert mock_get_logger.call_count == len(DEFAULT_LOG_LEVELS)
        mock_logger.setLevel.assert_called_with("DEBUG")

    @patch("api_surface.logging.logging_config.LoggingConfig")
    def test_setup_logging_with_config_path(self, mock_config_class: Mock, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.yml"
        mock_instance = MagicMock()
        mock_config_class.return_value = mock_instance

        setup_logging(config_path=config_file)

        mock_config_class.assert_called_once_with(config_file)
        mock_instance.apply.assert_called_once()


class TestGetSurfaceLogger:
    """Test get_surface_logger function."""

    @patch("api_surface.logging.logging_config.setup_logging")
    @patch("api_surface.logging.logging_config.getLogger")
    def test_get_surface_logger_ensures_setup(self, mock_get_logger: Mock, mock_setup: Mock) -> None:
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        import api_surface.logging.logging_config

        with patch.object(api_surface.logging.logging_config, "_logging_config", None):
            logger = get_surface_logger("test.module")

        mock_setup.assert_called_once()
        mock_get_logger.assert_called_with("test.module")
        assert logger == mock_logger

    @patch("api_surface.logging.logging_config.getLogger")
    def test_get_surface_logger_reuses_config(self, mock_get_logger: Mock) -> None:
        import api_surface.logging.logging_config

        with (
            patch.object(api_surface.logging.logging_config, "_logging_config", MagicMock()),
            patch("api_surface.logging.logging_config.setup_logging") as mock_setup,
        ):
            get_surface_logger("module1")
            get_surface_logger("module2")

            mock_setup.assert_not_called()
            assert mock_get_logger.call_count == 2
