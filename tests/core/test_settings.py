"""Tests for Settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from api_surface.settings import Settings, settings


class TestSettings:
    """Test Settings configuration."""

    def test_default_values(self):
        """Test default Settings values when env vars/files are not set."""
        with patch.dict(os.environ, clear=True):
            s = Settings(_env_file=None)

        assert s.entry_pattern == "modules/*/index.ts"
        assert s.output_file == "output.json"
        assert s.formatter == "none"
        assert s.prettier_command == "prettier"
        assert s.json_indent == 2
        assert s.unresolved_type_text == "unknown"

    @patch.dict(
        os.environ,
        {
            "API_SURFACE_ENTRY_PATTERN": "packages/*/src/index.ts",
            "API_SURFACE_FORMATTER": "prettier",
            "API_SURFACE_JSON_INDENT": "4",
        },
    )
    def test_env_variable_loading(self):
        """Test loading settings from prefixed environment variables."""
        s = Settings(_env_file=None)
        assert s.entry_pattern == "packages/*/src/index.ts"
        assert s.formatter == "prettier"
        assert s.json_indent == 4

    @patch.dict(os.environ, {"ENTRY_PATTERN": "ignored/*.ts", "API_SURFACE_UNKNOWN": "ignored"})
    def test_unprefixed_and_unknown_env_ignored(self):
        s = Settings(_env_file=None)
        assert s.entry_pattern != "ignored/*.ts"
        assert not hasattr(s, "unknown")

    @patch.dict(os.environ, {"API_SURFACE_FORMATTER": "black"})
    def test_invalid_formatter_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_env_file_loading(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("API_SURFACE_OUTPUT_FILE=docs/api.json\n")
        with patch.dict(os.environ, clear=True):
            s = Settings(_env_file=env_file)
        assert s.output_file == "docs/api.json"

    def test_settings_frozen(self):
        with pytest.raises(ValidationError):
            settings.json_indent = 8  # type: ignore[misc]

    def test_module_instance(self):
        assert isinstance(settings, Settings)
