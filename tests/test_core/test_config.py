"""Tests for korrupt.core.config."""

import pytest
from pydantic import ValidationError

from korrupt.core.config import LogLevel, Settings, get_settings
from korrupt.core.constants import DEFAULT_OUTPUT_TEMPLATE


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove KORRUPT_* variables and reset the settings singleton."""
    for name in (
        "KORRUPT_OUTPUT_TEMPLATE",
        "KORRUPT_NOISE_DENSITY",
        "KORRUPT_MAX_INPUT_MB",
        "KORRUPT_LOG_LEVEL",
        "KORRUPT_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    get_settings(force_reload=True)


class TestSettings:
    """Tests for Settings defaults and validation."""

    def test_defaults(self):
        """Test default values."""
        settings = Settings(_env_file=None)

        assert settings.output_template == DEFAULT_OUTPUT_TEMPLATE
        assert settings.noise_density == 0.5
        assert settings.max_input_mb == 256
        assert settings.log_level is LogLevel.WARNING
        assert settings.log_format == "console"

    def test_env_override(self, monkeypatch):
        """Test KORRUPT_* environment variables override defaults."""
        monkeypatch.setenv("KORRUPT_NOISE_DENSITY", "0.25")
        monkeypatch.setenv("KORRUPT_OUTPUT_TEMPLATE", "/out/@@seed@@.bin")
        monkeypatch.setenv("KORRUPT_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.noise_density == 0.25
        assert settings.output_template == "/out/@@seed@@.bin"
        assert settings.log_level is LogLevel.DEBUG

    @pytest.mark.parametrize("density", [-0.5, 1.01])
    def test_density_bounds(self, density):
        """Test noise density must be a probability."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, noise_density=density)

    def test_log_format_validated(self):
        """Test unknown log formats are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")

    def test_log_format_normalized(self):
        """Test log format is lowercased."""
        assert Settings(_env_file=None, log_format="JSON").log_format == "json"


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_singleton(self):
        """Test repeated calls return the same instance."""
        assert get_settings() is get_settings()

    def test_force_reload(self, monkeypatch):
        """Test force_reload picks up environment changes."""
        get_settings(force_reload=True)
        monkeypatch.setenv("KORRUPT_MAX_INPUT_MB", "4")

        assert get_settings(force_reload=True).max_input_mb == 4
