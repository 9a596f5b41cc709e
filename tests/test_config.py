"""Tests for settings and logging configuration."""

import pytest
import structlog
from pydantic import ValidationError

from grid_cluster.config import Settings, configure_logging


class TestSettings:
    """Test environment driven settings."""

    def test_defaults(self):
        """Test default values."""
        settings = Settings()
        assert settings.base_side_width > 0
        assert settings.min_side_pixels == 30
        assert settings.buffer_factor == 0.5

    def test_environment_override(self, monkeypatch):
        """Test overriding settings from the environment."""
        monkeypatch.setenv("GRID_CLUSTER_BASE_SIDE_WIDTH", "250")
        monkeypatch.setenv("GRID_CLUSTER_IGNORE_FEATURE_CHANGES", "true")

        settings = Settings()

        assert settings.base_side_width == 250
        assert settings.ignore_feature_changes is True

    def test_rejects_non_positive_base_width(self):
        """Test rejects non positive base width."""
        with pytest.raises(ValidationError):
            Settings(base_side_width=0)


class TestLogging:
    """Test structlog configuration."""

    @pytest.mark.parametrize("log_format", ["json", "console"])
    def test_configure_logging(self, log_format):
        """Test logging setup for each output format."""
        configure_logging(Settings(log_format=log_format, log_level="DEBUG"))
        structlog.get_logger("test").info("Logging configured", log_format=log_format)
        structlog.reset_defaults()
