"""Tests for connection configuration schemas."""

import pytest
from pydantic import ValidationError

from swift_tools.core.config import Settings
from swift_tools.schemas import SwiftStorageConfig


class TestSwiftStorageConfig:
    """Test storage connection configuration."""

    def test_config_creation(self):
        """Test configuration creation."""
        config = SwiftStorageConfig(
            user="12345",
            key="secret",
            auth_url="https://auth.example/",
            response_format="json",
            timeout_ms=5000,
        )
        assert config.user == "12345"
        assert config.key == "secret"
        assert config.auth_url == "https://auth.example/"
        assert config.response_format == "json"
        assert config.timeout_ms == 5000

    def test_config_defaults(self):
        """Test configuration defaults."""
        config = SwiftStorageConfig(user="12345", key="secret")
        assert config.auth_url == "https://auth.selcdn.ru/"
        assert config.response_format == ""
        assert config.timeout_ms is None
        assert config.verify_tls is True

    def test_config_missing_required_fields(self):
        """Test configuration validation with missing fields."""
        with pytest.raises(ValidationError):
            SwiftStorageConfig(user="12345")  # Missing key

    def test_config_invalid_format(self):
        """Test unknown listing formats are rejected."""
        with pytest.raises(ValidationError):
            SwiftStorageConfig(user="u", key="k", response_format="yaml")

    def test_config_invalid_timeout(self):
        """Test non-positive timeouts are rejected."""
        with pytest.raises(ValidationError):
            SwiftStorageConfig(user="u", key="k", timeout_ms=0)

    def test_config_forbids_extra_fields(self):
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            SwiftStorageConfig(user="u", key="k", region="eu")


class TestSettings:
    """Test environment driven settings."""

    def test_env_overrides(self, monkeypatch):
        """Test SWIFT_TOOLS_ environment variables."""
        monkeypatch.setenv("SWIFT_TOOLS_AUTH_URL", "https://auth.internal/")
        monkeypatch.setenv("SWIFT_TOOLS_TIMEOUT_MS", "750")
        monkeypatch.setenv("SWIFT_TOOLS_VERIFY_TLS", "false")

        settings = Settings()

        assert settings.auth_url == "https://auth.internal/"
        assert settings.timeout_ms == 750
        assert settings.verify_tls is False
