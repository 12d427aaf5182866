"""Unit tests for configuration module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sms_index.config import Settings, get_settings


class TestSettings:
    """Test suite for Settings class."""

    def test_default_settings(self) -> None:
        """Test that default settings are properly initialized."""
        settings = Settings()

        assert settings.store_db_path == Path("mmssms.db")
        assert settings.platform_api_level == 19
        assert settings.log_level == "INFO"
        assert settings.debug is False

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading settings from environment variables."""
        monkeypatch.setenv("SMS_INDEX_STORE_DB_PATH", "/data/mmssms.db")
        monkeypatch.setenv("SMS_INDEX_PLATFORM_API_LEVEL", "16")
        monkeypatch.setenv("SMS_INDEX_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SMS_INDEX_DEBUG", "true")

        # Clear the cache to ensure fresh settings
        get_settings.cache_clear()

        settings = get_settings()

        assert settings.store_db_path == Path("/data/mmssms.db")
        assert settings.platform_api_level == 16
        assert settings.log_level == "DEBUG"
        assert settings.debug is True

        # Clean up
        get_settings.cache_clear()

    def test_api_level_must_be_positive(self) -> None:
        """Test that a nonsensical capability level is rejected."""
        with pytest.raises(ValidationError):
            Settings(platform_api_level=0)

    def test_get_settings_returns_cached_instance(self) -> None:
        """Test that get_settings returns the same cached instance."""
        get_settings.cache_clear()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

        # Clean up
        get_settings.cache_clear()
