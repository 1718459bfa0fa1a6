"""Tests for application settings and search configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from search_utils.settings import Settings, get_settings
from tweet_search.types import MAX_TWEET_ID, ResultType, SearchConfig


class TestSettings:
    """Tests for environment-driven settings."""

    def test_values_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test settings read their aliases from the environment."""
        monkeypatch.setenv("APP_MODE", "production")
        monkeypatch.setenv("TWITTER_API_BASE_URL", "https://api.example.test")
        monkeypatch.setenv("TWITTER_TIMEOUT", "12.5")

        settings = Settings()

        assert settings.is_production
        assert settings.twitter_api_base_url == "https://api.example.test"
        assert settings.twitter_timeout == 12.5

    def test_token_is_secret(self, mock_settings: None) -> None:
        """Test the bearer token is not exposed in its repr."""
        settings = Settings()

        assert settings.twitter_bearer_token is not None
        assert "test-bearer-token" not in repr(settings)
        assert settings.twitter_bearer_token.get_secret_value() == "test-bearer-token"

    def test_get_settings_cached(self) -> None:
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()


class TestSearchConfig:
    """Tests for the per-search configuration value."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = SearchConfig()

        assert config.since_id is None
        assert config.language is None
        assert config.result_type is None
        assert config.stop_on_pending_reset is False

    def test_custom_values(self) -> None:
        """Test custom configuration values."""
        config = SearchConfig(since_id=MAX_TWEET_ID, language="ja", result_type=ResultType.POPULAR)

        assert config.since_id == MAX_TWEET_ID
        assert config.result_type is ResultType.POPULAR

    def test_since_id_out_of_range(self) -> None:
        """Test ids beyond 64 bits are rejected."""
        with pytest.raises(ValidationError):
            SearchConfig(since_id=MAX_TWEET_ID + 1)

    def test_unknown_field_rejected(self) -> None:
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            SearchConfig(max_id=5)  # type: ignore[call-arg]
