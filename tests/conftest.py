"""Pytest fixtures and configuration for search tests."""

from __future__ import annotations

import os

# Set environment variables BEFORE any imports that might load settings
# This is necessary because settings are cached at import time
os.environ.setdefault("APP_MODE", "development")
os.environ.setdefault("LOG_LEVEL", "silent")
os.environ.setdefault("TWITTER_BEARER_TOKEN", "test-bearer-token")

from collections.abc import Callable

import pytest

from tests.helpers import RESET_AT, full_page, make_page, make_rate_limit
from tweet_search.types import RateLimitState, TweetPage


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set up mock environment variables for testing."""
    monkeypatch.setenv("APP_MODE", "development")
    monkeypatch.setenv("LOG_LEVEL", "silent")
    monkeypatch.setenv("TWITTER_BEARER_TOKEN", "test-bearer-token")


@pytest.fixture
def page_factory() -> Callable[..., TweetPage]:
    """Factory for tweet pages."""
    return make_page


@pytest.fixture
def full_page_factory() -> Callable[..., TweetPage]:
    """Factory for full (100 tweet) pages."""
    return full_page


@pytest.fixture
def rate_limit_factory() -> Callable[..., RateLimitState]:
    """Factory for rate-limit snapshots."""
    return make_rate_limit


@pytest.fixture
def search_payload() -> dict:
    """Raw search response body as returned by the API."""
    return {
        "statuses": [
            {
                "id": 1800000000000000300,
                "id_str": "1800000000000000300",
                "text": "Newest matching tweet",
                "created_at": "Mon Jun 10 12:00:00 +0000 2024",
                "lang": "en",
                "user": {"screen_name": "someone"},
                "retweet_count": 3,
            },
            {
                "id": 1800000000000000100,
                "id_str": "1800000000000000100",
                "text": "Older matching tweet",
                "created_at": "Mon Jun 10 11:00:00 +0000 2024",
                "lang": "en",
            },
        ],
        "search_metadata": {"count": 100, "query": "python"},
    }


@pytest.fixture
def rate_limit_headers() -> dict[str, str]:
    """Quota headers matching RESET_AT."""
    return {
        "x-rate-limit-limit": "450",
        "x-rate-limit-remaining": "449",
        "x-rate-limit-reset": str(int(RESET_AT.timestamp())),
    }
