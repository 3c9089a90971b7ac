"""
Tests for configuration loading.
"""

from datetime import timedelta

import pytest

from floodwatch.config import (
    DEFAULT_FEED_URL,
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_TIMEOUT,
    FeedConfig,
)


class TestFeedConfig:
    def test_defaults(self):
        config = FeedConfig()

        assert config.url == DEFAULT_FEED_URL
        assert config.timeout == DEFAULT_TIMEOUT == 30
        assert config.refresh_interval == DEFAULT_REFRESH_INTERVAL == 300
        assert config.stale_after == timedelta(hours=24)

    def test_from_env_overrides(self):
        config = FeedConfig.from_env(
            {
                "FLOODWATCH_FEED_URL": "https://example.test/feed.json",
                "FLOODWATCH_TIMEOUT": "7.5",
                "FLOODWATCH_REFRESH_INTERVAL": "60",
            }
        )

        assert config.url == "https://example.test/feed.json"
        assert config.timeout == 7.5
        assert config.refresh_interval == 60.0

    def test_from_env_empty(self):
        assert FeedConfig.from_env({}) == FeedConfig()

    @pytest.mark.parametrize("value", ["soon", "-5", "0"])
    def test_invalid_numbers_keep_defaults(self, value, caplog):
        config = FeedConfig.from_env(
            {"FLOODWATCH_TIMEOUT": value, "FLOODWATCH_REFRESH_INTERVAL": value}
        )

        assert config.timeout == DEFAULT_TIMEOUT
        assert config.refresh_interval == DEFAULT_REFRESH_INTERVAL
        assert "FLOODWATCH_TIMEOUT" in caplog.text

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("FLOODWATCH_FEED_URL", "https://example.test/env.json")

        assert FeedConfig.from_env().url == "https://example.test/env.json"
