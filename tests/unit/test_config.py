"""Tests for environment-driven configuration."""
import pytest
from pydantic import ValidationError

from fyla.config import (
    DEFAULT_API_URL,
    DEFAULT_DB_URL,
    DEFAULT_SEED_PASSWORD,
    ApiSettings,
    ClientConfig,
    MockSettings,
)


class TestClientConfig:
    """Test ClientConfig.from_env()."""

    def test_defaults(self):
        """Empty environment should give the local development defaults."""
        config = ClientConfig.from_env({})

        assert config.api.base_url == DEFAULT_API_URL
        assert config.api.retry_attempts == 1
        assert config.api.circuit_breaker_threshold is None
        assert config.mock.delays_enabled is True
        assert config.mock.min_delay_ms == 1000
        assert config.mock.seed is None
        assert config.seed.database_url == DEFAULT_DB_URL
        assert config.seed.default_password == DEFAULT_SEED_PASSWORD
        assert config.log_level == "INFO"

    def test_reads_environment(self):
        """FYLA_* variables should override the defaults."""
        config = ClientConfig.from_env({
            "FYLA_API_URL": "https://api.fyla.app/api",
            "FYLA_FALLBACK_URLS": "https://backup.fyla.app/api, http://10.0.2.2:5002/api",
            "FYLA_API_TIMEOUT": "10",
            "FYLA_RETRY_ATTEMPTS": "3",
            "FYLA_ENABLE_MOCK_DELAYS": "false",
            "FYLA_MOCK_DELAY_MIN_MS": "100",
            "FYLA_MOCK_DELAY_MAX_MS": "300",
            "FYLA_MOCK_SEED": "7",
            "FYLA_CIRCUIT_BREAKER_THRESHOLD": "5",
            "FYLA_DB_URL": "sqlite:///other.db",
            "FYLA_LOG_LEVEL": "DEBUG",
        })

        assert config.api.base_url == "https://api.fyla.app/api"
        assert config.api.fallback_urls == ["https://backup.fyla.app/api", "http://10.0.2.2:5002/api"]
        assert config.api.timeout == 10
        assert config.api.retry_attempts == 3
        assert config.api.circuit_breaker_threshold == 5
        assert config.mock.delays_enabled is False
        assert (config.mock.min_delay_ms, config.mock.max_delay_ms) == (100, 300)
        assert config.mock.seed == 7
        assert config.seed.database_url == "sqlite:///other.db"
        assert config.log_level == "DEBUG"

    def test_max_delay_defaults_to_min_delay(self):
        config = ClientConfig.from_env({"FYLA_MOCK_DELAY_MIN_MS": "250"})

        assert config.mock.max_delay_ms == 250


class TestSettingsValidation:
    """Test pydantic validation of settings."""

    def test_candidate_urls_dedupe_and_order(self):
        """Base URL comes first and duplicates are dropped."""
        settings = ApiSettings(
            base_url="http://a.test/api/",
            fallback_urls=["http://a.test/api", "http://b.test/api", "http://b.test/api/"],
        )

        assert settings.candidate_urls == ["http://a.test/api", "http://b.test/api"]

    def test_retry_attempts_must_be_positive(self):
        with pytest.raises(ValidationError):
            ApiSettings(retry_attempts=0)

    def test_max_delay_below_min_rejected(self):
        with pytest.raises(ValidationError):
            MockSettings(min_delay_ms=500, max_delay_ms=100)
