"""Configuration for the FYLA client and seed scripts.

Values come from the environment (a local .env file is loaded on import).
Defaults match a backend running locally on port 5002.
"""
import os
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

load_dotenv()

DEFAULT_API_URL = "http://localhost:5002/api"

# Tried in order when the current base URL stops answering
FALLBACK_URLS = [
    "http://localhost:5002/api",
    "http://127.0.0.1:5002/api",
]

HEALTH_PATH = "/health"

DEFAULT_SEED_PASSWORD = "TempPassword123!"
DEFAULT_DB_URL = "sqlite:///fyla.db"


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(env: Mapping[str, str], name: str, default: List[str]) -> List[str]:
    value = env.get(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class ApiSettings(BaseModel):
    """Transport settings for the REST API."""
    base_url: str = Field(default=DEFAULT_API_URL, description="Preferred base URL")
    fallback_urls: List[str] = Field(default_factory=lambda: list(FALLBACK_URLS))
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    health_timeout: float = Field(default=5.0, gt=0, description="Timeout for /health checks")
    retry_attempts: int = Field(default=1, ge=1, description="Attempts per base URL (1 = no retry)")
    retry_backoff: float = Field(default=1.0, ge=0, description="Exponential backoff multiplier")
    retry_max_wait: float = Field(default=8.0, ge=0, description="Upper bound for a single backoff")
    circuit_breaker_threshold: Optional[int] = Field(
        default=None,
        ge=1,
        description="Consecutive failures before failing fast (None disables the breaker)"
    )
    circuit_breaker_timeout: float = Field(default=60.0, gt=0)

    @property
    def candidate_urls(self) -> List[str]:
        """Base URL followed by the fallbacks, without duplicates."""
        urls: List[str] = []
        for url in [self.base_url, *self.fallback_urls]:
            normalized = url.rstrip("/")
            if normalized and normalized not in urls:
                urls.append(normalized)
        return urls


class MockSettings(BaseModel):
    """Mock data source settings."""
    delays_enabled: bool = True
    min_delay_ms: int = Field(default=1000, ge=0)
    max_delay_ms: int = Field(default=1000, ge=0)
    seed: Optional[int] = Field(default=None, description="Seed for reproducible mock data")

    @model_validator(mode="after")
    def check_delay_range(self) -> "MockSettings":
        if self.max_delay_ms < self.min_delay_ms:
            raise ValueError("max_delay_ms must be greater than or equal to min_delay_ms")
        return self


class SeedSettings(BaseModel):
    """Settings shared by the seed scripts."""
    database_url: str = DEFAULT_DB_URL
    default_password: str = DEFAULT_SEED_PASSWORD


class ClientConfig(BaseModel):
    """Top-level configuration object handed to the client at composition time."""
    api: ApiSettings = Field(default_factory=ApiSettings)
    mock: MockSettings = Field(default_factory=MockSettings)
    seed: SeedSettings = Field(default_factory=SeedSettings)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        Build configuration from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Returns:
            ClientConfig populated from FYLA_* variables
        """
        env = os.environ if env is None else env

        mock_min = int(env.get("FYLA_MOCK_DELAY_MIN_MS", "1000"))
        seed = env.get("FYLA_MOCK_SEED")
        threshold = env.get("FYLA_CIRCUIT_BREAKER_THRESHOLD")

        return cls(
            api=ApiSettings(
                base_url=env.get("FYLA_API_URL", DEFAULT_API_URL),
                fallback_urls=_env_list(env, "FYLA_FALLBACK_URLS", FALLBACK_URLS),
                timeout=float(env.get("FYLA_API_TIMEOUT", "30")),
                health_timeout=float(env.get("FYLA_HEALTH_TIMEOUT", "5")),
                retry_attempts=int(env.get("FYLA_RETRY_ATTEMPTS", "1")),
                retry_backoff=float(env.get("FYLA_RETRY_BACKOFF", "1")),
                circuit_breaker_threshold=int(threshold) if threshold else None,
            ),
            mock=MockSettings(
                delays_enabled=_env_bool(env, "FYLA_ENABLE_MOCK_DELAYS", True),
                min_delay_ms=mock_min,
                max_delay_ms=int(env.get("FYLA_MOCK_DELAY_MAX_MS", str(mock_min))),
                seed=int(seed) if seed else None,
            ),
            seed=SeedSettings(
                database_url=env.get("FYLA_DB_URL", DEFAULT_DB_URL),
                default_password=env.get("FYLA_SEED_PASSWORD", DEFAULT_SEED_PASSWORD),
            ),
            log_level=env.get("FYLA_LOG_LEVEL", "INFO"),
        )
