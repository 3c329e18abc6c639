"""Shared test fixtures."""
import os
import random

import httpx
import pytest

from fyla.api_client import ApiClient
from fyla.config import ApiSettings
from fyla.feature_flags import FeatureFlags
from fyla.mock_data import MockDataGenerator, MockDelay

PRIMARY_URL = "http://primary.test/api"
BACKUP_URL = "http://backup.test/api"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep FYLA_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("FYLA_"):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def api_settings() -> ApiSettings:
    return ApiSettings(base_url=PRIMARY_URL, fallback_urls=[BACKUP_URL], retry_backoff=0)


@pytest.fixture
def make_api(api_settings):
    """Build an ApiClient whose requests are answered by handler(request)."""
    def _create(handler, settings: ApiSettings = None, **kwargs) -> ApiClient:
        return ApiClient(settings or api_settings, transport=httpx.MockTransport(handler), **kwargs)
    return _create


@pytest.fixture
def generator() -> MockDataGenerator:
    return MockDataGenerator(random.Random(42))


@pytest.fixture
def no_delay() -> MockDelay:
    return MockDelay(0, enabled=False)


@pytest.fixture
def flags() -> FeatureFlags:
    return FeatureFlags()


@pytest.fixture
def make_service(make_api, flags, generator, no_delay):
    """
    Build a facade with a remote source answered by handler and a mock source
    without latency. Requests that reach the handler are recorded on
    facade.requests.
    """
    def _create(facade_cls, remote_cls, mock_cls, handler=None, delay: MockDelay = None):
        requests = []

        def record(request):
            requests.append(request)
            if handler is None:
                return httpx.Response(500, json={"message": "no handler"})
            return handler(request)

        facade = facade_cls(flags, remote_cls(make_api(record)), mock_cls(generator, delay or no_delay))
        facade.requests = requests
        return facade
    return _create
