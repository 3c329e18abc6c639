"""End-to-end tests of the composed client against an in-process backend."""
import datetime as dt
import random

import httpx
import pytest
import pytest_asyncio

from fyla.client import FylaClient
from fyla.config import ApiSettings, ClientConfig, MockSettings
from fyla.feature_flags import FeatureFlag, FeatureFlags
from fyla.mock_data import MockDataGenerator
from fyla.models import CreateServiceRequest, LoginRequest

pytestmark = pytest.mark.integration

PRIMARY_URL = "http://primary.test/api"
BACKUP_URL = "http://backup.test/api"


def make_config():
    return ClientConfig(
        api=ApiSettings(base_url=PRIMARY_URL, fallback_urls=[BACKUP_URL], retry_backoff=0),
        mock=MockSettings(delays_enabled=False, seed=7),
    )


class FakeBackend:
    """Answers /health and /content/feed; the primary host can be taken down."""

    def __init__(self):
        self.primary_up = True
        self.hits = []
        self.feed = MockDataGenerator(random.Random(1)).feed(1, 2).model_dump(by_alias=True, mode="json")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.hits.append((request.url.host, request.url.path))
        if request.url.host == "primary.test" and not self.primary_up:
            raise httpx.ConnectError("connection refused", request=request)
        if request.url.path == "/api/health":
            return httpx.Response(200, json={"status": "ok", "features": {"chat": True}})
        if request.url.path == "/api/content/feed":
            return httpx.Response(200, json=self.feed)
        return httpx.Response(404, json={"message": "not found"})


@pytest.fixture
def backend():
    return FakeBackend()


@pytest_asyncio.fixture
async def fyla(backend):
    client = FylaClient(make_config(), FeatureFlags(), transport=httpx.MockTransport(backend))
    yield client
    await client.aclose()


class TestFylaClient:

    @pytest.mark.asyncio
    async def test_feed_from_backend(self, fyla, backend):
        feed = await fyla.content.get_feed(token="tok")

        assert [p.id for p in feed.posts] == [p["id"] for p in backend.feed["posts"]]
        assert backend.hits == [("primary.test", "/api/content/feed")]

    @pytest.mark.asyncio
    async def test_flag_switches_to_mock_without_network(self, fyla, backend):
        fyla.flags.set(FeatureFlag.USE_REAL_CONTENT_API, False)

        feed = await fyla.content.get_feed(page=1, page_size=3)

        assert len(feed.posts) == 3
        assert backend.hits == []

    @pytest.mark.asyncio
    async def test_health_reports_features(self, fyla):
        status = await fyla.check_health()

        assert status.is_online is True
        assert status.base_url == PRIMARY_URL
        assert status.features == {"chat": True}
        assert fyla.get_health_status().is_online is True

    @pytest.mark.asyncio
    async def test_fails_over_to_backup(self, fyla, backend):
        backend.primary_up = False

        feed = await fyla.content.get_feed(token="tok")

        assert len(feed.posts) == 2
        assert fyla.api.current_base_url == BACKUP_URL
        assert ("backup.test", "/api/content/feed") in backend.hits

    @pytest.mark.asyncio
    async def test_same_seed_same_mock_data(self, backend):
        flags = FeatureFlags(default=False)
        first = FylaClient(make_config(), flags, transport=httpx.MockTransport(backend))
        second = FylaClient(make_config(), flags, transport=httpx.MockTransport(backend))
        try:
            a = await first.providers.get_nearby_providers(40.71, -74.0)
            b = await second.providers.get_nearby_providers(40.71, -74.0)
        finally:
            await first.aclose()
            await second.aclose()

        assert [(p.id, p.full_name, p.average_rating) for p in a] == [(p.id, p.full_name, p.average_rating) for p in b]

    @pytest.mark.asyncio
    async def test_mock_session_drives_other_domains(self, fyla, backend):
        """A demo login on mock data works with the catalog and recommendation facades."""
        for flag in (FeatureFlag.USE_REAL_AUTH_API, FeatureFlag.USE_REAL_PROVIDER_API,
                     FeatureFlag.USE_REAL_BOOKING_API):
            fyla.flags.set(flag, False)

        session = await fyla.auth.login(LoginRequest(email="provider@example.com", password="password"))
        created = await fyla.service_management.create_service(
            session.token, CreateServiceRequest(name="Silk Press", price=95, estimated_duration_minutes=120),
        )
        quote = await fyla.ai_booking.get_pricing_optimization(
            session.token, created.id, session.user.id, dt.datetime(2025, 7, 12, 9, tzinfo=dt.timezone.utc),
        )

        assert (await fyla.auth.validate_token(session.token)).id == session.user.id
        assert created.id in [s.id for s in (await fyla.service_management.get_provider_services()).services]
        assert quote.optimized_price < quote.original_price
        assert backend.hits == []
