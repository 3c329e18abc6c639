"""Tests for provider analytics."""
import httpx
import pytest

from fyla.feature_flags import FeatureFlag
from fyla.models import AnalyticsPeriod, AnalyticsRequest
from fyla.services.analytics import AnalyticsService, MockAnalyticsDataSource, RemoteAnalyticsDataSource


@pytest.fixture
def analytics(make_service):
    def _create(handler=None):
        return make_service(AnalyticsService, RemoteAnalyticsDataSource, MockAnalyticsDataSource, handler)
    return _create


class TestAnalytics:

    @pytest.mark.asyncio
    async def test_earnings_period_param(self, analytics, generator):
        payload = generator.earnings().model_dump(by_alias=True, mode="json")
        service = analytics(lambda request: httpx.Response(200, json=payload))

        result = await service.get_earnings("tok", AnalyticsPeriod.WEEK)

        assert result.total_earnings == 12450.75
        assert service.requests[0].url.path == "/api/analytics/earnings"
        assert service.requests[0].url.params["period"] == "week"

    @pytest.mark.asyncio
    async def test_client_insights_limit(self, analytics):
        service = analytics(lambda request: httpx.Response(200, json=[]))

        assert await service.get_client_insights("tok", limit=3) == []
        assert service.requests[0].url.params["limit"] == "3"

    @pytest.mark.asyncio
    async def test_provider_analytics_shape_matches_mock(self, analytics, flags):
        flags.set(FeatureFlag.USE_REAL_ANALYTICS_API, False)
        request = AnalyticsRequest(period=AnalyticsPeriod.WEEK)
        mock_data = await analytics().get_provider_analytics("tok", request)

        payload = mock_data.model_dump(by_alias=True, mode="json")
        flags.set(FeatureFlag.USE_REAL_ANALYTICS_API, True)
        service = analytics(lambda r: httpx.Response(200, json=payload))
        real_data = await service.get_provider_analytics("tok", request)

        assert real_data.model_dump() == mock_data.model_dump()
        assert service.requests[0].url.path == "/api/analytics/provider"
        assert service.requests[0].url.params["period"] == "week"

    @pytest.mark.asyncio
    async def test_mock_metrics(self, analytics, flags):
        flags.set(FeatureFlag.USE_REAL_ANALYTICS_API, False)

        metrics = await analytics().get_appointment_metrics("tok")

        assert metrics.total_upcoming == 23
        assert metrics.confirmed + metrics.pending + metrics.completed > 0
