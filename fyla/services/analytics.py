"""Provider analytics service."""
from abc import ABC, abstractmethod
from typing import List

from fyla.feature_flags import FeatureFlag
from fyla.models.analytics import (
    AnalyticsData,
    AnalyticsPeriod,
    AnalyticsRequest,
    AppointmentMetrics,
    ClientInsight,
    EarningsData,
)
from fyla.services.base import MockDataSource, RemoteDataSource, ServiceFacade


class AnalyticsDataSource(ABC):

    @abstractmethod
    async def get_provider_analytics(self, token: str, request: AnalyticsRequest) -> AnalyticsData: ...

    @abstractmethod
    async def get_earnings(self, token: str, period: AnalyticsPeriod) -> EarningsData: ...

    @abstractmethod
    async def get_client_insights(self, token: str, limit: int) -> List[ClientInsight]: ...

    @abstractmethod
    async def get_appointment_metrics(self, token: str) -> AppointmentMetrics: ...


class RemoteAnalyticsDataSource(RemoteDataSource, AnalyticsDataSource):
    default_error_message = "Analytics operation failed"

    async def get_provider_analytics(self, token, request):
        data = await self._request("GET", "/analytics/provider", params=request.to_params(), token=token)
        return self._parse(AnalyticsData, data)

    async def get_earnings(self, token, period):
        data = await self._request("GET", "/analytics/earnings", params={"period": period.value}, token=token)
        return self._parse(EarningsData, data)

    async def get_client_insights(self, token, limit):
        data = await self._request("GET", "/analytics/clients", params={"limit": limit}, token=token)
        return self._parse(List[ClientInsight], data)

    async def get_appointment_metrics(self, token):
        data = await self._request("GET", "/analytics/appointments", token=token)
        return self._parse(AppointmentMetrics, data)


class MockAnalyticsDataSource(MockDataSource, AnalyticsDataSource):

    async def get_provider_analytics(self, token, request):
        await self._simulate()
        return self.generator.analytics_data(request.period)

    async def get_earnings(self, token, period):
        await self._simulate()
        return self.generator.earnings(period)

    async def get_client_insights(self, token, limit):
        await self._simulate()
        return self.generator.client_insights(limit)

    async def get_appointment_metrics(self, token):
        await self._simulate()
        return self.generator.appointment_metrics()


class AnalyticsService(ServiceFacade[AnalyticsDataSource]):
    """Revenue, client and appointment statistics for a provider."""

    flag = FeatureFlag.USE_REAL_ANALYTICS_API

    async def get_provider_analytics(self, token: str, request: AnalyticsRequest) -> AnalyticsData:
        return await self._source().get_provider_analytics(token, request)

    async def get_earnings(self, token: str, period: AnalyticsPeriod = AnalyticsPeriod.MONTH) -> EarningsData:
        return await self._source().get_earnings(token, AnalyticsPeriod(period))

    async def get_client_insights(self, token: str, limit: int = 10) -> List[ClientInsight]:
        self._check_paging(limit=limit)
        return await self._source().get_client_insights(token, limit)

    async def get_appointment_metrics(self, token: str) -> AppointmentMetrics:
        return await self._source().get_appointment_metrics(token)
