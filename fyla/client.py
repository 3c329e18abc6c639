"""Composition root for the FYLA client.

FylaClient wires configuration, the shared ApiClient, the feature flags and
one remote plus one mock data source per domain into the service facades.

Usage:
    async with FylaClient() as fyla:
        feed = await fyla.content.get_feed(token=token)
        fyla.flags.set(FeatureFlag.USE_REAL_CONTENT_API, False)  # next call uses mock data
"""
import asyncio
import random
import sys
from typing import Optional

import httpx

from fyla.api_client import ApiClient, HealthStatus
from fyla.config import ClientConfig
from fyla.feature_flags import FeatureFlag, FeatureFlags
from fyla.logging_config import get_logger, setup_structured_logging
from fyla.mock_data import MockDataGenerator, MockDelay
from fyla.services.ai_booking import AIBookingService, MockAIBookingDataSource, RemoteAIBookingDataSource
from fyla.services.analytics import AnalyticsService, MockAnalyticsDataSource, RemoteAnalyticsDataSource
from fyla.services.appointments import AppointmentService, MockAppointmentDataSource, RemoteAppointmentDataSource
from fyla.services.auth import AuthService, MockAuthDataSource, RemoteAuthDataSource
from fyla.services.business_hours import (
    BusinessHoursService,
    MockBusinessHoursDataSource,
    RemoteBusinessHoursDataSource,
)
from fyla.services.chat import ChatService, MockChatDataSource, RemoteChatDataSource
from fyla.services.content import ContentService, MockContentDataSource, RemoteContentDataSource
from fyla.services.providers import MockProviderDataSource, ProviderService, RemoteProviderDataSource
from fyla.services.service_management import (
    MockServiceManagementDataSource,
    RemoteServiceManagementDataSource,
    ServiceManagementService,
)
from fyla.services.social import MockSocialDataSource, RemoteSocialDataSource, SocialService

logger = get_logger(__name__)


class FylaClient:
    """All domain services sharing one transport and one flag table."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        flags: Optional[FeatureFlags] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            config: Client configuration (defaults to ClientConfig.from_env())
            flags: Feature flags (defaults to FeatureFlags.from_env())
            transport: httpx transport override, used by tests
            rng: Random source for mock data (defaults to one seeded from config.mock.seed)
        """
        self.config = config or ClientConfig.from_env()
        self.flags = flags or FeatureFlags.from_env()
        self.api = ApiClient(self.config.api, transport=transport)

        rng = rng or random.Random(self.config.mock.seed)
        self.mock_data = MockDataGenerator(rng)
        self.mock_delay = MockDelay.from_settings(self.config.mock, rng)

        def build(facade, remote_cls, mock_cls):
            return facade(
                self.flags,
                remote_cls(self.api),
                mock_cls(self.mock_data, self.mock_delay),
            )

        self.content = build(ContentService, RemoteContentDataSource, MockContentDataSource)
        self.appointments = build(AppointmentService, RemoteAppointmentDataSource, MockAppointmentDataSource)
        self.providers = build(ProviderService, RemoteProviderDataSource, MockProviderDataSource)
        self.analytics = build(AnalyticsService, RemoteAnalyticsDataSource, MockAnalyticsDataSource)
        self.business_hours = build(BusinessHoursService, RemoteBusinessHoursDataSource, MockBusinessHoursDataSource)
        self.chat = build(ChatService, RemoteChatDataSource, MockChatDataSource)
        self.auth = build(AuthService, RemoteAuthDataSource, MockAuthDataSource)
        self.social = build(SocialService, RemoteSocialDataSource, MockSocialDataSource)
        self.service_management = build(
            ServiceManagementService, RemoteServiceManagementDataSource, MockServiceManagementDataSource,
        )
        self.ai_booking = build(AIBookingService, RemoteAIBookingDataSource, MockAIBookingDataSource)

        logger.info(
            "fyla_client_ready",
            base_url=self.api.current_base_url,
            real_apis=[name for name, on in self.flags.snapshot().items() if on],
        )

    def get_health_status(self) -> HealthStatus:
        return self.api.get_health_status()

    async def check_health(self) -> HealthStatus:
        return await self.api.check_health()

    async def aclose(self) -> None:
        await self.api.aclose()

    async def __aenter__(self) -> "FylaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


async def _report_health(config: ClientConfig) -> bool:
    async with ApiClient(config.api) as api:
        status = await api.check_health()
        if not status.is_online:
            working = await api.find_working_base_url(exclude=api.current_base_url)
            if working:
                print(f"Primary URL down, fallback available: {working}")
    print("\n" + "=" * 60)
    print(f"Base URL:      {status.base_url}")
    print(f"Online:        {status.is_online}")
    print(f"Response time: {status.response_time_ms:.0f} ms")
    print(f"Checked at:    {status.last_checked.isoformat()}")
    for name, enabled in sorted(status.features.items()):
        print(f"  feature {name}: {enabled}")
    print("=" * 60 + "\n")
    return status.is_online


def main():
    """Check the configured backend and print its health (fyla-health)."""
    config = ClientConfig.from_env()
    setup_structured_logging(config.log_level, json_logs=False)
    flags = FeatureFlags.from_env()
    print("Feature flags:")
    for flag in FeatureFlag:
        print(f"  {flag.value}: {flags.get(flag)}")
    online = asyncio.run(_report_health(config))
    sys.exit(0 if online else 1)


if __name__ == "__main__":
    main()
