"""Booking recommendations: suggested services, start times and prices."""
import datetime as dt
from abc import ABC, abstractmethod
from typing import List, Optional

from fyla.feature_flags import FeatureFlag
from fyla.models.ai_booking import (
    BookingRecommendationRequest,
    PersonalizedBookingFlow,
    PricingOptimization,
    ServiceRecommendation,
    TimeSlotRecommendation,
)
from fyla.services.base import MockDataSource, RemoteDataSource, ServiceFacade


class AIBookingDataSource(ABC):

    @abstractmethod
    async def get_service_recommendations(self, token: str,
                                          request: BookingRecommendationRequest) -> List[ServiceRecommendation]: ...

    @abstractmethod
    async def get_time_slot_recommendations(self, token: str, service_id: int, provider_id: int,
                                            preferred_date: Optional[dt.date]) -> List[TimeSlotRecommendation]: ...

    @abstractmethod
    async def get_personalized_booking_flow(self, token: str,
                                            request: BookingRecommendationRequest) -> PersonalizedBookingFlow: ...

    @abstractmethod
    async def get_pricing_optimization(self, token: str, service_id: int, provider_id: int,
                                       requested: dt.datetime) -> PricingOptimization: ...


class RemoteAIBookingDataSource(RemoteDataSource, AIBookingDataSource):
    default_error_message = "Booking recommendations are unavailable"

    async def get_service_recommendations(self, token, request):
        data = await self._request("POST", "/ai-booking/recommendations/services", body=request.to_api(), token=token)
        return self._parse(List[ServiceRecommendation], data)

    async def get_time_slot_recommendations(self, token, service_id, provider_id, preferred_date):
        params = {"serviceId": service_id, "providerId": provider_id}
        if preferred_date is not None:
            params["preferredDate"] = preferred_date.isoformat()
        data = await self._request("GET", "/ai-booking/recommendations/time-slots", params=params, token=token)
        return self._parse(List[TimeSlotRecommendation], data)

    async def get_personalized_booking_flow(self, token, request):
        data = await self._request("POST", "/ai-booking/personalized-flow", body=request.to_api(), token=token)
        return self._parse(PersonalizedBookingFlow, data)

    async def get_pricing_optimization(self, token, service_id, provider_id, requested):
        data = await self._request(
            "GET",
            "/ai-booking/pricing-optimization",
            params={"serviceId": service_id, "providerId": provider_id, "requestedDateTime": requested.isoformat()},
            token=token,
        )
        return self._parse(PricingOptimization, data)


def _filter(recommendations: List[ServiceRecommendation],
            request: BookingRecommendationRequest) -> List[ServiceRecommendation]:
    if request.max_price is not None:
        recommendations = [r for r in recommendations if r.estimated_price <= request.max_price]
    if request.max_distance is not None:
        recommendations = [r for r in recommendations if r.distance is None or r.distance <= request.max_distance]
    if request.preferred_provider_ids:
        # preferred providers first, confidence order kept within each group
        preferred = set(request.preferred_provider_ids)
        recommendations.sort(key=lambda r: r.provider_id not in preferred)
    return recommendations


class MockAIBookingDataSource(MockDataSource, AIBookingDataSource):

    async def get_service_recommendations(self, token, request):
        await self._simulate()
        return _filter(self.generator.service_recommendations(), request)

    async def get_time_slot_recommendations(self, token, service_id, provider_id, preferred_date):
        await self._simulate()
        duration = next(
            (r.estimated_duration for r in self.generator.service_recommendations() if r.service_id == service_id),
            60,
        )
        return self.generator.time_slot_recommendations(preferred_date, duration)

    async def get_personalized_booking_flow(self, token, request):
        await self._simulate()
        preferred_date = request.preferred_date_time.date() if request.preferred_date_time else None
        return PersonalizedBookingFlow(
            recommended_services=_filter(self.generator.service_recommendations(), request),
            suggested_time_slots=self.generator.time_slot_recommendations(preferred_date),
            personalized_offers=self.generator.personalized_offers(),
            booking_tips=self.generator.booking_tips(),
            estimated_booking_time=3,
        )

    async def get_pricing_optimization(self, token, service_id, provider_id, requested):
        await self._simulate()
        return self.generator.pricing_optimization(provider_id, requested)


class AIBookingService(ServiceFacade[AIBookingDataSource]):
    """
    Recommendations that help a client pick a service, a time and a price.

    A failed remote call raises ServiceError like every other facade; it
    does not fall back to mock recommendations.
    """

    flag = FeatureFlag.USE_REAL_BOOKING_API

    async def get_service_recommendations(self, token: str,
                                          request: BookingRecommendationRequest) -> List[ServiceRecommendation]:
        return await self._source().get_service_recommendations(token, request)

    async def get_time_slot_recommendations(self, token: str, service_id: int, provider_id: int,
                                            preferred_date: Optional[dt.date] = None) -> List[TimeSlotRecommendation]:
        return await self._source().get_time_slot_recommendations(token, service_id, provider_id, preferred_date)

    async def get_personalized_booking_flow(self, token: str,
                                            request: BookingRecommendationRequest) -> PersonalizedBookingFlow:
        return await self._source().get_personalized_booking_flow(token, request)

    async def get_pricing_optimization(self, token: str, service_id: int, provider_id: int,
                                       requested: dt.datetime) -> PricingOptimization:
        return await self._source().get_pricing_optimization(token, service_id, provider_id, requested)
