"""Provider discovery service."""
import math
from abc import ABC, abstractmethod
from typing import List

from fyla.feature_flags import FeatureFlag
from fyla.models.providers import (
    ProviderProfile,
    ProviderSearchRequest,
    ProviderSearchResponse,
    ServiceProviderTag,
    SortBy,
)
from fyla.services.base import MockDataSource, RemoteDataSource, ServiceFacade


class ProviderDataSource(ABC):

    @abstractmethod
    async def search_providers(self, request: ProviderSearchRequest) -> ProviderSearchResponse: ...

    @abstractmethod
    async def get_provider(self, provider_id: int) -> ProviderProfile: ...

    @abstractmethod
    async def get_nearby_providers(self, latitude: float, longitude: float,
                                   radius: float) -> List[ProviderProfile]: ...

    @abstractmethod
    async def get_service_provider_tags(self) -> List[ServiceProviderTag]: ...


class RemoteProviderDataSource(RemoteDataSource, ProviderDataSource):
    default_error_message = "Provider search failed"

    async def search_providers(self, request):
        data = await self._request("GET", "/providers/search", params=request.to_params())
        return self._parse(ProviderSearchResponse, data)

    async def get_provider(self, provider_id):
        data = await self._request("GET", f"/providers/{provider_id}")
        return self._parse(ProviderProfile, data)

    async def get_nearby_providers(self, latitude, longitude, radius):
        data = await self._request(
            "GET",
            "/providers/nearby",
            params={"latitude": latitude, "longitude": longitude, "radius": radius},
        )
        return self._parse(List[ProviderProfile], data)

    async def get_service_provider_tags(self):
        data = await self._request("GET", "/tags")
        return self._parse(List[ServiceProviderTag], data)


def _matches_query(provider: ProviderProfile, query: str) -> bool:
    query = query.lower()
    return (
        query in provider.full_name.lower()
        or query in (provider.bio or "").lower()
        or any(query in tag.name.lower() for tag in provider.tags)
    )


class MockProviderDataSource(MockDataSource, ProviderDataSource):

    async def search_providers(self, request):
        await self._simulate()
        providers = self.generator.providers()

        if request.query:
            providers = [p for p in providers if _matches_query(p, request.query)]
        if request.tags:
            wanted = set(request.tags)
            providers = [p for p in providers if wanted & {tag.id for tag in p.tags}]
        if request.min_rating:
            providers = [p for p in providers if p.average_rating >= request.min_rating]

        if request.sort_by == SortBy.DISTANCE:
            providers.sort(key=lambda p: p.distance or 0)
        elif request.sort_by == SortBy.RATING:
            providers.sort(key=lambda p: p.average_rating, reverse=True)
        elif request.sort_by == SortBy.POPULARITY:
            providers.sort(key=lambda p: p.total_reviews, reverse=True)
        elif request.sort_by == SortBy.NEWEST:
            providers.sort(key=lambda p: p.created_at.timestamp() if p.created_at else 0, reverse=True)

        start = (request.page - 1) * request.limit
        return ProviderSearchResponse(
            providers=providers[start:start + request.limit],
            total=len(providers),
            page=request.page,
            total_pages=math.ceil(len(providers) / request.limit),
        )

    async def get_provider(self, provider_id):
        await self._simulate()
        for provider in self.generator.providers():
            if provider.id == provider_id:
                return provider
        raise self._not_found("Provider")

    async def get_nearby_providers(self, latitude, longitude, radius):
        await self._simulate()
        # every mock provider counts as nearby
        return self.generator.providers()

    async def get_service_provider_tags(self):
        await self._simulate()
        return self.generator.tags()


class ProviderService(ServiceFacade[ProviderDataSource]):
    """Search and lookup of service providers."""

    flag = FeatureFlag.USE_REAL_PROVIDER_API

    async def search_providers(self, request: ProviderSearchRequest) -> ProviderSearchResponse:
        return await self._source().search_providers(request)

    async def get_provider(self, provider_id: int) -> ProviderProfile:
        """
        Raises:
            ServiceError: NOT_FOUND when the provider does not exist
        """
        return await self._source().get_provider(provider_id)

    async def get_nearby_providers(self, latitude: float, longitude: float,
                                   radius: float = 10) -> List[ProviderProfile]:
        return await self._source().get_nearby_providers(latitude, longitude, radius)

    async def get_service_provider_tags(self) -> List[ServiceProviderTag]:
        return await self._source().get_service_provider_tags()
