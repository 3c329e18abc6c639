"""Tests for provider discovery."""
import httpx
import pytest

from fyla.errors import ErrorKind, ServiceError
from fyla.feature_flags import FeatureFlag
from fyla.models import ProviderProfile, ProviderSearchRequest, ProviderSearchResponse, SortBy
from fyla.services.providers import MockProviderDataSource, ProviderService, RemoteProviderDataSource


@pytest.fixture
def providers(make_service):
    def _create(handler=None):
        return make_service(ProviderService, RemoteProviderDataSource, MockProviderDataSource, handler)
    return _create


class TestRemoteProviders:

    @pytest.mark.asyncio
    async def test_search_query_params(self, providers):
        service = providers(lambda request: httpx.Response(200, json={"providers": [], "total": 0}))

        result = await service.search_providers(ProviderSearchRequest(
            query="hair", tags=[1, 3], min_rating=4.5, sort_by=SortBy.RATING, page=2, limit=5,
        ))

        assert isinstance(result, ProviderSearchResponse)
        params = service.requests[0].url.params
        assert service.requests[0].url.path == "/api/providers/search"
        assert params["query"] == "hair"
        assert params.get_list("tags") == ["1", "3"]
        assert params["minRating"] == "4.5"
        assert params["sortBy"] == "rating"
        assert params["page"] == "2"
        assert "latitude" not in params

    @pytest.mark.asyncio
    async def test_nearby(self, providers):
        service = providers(lambda request: httpx.Response(200, json=[{"id": 1, "fullName": "Sarah Johnson"}]))

        result = await service.get_nearby_providers(40.71, -74.0)

        assert result == [ProviderProfile(id=1, full_name="Sarah Johnson")]
        assert service.requests[0].url.params["radius"] == "10"

    @pytest.mark.asyncio
    async def test_unknown_provider(self, providers):
        service = providers(lambda request: httpx.Response(404, json={"message": "Provider not found"}))

        with pytest.raises(ServiceError) as exc_info:
            await service.get_provider(999)

        assert exc_info.value.kind == ErrorKind.NOT_FOUND
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_tags(self, providers):
        service = providers(lambda request: httpx.Response(200, json=[{"id": 1, "name": "Hair Stylist"}]))

        tags = await service.get_service_provider_tags()

        assert tags[0].name == "Hair Stylist"
        assert service.requests[0].url.path == "/api/tags"


class TestMockProviders:

    @pytest.fixture(autouse=True)
    def use_mock(self, flags):
        flags.set(FeatureFlag.USE_REAL_PROVIDER_API, False)

    @pytest.mark.asyncio
    async def test_query_filter(self, providers):
        result = await providers().search_providers(ProviderSearchRequest(query="nail"))

        assert [p.full_name for p in result.providers] == ["Maria Garcia"]
        assert result.total == 1

    @pytest.mark.asyncio
    async def test_tag_and_rating_filters(self, providers):
        service = providers()

        by_tag = await service.search_providers(ProviderSearchRequest(tags=[3]))
        by_rating = await service.search_providers(ProviderSearchRequest(min_rating=4.8))

        assert [p.id for p in by_tag.providers] == [3]
        assert {p.id for p in by_rating.providers} == {1, 2}

    @pytest.mark.asyncio
    async def test_sorting(self, providers):
        service = providers()

        by_distance = await service.search_providers(ProviderSearchRequest(sort_by=SortBy.DISTANCE))
        by_reviews = await service.search_providers(ProviderSearchRequest(sort_by=SortBy.POPULARITY))

        assert [p.id for p in by_distance.providers] == [3, 1, 2]
        assert [p.id for p in by_reviews.providers] == [2, 1, 3]

    @pytest.mark.asyncio
    async def test_pagination(self, providers):
        result = await providers().search_providers(ProviderSearchRequest(page=2, limit=2))

        assert len(result.providers) == 1
        assert result.total_pages == 2

    @pytest.mark.asyncio
    async def test_unknown_provider_not_found(self, providers):
        with pytest.raises(ServiceError) as exc_info:
            await providers().get_provider(999)

        assert exc_info.value.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_provider_shape_matches_remote(self, providers, flags):
        mock_provider = await providers().get_provider(1)

        payload = mock_provider.model_dump(by_alias=True, mode="json")
        flags.set(FeatureFlag.USE_REAL_PROVIDER_API, True)
        real_provider = await providers(lambda request: httpx.Response(200, json=payload)).get_provider(1)

        assert real_provider.model_dump() == mock_provider.model_dump()
