"""Tests for the follow graph service."""
import json

import httpx
import pytest

from fyla.errors import ErrorKind, ServiceError
from fyla.feature_flags import FeatureFlag
from fyla.services.social import MockSocialDataSource, RemoteSocialDataSource, SocialService


@pytest.fixture
def social(make_service):
    def _create(handler=None):
        return make_service(SocialService, RemoteSocialDataSource, MockSocialDataSource, handler)
    return _create


class TestRemoteSocial:

    @pytest.mark.asyncio
    async def test_toggle_follow(self, social):
        service = social(lambda request: httpx.Response(200, json={
            "isFollowing": True, "followersCount": 11, "message": "Following user",
        }))

        result = await service.toggle_follow("tok", 8)

        assert result.is_following is True
        assert result.followers_count == 11
        assert json.loads(service.requests[0].content) == {"userId": 8}

    @pytest.mark.asyncio
    async def test_is_following_unwraps_flag(self, social):
        service = social(lambda request: httpx.Response(200, json={"isFollowing": False}))

        assert await service.is_following("tok", 8) is False
        assert service.requests[0].url.path == "/api/social/users/8/is-following"

    @pytest.mark.asyncio
    async def test_followers_paging(self, social):
        service = social(lambda request: httpx.Response(200, json=[]))

        await service.get_followers("tok", 8, page=3, page_size=15)

        params = service.requests[0].url.params
        assert (params["page"], params["pageSize"]) == ("3", "15")

    @pytest.mark.asyncio
    async def test_network_error(self, social):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ServiceError) as exc_info:
            await social(handler).get_social_stats("tok", 8)

        assert exc_info.value.kind == ErrorKind.NETWORK


class TestMockSocial:

    @pytest.fixture(autouse=True)
    def use_mock(self, flags):
        flags.set(FeatureFlag.USE_REAL_SOCIAL_API, False)

    @pytest.mark.asyncio
    async def test_toggle_follow_alternates(self, social):
        service = social()

        followed = await service.toggle_follow("tok", 8)
        unfollowed = await service.toggle_follow("tok", 8)

        assert followed.is_following is True
        assert unfollowed.is_following is False
        assert followed.followers_count == unfollowed.followers_count + 1

    @pytest.mark.asyncio
    async def test_stats_reflect_follow(self, social):
        service = social()

        followed = await service.toggle_follow("tok", 8)
        stats = await service.get_social_stats("tok", 8)

        assert stats.followers_count == followed.followers_count
        assert await service.is_following("tok", 8) is True

    @pytest.mark.asyncio
    async def test_suggested_users_limit(self, social):
        users = await social().get_suggested_users("tok", limit=4)

        assert len(users) == 4


class TestSocialPaging:

    @pytest.mark.asyncio
    async def test_zero_page_rejected(self, social):
        service = social(lambda request: httpx.Response(200, json=[]))

        with pytest.raises(ServiceError) as exc_info:
            await service.get_following("tok", 8, page=0)

        assert exc_info.value.kind == ErrorKind.VALIDATION
        assert service.requests == []

    @pytest.mark.asyncio
    async def test_zero_limit_rejected(self, social):
        with pytest.raises(ServiceError) as exc_info:
            await social().get_suggested_users("tok", limit=0)

        assert exc_info.value.kind == ErrorKind.VALIDATION
