"""Follow graph service."""
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

from fyla.feature_flags import FeatureFlag
from fyla.models.social import FollowToggleResponse, IsFollowingResponse, UserFollow, UserSocialStats
from fyla.services.base import MockDataSource, RemoteDataSource, ServiceFacade


class SocialDataSource(ABC):

    @abstractmethod
    async def toggle_follow(self, token: str, user_id: int) -> FollowToggleResponse: ...

    @abstractmethod
    async def get_followers(self, token: str, user_id: int, page: int, page_size: int) -> List[UserFollow]: ...

    @abstractmethod
    async def get_following(self, token: str, user_id: int, page: int, page_size: int) -> List[UserFollow]: ...

    @abstractmethod
    async def get_social_stats(self, token: str, user_id: int) -> UserSocialStats: ...

    @abstractmethod
    async def is_following(self, token: str, user_id: int) -> bool: ...

    @abstractmethod
    async def get_suggested_users(self, token: str, limit: int) -> List[UserFollow]: ...

    @abstractmethod
    async def get_mutual_follows(self, token: str, user_id: int) -> List[UserFollow]: ...


class RemoteSocialDataSource(RemoteDataSource, SocialDataSource):
    default_error_message = "Social operation failed"

    async def toggle_follow(self, token, user_id):
        data = await self._request("POST", "/social/follow", body={"userId": user_id}, token=token)
        return self._parse(FollowToggleResponse, data)

    async def get_followers(self, token, user_id, page, page_size):
        data = await self._request(
            "GET", f"/social/users/{user_id}/followers",
            params={"page": page, "pageSize": page_size}, token=token,
        )
        return self._parse(List[UserFollow], data)

    async def get_following(self, token, user_id, page, page_size):
        data = await self._request(
            "GET", f"/social/users/{user_id}/following",
            params={"page": page, "pageSize": page_size}, token=token,
        )
        return self._parse(List[UserFollow], data)

    async def get_social_stats(self, token, user_id):
        data = await self._request("GET", f"/social/users/{user_id}/stats", token=token)
        return self._parse(UserSocialStats, data)

    async def is_following(self, token, user_id):
        data = await self._request("GET", f"/social/users/{user_id}/is-following", token=token)
        return self._parse(IsFollowingResponse, data).is_following

    async def get_suggested_users(self, token, limit):
        data = await self._request("GET", "/social/suggested-users", params={"limit": limit}, token=token)
        return self._parse(List[UserFollow], data)

    async def get_mutual_follows(self, token, user_id):
        data = await self._request("GET", f"/social/users/{user_id}/mutual-follows", token=token)
        return self._parse(List[UserFollow], data)


class MockSocialDataSource(MockDataSource, SocialDataSource):
    """Follow state is remembered per user so toggles alternate."""

    def __init__(self, generator, delay):
        super().__init__(generator, delay)
        self._follows: Dict[int, Tuple[bool, int]] = {}

    def _follow_state(self, user_id: int) -> Tuple[bool, int]:
        if user_id not in self._follows:
            self._follows[user_id] = (False, self.generator.social_stats(user_id).followers_count)
        return self._follows[user_id]

    async def toggle_follow(self, token, user_id):
        await self._simulate()
        following, followers = self._follow_state(user_id)
        following = not following
        followers = followers + 1 if following else max(0, followers - 1)
        self._follows[user_id] = (following, followers)
        return FollowToggleResponse(
            is_following=following,
            followers_count=followers,
            message="Following user" if following else "Unfollowed user",
        )

    async def get_followers(self, token, user_id, page, page_size):
        await self._simulate()
        return self.generator.user_follows(page, page_size, total=10)

    async def get_following(self, token, user_id, page, page_size):
        await self._simulate()
        return self.generator.user_follows(page, page_size, is_following=True, total=8, id_offset=100)

    async def get_social_stats(self, token, user_id):
        await self._simulate()
        stats = self.generator.social_stats(user_id)
        if user_id in self._follows:
            stats.followers_count = self._follows[user_id][1]
        return stats

    async def is_following(self, token, user_id):
        await self._simulate()
        return self._follow_state(user_id)[0]

    async def get_suggested_users(self, token, limit):
        await self._simulate()
        return self.generator.user_follows(1, limit, total=limit, id_offset=300)

    async def get_mutual_follows(self, token, user_id):
        await self._simulate()
        return self.generator.user_follows(1, 3, is_following=True, total=3, id_offset=400)


class SocialService(ServiceFacade[SocialDataSource]):
    """Following, followers and suggestions."""

    flag = FeatureFlag.USE_REAL_SOCIAL_API

    async def toggle_follow(self, token: str, user_id: int) -> FollowToggleResponse:
        return await self._source().toggle_follow(token, user_id)

    async def get_followers(self, token: str, user_id: int, page: int = 1, page_size: int = 20) -> List[UserFollow]:
        self._check_paging(page, page_size)
        return await self._source().get_followers(token, user_id, page, page_size)

    async def get_following(self, token: str, user_id: int, page: int = 1, page_size: int = 20) -> List[UserFollow]:
        self._check_paging(page, page_size)
        return await self._source().get_following(token, user_id, page, page_size)

    async def get_social_stats(self, token: str, user_id: int) -> UserSocialStats:
        return await self._source().get_social_stats(token, user_id)

    async def is_following(self, token: str, user_id: int) -> bool:
        return await self._source().is_following(token, user_id)

    async def get_suggested_users(self, token: str, limit: int = 10) -> List[UserFollow]:
        self._check_paging(limit=limit)
        return await self._source().get_suggested_users(token, limit)

    async def get_mutual_follows(self, token: str, user_id: int) -> List[UserFollow]:
        return await self._source().get_mutual_follows(token, user_id)
