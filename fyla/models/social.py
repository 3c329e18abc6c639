"""Follow graph DTOs."""
from typing import List, Optional

from pydantic import Field

from fyla.models.base import ApiModel


class FollowToggleResponse(ApiModel):
    is_following: bool
    followers_count: int = 0
    message: str = ""


class UserSocialStats(ApiModel):
    user_id: int
    followers_count: int = 0
    following_count: int = 0
    posts_count: int = 0
    is_private: bool = False


class UserFollow(ApiModel):
    id: int
    full_name: str
    email: str = ""
    profile_picture_url: Optional[str] = None
    bio: Optional[str] = None
    is_service_provider: bool = False
    is_following: bool = False
    followers_count: int = 0
    following_count: int = 0
    tags: List[str] = Field(default_factory=list)


class IsFollowingResponse(ApiModel):
    is_following: bool
