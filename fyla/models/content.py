"""Content feed DTOs (posts, comments, stories, likes)."""
from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BeforeValidator, Field

from fyla.models.appointments import Service
from fyla.models.base import ApiModel

# Backend ids are integers, the mobile feed uses strings like "post_42"
ContentId = Annotated[str, BeforeValidator(str)]


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class Media(ApiModel):
    id: ContentId
    url: str
    type: MediaType = MediaType.IMAGE
    thumbnail_url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[float] = None


class PostAuthor(ApiModel):
    id: int
    full_name: str
    profile_picture_url: Optional[str] = None
    is_service_provider: bool = True


class Comment(ApiModel):
    id: ContentId
    post_id: Optional[ContentId] = None
    user_id: int
    user_name: str = ""
    user_profile_image_url: Optional[str] = None
    comment: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class Post(ApiModel):
    id: ContentId
    content: str = ""
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    provider_id: int
    provider_name: str = ""
    provider_profile_image_url: Optional[str] = None
    likes_count: int = 0
    comments_count: int = 0
    is_liked_by_current_user: bool = False
    media: List[Media] = Field(default_factory=list)
    services: List[Service] = Field(default_factory=list)
    recent_comments: List[Comment] = Field(default_factory=list)

    @property
    def author(self) -> PostAuthor:
        return PostAuthor(
            id=self.provider_id,
            full_name=self.provider_name,
            profile_picture_url=self.provider_profile_image_url,
        )


class Story(ApiModel):
    id: ContentId
    user_id: int
    media: Media
    caption: Optional[str] = None
    created_at: datetime
    expires_at: datetime
    is_viewed: bool = False
    views_count: int = 0


class StoryGroup(ApiModel):
    user: PostAuthor
    stories: List[Story] = Field(default_factory=list)
    has_unviewed_stories: bool = False
    latest_story_time: Optional[datetime] = None


class FeedResponse(ApiModel):
    posts: List[Post] = Field(default_factory=list)
    stories: List[StoryGroup] = Field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 10
    has_next_page: bool = False


class CreatePostRequest(ApiModel):
    content: str = Field(min_length=1)
    image_url: Optional[str] = None
    service_ids: Optional[List[int]] = None


class CreateCommentRequest(ApiModel):
    comment: str = Field(min_length=1)


class LikeToggleResponse(ApiModel):
    is_liked: bool
    likes_count: Optional[int] = None
