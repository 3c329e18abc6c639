"""Provider search DTOs."""
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import Field

from fyla.models.appointments import Service
from fyla.models.base import ApiModel
from fyla.models.business_hours import BusinessHours
from fyla.models.content import Post


class SortBy(str, Enum):
    DISTANCE = "distance"
    RATING = "rating"
    POPULARITY = "popularity"
    NEWEST = "newest"


class ServiceProviderTag(ApiModel):
    id: int
    name: str


class ProviderProfile(ApiModel):
    id: int
    full_name: str
    email: str = ""
    phone_number: str = ""
    profile_picture_url: Optional[str] = None
    bio: Optional[str] = None
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    average_rating: float = 0.0
    total_reviews: int = 0
    distance: Optional[float] = Field(default=None, description="Kilometers from the search origin")
    is_online: bool = False
    tags: List[ServiceProviderTag] = Field(default_factory=list)
    services: List[Service] = Field(default_factory=list)
    business_hours: List[BusinessHours] = Field(default_factory=list)
    posts: List[Post] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class ProviderSearchRequest(ApiModel):
    query: Optional[str] = None
    tags: Optional[List[int]] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[float] = Field(default=None, gt=0)
    min_rating: Optional[float] = Field(default=None, ge=0, le=5)
    sort_by: Optional[SortBy] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)

    def to_params(self) -> List[Tuple[str, Any]]:
        """Query parameters with tag ids repeated (tags=1&tags=2)."""
        params: List[Tuple[str, Any]] = []
        for key, value in self.to_api().items():
            if key == "tags":
                params.extend(("tags", tag) for tag in value)
            else:
                params.append((key, value))
        return params


class ProviderSearchResponse(ApiModel):
    providers: List[ProviderProfile] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0
