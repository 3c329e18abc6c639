"""Booking recommendation DTOs."""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from fyla.models.base import ApiModel


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class ProviderAvailability(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SpecialOffer(ApiModel):
    id: str
    title: str
    description: str = ""
    discount_type: DiscountType
    discount_value: float
    valid_until: datetime
    conditions: Optional[str] = None


class UserLocation(ApiModel):
    latitude: float
    longitude: float


class PreviousBooking(ApiModel):
    service_id: int
    provider_id: int
    satisfaction: float = Field(ge=0, le=5)


class BookingRecommendationRequest(ApiModel):
    service_category: Optional[str] = None
    preferred_date_time: Optional[datetime] = None
    max_price: Optional[float] = Field(default=None, ge=0)
    max_distance: Optional[float] = Field(default=None, gt=0)
    preferred_provider_ids: Optional[List[int]] = None
    user_location: Optional[UserLocation] = None
    previous_bookings: Optional[List[PreviousBooking]] = None


class ServiceRecommendation(ApiModel):
    service_id: int
    service_name: str
    provider_id: int
    provider_name: str
    provider_image: Optional[str] = None
    confidence: float = Field(ge=0, le=1)
    reason: str = ""
    estimated_price: float = 0.0
    estimated_duration: int = Field(default=60, description="Minutes")
    available_slots: List[datetime] = Field(default_factory=list)
    rating: float = 0.0
    review_count: int = 0
    distance: Optional[float] = None
    special_offers: List[SpecialOffer] = Field(default_factory=list)


class TimeSlotRecommendation(ApiModel):
    start_time: datetime = Field(alias="datetime")
    confidence: float = Field(ge=0, le=1)
    reason: str = ""
    provider_availability: ProviderAvailability = ProviderAvailability.MEDIUM
    price_multiplier: float = 1.0
    estimated_duration: int = 60


class PersonalizedBookingFlow(ApiModel):
    recommended_services: List[ServiceRecommendation] = Field(default_factory=list)
    suggested_time_slots: List[TimeSlotRecommendation] = Field(default_factory=list)
    personalized_offers: List[SpecialOffer] = Field(default_factory=list)
    booking_tips: List[str] = Field(default_factory=list)
    estimated_booking_time: int = Field(default=3, description="Minutes to complete a booking")


class PricingOptimization(ApiModel):
    original_price: float
    optimized_price: float
    savings_amount: float = 0.0
    savings_percentage: float = 0.0
    reason: str = ""
