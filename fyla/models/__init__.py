"""DTOs mirroring the FYLA REST API."""
from fyla.models.ai_booking import (
    BookingRecommendationRequest,
    DiscountType,
    PersonalizedBookingFlow,
    PreviousBooking,
    PricingOptimization,
    ProviderAvailability,
    ServiceRecommendation,
    SpecialOffer,
    TimeSlotRecommendation,
    UserLocation,
)
from fyla.models.analytics import (
    AnalyticsData,
    AnalyticsPeriod,
    AnalyticsRequest,
    AppointmentMetrics,
    ClientInsight,
    EarningsData,
)
from fyla.models.appointments import (
    Appointment,
    AppointmentListResponse,
    AppointmentServiceItem,
    AppointmentStatus,
    CreateAppointmentRequest,
    Service,
    TimeSlot,
    UpdateAppointmentRequest,
    UserSummary,
)
from fyla.models.auth import AuthResponse, LoginRequest, RegisterRequest, User, UserRole
from fyla.models.base import ApiModel
from fyla.models.business_hours import (
    DEFAULT_BUSINESS_HOURS,
    BusinessHours,
    BusinessHoursRequest,
    DayOfWeek,
    UpdateBusinessHoursRequest,
)
from fyla.models.chat import (
    ChatUser,
    Conversation,
    ConversationListResponse,
    CreateMessageRequest,
    Message,
    MessagesResponse,
    MessageType,
)
from fyla.models.content import (
    Comment,
    CreateCommentRequest,
    CreatePostRequest,
    FeedResponse,
    LikeToggleResponse,
    Media,
    Post,
    PostAuthor,
    Story,
    StoryGroup,
)
from fyla.models.providers import (
    ProviderProfile,
    ProviderSearchRequest,
    ProviderSearchResponse,
    ServiceProviderTag,
    SortBy,
)
from fyla.models.service_management import CreateServiceRequest, ServiceListResponse, UpdateServiceRequest
from fyla.models.social import FollowToggleResponse, UserFollow, UserSocialStats

__all__ = [
    "BookingRecommendationRequest", "DiscountType", "PersonalizedBookingFlow", "PreviousBooking",
    "PricingOptimization", "ProviderAvailability", "ServiceRecommendation", "SpecialOffer",
    "TimeSlotRecommendation", "UserLocation",
    "AnalyticsData", "AnalyticsPeriod", "AnalyticsRequest", "AppointmentMetrics",
    "ClientInsight", "EarningsData",
    "Appointment", "AppointmentListResponse", "AppointmentServiceItem", "AppointmentStatus",
    "CreateAppointmentRequest", "Service", "TimeSlot", "UpdateAppointmentRequest", "UserSummary",
    "AuthResponse", "LoginRequest", "RegisterRequest", "User", "UserRole",
    "ApiModel",
    "DEFAULT_BUSINESS_HOURS", "BusinessHours", "BusinessHoursRequest", "DayOfWeek",
    "UpdateBusinessHoursRequest",
    "ChatUser", "Conversation", "ConversationListResponse", "CreateMessageRequest", "Message",
    "MessagesResponse", "MessageType",
    "Comment", "CreateCommentRequest", "CreatePostRequest", "FeedResponse", "LikeToggleResponse",
    "Media", "Post", "PostAuthor", "Story", "StoryGroup",
    "ProviderProfile", "ProviderSearchRequest", "ProviderSearchResponse", "ServiceProviderTag", "SortBy",
    "CreateServiceRequest", "ServiceListResponse", "UpdateServiceRequest",
    "FollowToggleResponse", "UserFollow", "UserSocialStats",
]
