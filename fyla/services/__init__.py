"""Domain services. Each facade switches between a remote and a mock data source."""
from fyla.services.ai_booking import AIBookingService
from fyla.services.analytics import AnalyticsService
from fyla.services.appointments import AppointmentService
from fyla.services.auth import AuthService
from fyla.services.business_hours import BusinessHoursService
from fyla.services.chat import ChatService
from fyla.services.content import ContentService
from fyla.services.providers import ProviderService
from fyla.services.service_management import ServiceManagementService
from fyla.services.social import SocialService

__all__ = [
    "AIBookingService",
    "AnalyticsService",
    "AppointmentService",
    "AuthService",
    "BusinessHoursService",
    "ChatService",
    "ContentService",
    "ProviderService",
    "ServiceManagementService",
    "SocialService",
]
