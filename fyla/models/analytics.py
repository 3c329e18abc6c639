"""Provider analytics DTOs."""
import datetime as dt
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from fyla.models.appointments import AppointmentStatus
from fyla.models.base import ApiModel


class AnalyticsPeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class AnalyticsRequest(ApiModel):
    period: AnalyticsPeriod = AnalyticsPeriod.MONTH
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    def to_params(self) -> Dict[str, Any]:
        return self.to_api()


class RevenueData(ApiModel):
    period: str
    revenue: float
    appointments: int


class AppointmentStatusData(ApiModel):
    status: AppointmentStatus
    count: int
    percentage: float


class ServiceAnalytics(ApiModel):
    service_id: int
    service_name: str
    booking_count: int
    total_revenue: float
    average_rating: float = 0.0


class MostBookedService(ApiModel):
    id: int
    name: str
    booking_count: int


class PeakHours(ApiModel):
    start: str
    end: str


class HourCount(ApiModel):
    hour: int
    count: int


class DayCount(ApiModel):
    day: str
    count: int


class AnalyticsData(ApiModel):
    total_revenue: float = 0.0
    total_appointments: int = 0
    average_rating: float = 0.0
    completion_rate: float = 0.0
    no_show_rate: float = 0.0
    new_clients_count: int = 0
    returning_clients_count: int = 0
    most_booked_service: Optional[MostBookedService] = None
    revenue_by_period: List[RevenueData] = Field(default_factory=list)
    appointments_by_status: List[AppointmentStatusData] = Field(default_factory=list)
    top_services: List[ServiceAnalytics] = Field(default_factory=list)
    revenue_growth: float = 0.0
    client_retention_rate: float = 0.0
    average_booking_value: float = 0.0
    peak_business_hours: Optional[PeakHours] = None
    appointments_by_time: List[HourCount] = Field(default_factory=list)
    appointments_by_day: List[DayCount] = Field(default_factory=list)
    monthly_recurring_revenue: float = 0.0
    pending_payouts: float = 0.0
    available_for_payout: float = 0.0
    monthly_target: Optional[float] = None
    target_progress: float = 0.0


class DailyEarning(ApiModel):
    date: dt.date
    amount: float


class WeeklyEarning(ApiModel):
    week: str
    amount: float


class MonthlyEarning(ApiModel):
    month: str
    amount: float


class EarningsData(ApiModel):
    total_earnings: float = 0.0
    pending_payouts: float = 0.0
    available_for_payout: float = 0.0
    last_payout_date: Optional[dt.date] = None
    next_payout_date: Optional[dt.date] = None
    daily_earnings: List[DailyEarning] = Field(default_factory=list)
    weekly_earnings: List[WeeklyEarning] = Field(default_factory=list)
    monthly_earnings: List[MonthlyEarning] = Field(default_factory=list)
    platform_fee: float = 0.0
    processing_fee: float = 0.0
    net_earnings: float = 0.0
    total_taxable_income: float = 0.0
    estimated_taxes: float = 0.0


class ClientStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    NEW = "new"


class AppointmentHistoryEntry(ApiModel):
    date: dt.date
    service_name: str
    amount: float
    status: str


class ClientInsight(ApiModel):
    client_id: int
    client_name: str
    profile_picture_url: Optional[str] = None
    total_appointments: int = 0
    total_spent: float = 0.0
    last_appointment: Optional[dt.date] = None
    average_rating: float = 0.0
    status: ClientStatus = ClientStatus.ACTIVE
    appointment_history: List[AppointmentHistoryEntry] = Field(default_factory=list)


class AppointmentMetrics(ApiModel):
    total_upcoming: int = 0
    total_today: int = 0
    total_this_week: int = 0
    total_this_month: int = 0
    confirmed: int = 0
    pending: int = 0
    completed: int = 0
    cancelled: int = 0
    no_show: int = 0
    average_booking_lead_time: float = 0.0
    cancellation_rate: float = 0.0
    reschedule_rate: float = 0.0
    upcoming_revenue: float = 0.0
    lost_revenue: float = 0.0
