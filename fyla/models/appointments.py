"""Appointment DTOs."""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, Field, model_validator

from fyla.models.base import ApiModel


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"

    @classmethod
    def _missing_(cls, value):
        # Backend sends PascalCase enum names ("Confirmed", "NoShow")
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_")
            if normalized == "noshow":
                normalized = "no_show"
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class UserSummary(ApiModel):
    """User as embedded in appointments and conversations."""
    id: int
    full_name: str = ""
    email: Optional[str] = None
    phone_number: Optional[str] = None
    profile_picture_url: Optional[str] = None
    role: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def compose_full_name(cls, data):
        # Some endpoints only send firstName/lastName
        if isinstance(data, dict) and not (data.get("fullName") or data.get("full_name")):
            parts = [data.get("firstName"), data.get("lastName")]
            full_name = " ".join(p for p in parts if p)
            if full_name:
                data = {**data, "fullName": full_name}
        return data


class Service(ApiModel):
    """A bookable service offered by a provider."""
    id: int
    provider_id: Optional[int] = None
    name: str
    description: str = ""
    price: float = 0.0
    estimated_duration_minutes: int = 60
    is_active: bool = True
    created_at: Optional[datetime] = None


class AppointmentServiceItem(ApiModel):
    appointment_id: Optional[int] = None
    service_id: int
    price_at_booking: float = 0.0
    service: Optional[Service] = None


class Appointment(ApiModel):
    id: int
    client_id: int
    provider_id: int
    scheduled_start_time: datetime
    scheduled_end_time: datetime
    status: AppointmentStatus = AppointmentStatus.PENDING
    total_price: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    client: Optional[UserSummary] = None
    provider: Optional[UserSummary] = None
    services: List[AppointmentServiceItem] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, validation_alias=AliasChoices("notes", "Notes"))


class TimeSlot(ApiModel):
    """Bookable slot. Times are "HH:mm" or ISO timestamps depending on the endpoint."""
    start_time: str
    end_time: str
    is_available: bool
    reason: Optional[str] = None


class CreateAppointmentRequest(ApiModel):
    provider_id: int
    service_ids: List[int] = Field(min_length=1)
    scheduled_start_time: datetime
    notes: Optional[str] = None


class UpdateAppointmentRequest(ApiModel):
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None
    scheduled_start_time: Optional[datetime] = None


class AppointmentListResponse(ApiModel):
    appointments: List[Appointment] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False
