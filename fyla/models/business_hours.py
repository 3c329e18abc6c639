"""Business hours DTOs and the default week."""
from datetime import datetime
from enum import IntEnum
from typing import List, Optional

from pydantic import Field, model_validator

from fyla.models.base import ApiModel

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class DayOfWeek(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class BusinessHours(ApiModel):
    id: int = 0
    provider_id: int = 0
    day_of_week: DayOfWeek
    open_time: str
    close_time: str
    is_open: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BusinessHoursRequest(ApiModel):
    """One day of a weekly schedule. Times are 24-hour "HH:mm"."""
    day_of_week: DayOfWeek
    open_time: str = Field(pattern=TIME_PATTERN)
    close_time: str = Field(pattern=TIME_PATTERN)
    is_open: bool

    def validation_error(self) -> Optional[str]:
        """Return a message when an open day closes before it opens."""
        # zero-padded HH:mm compares correctly as text
        if self.is_open and self.close_time <= self.open_time:
            return f"{self.day_of_week.name.title()}: closing time must be after opening time"
        return None


class UpdateBusinessHoursRequest(ApiModel):
    business_hours: List[BusinessHoursRequest]

    @model_validator(mode="after")
    def check_unique_days(self) -> "UpdateBusinessHoursRequest":
        days = [entry.day_of_week for entry in self.business_hours]
        if len(days) != len(set(days)):
            raise ValueError("each day of the week may appear only once")
        return self


DEFAULT_BUSINESS_HOURS: List[BusinessHoursRequest] = [
    BusinessHoursRequest(
        day_of_week=day,
        open_time="09:00",
        close_time="17:00",
        is_open=day not in (DayOfWeek.SUNDAY, DayOfWeek.SATURDAY),
    )
    for day in DayOfWeek
]
