"""Tests for business hours."""
import json

import httpx
import pytest
from pydantic import ValidationError

from fyla.errors import ErrorKind, ServiceError
from fyla.feature_flags import FeatureFlag
from fyla.models import BusinessHoursRequest, DayOfWeek, UpdateBusinessHoursRequest
from fyla.services.business_hours import (
    BusinessHoursService,
    MockBusinessHoursDataSource,
    RemoteBusinessHoursDataSource,
)


@pytest.fixture
def business_hours(make_service):
    def _create(handler=None):
        return make_service(BusinessHoursService, RemoteBusinessHoursDataSource, MockBusinessHoursDataSource, handler)
    return _create


def day(day_of_week, open_time="09:00", close_time="17:00", is_open=True):
    return BusinessHoursRequest(day_of_week=day_of_week, open_time=open_time, close_time=close_time, is_open=is_open)


class TestValidation:
    """Invalid schedules are rejected before any request is sent."""

    @pytest.mark.asyncio
    async def test_close_before_open_rejected_locally(self, business_hours):
        service = business_hours(lambda request: httpx.Response(200, json=[]))
        request = UpdateBusinessHoursRequest(business_hours=[
            day(DayOfWeek.MONDAY, "18:00", "09:00"),
            day(DayOfWeek.TUESDAY, "10:00", "10:00"),
        ])

        with pytest.raises(ServiceError) as exc_info:
            await service.update_business_hours("tok", request)

        assert exc_info.value.kind == ErrorKind.VALIDATION
        assert "Monday" in exc_info.value.message
        assert "Tuesday" in exc_info.value.message
        assert service.requests == []

    @pytest.mark.asyncio
    async def test_closed_day_times_not_checked(self, business_hours, flags):
        flags.set(FeatureFlag.USE_REAL_BUSINESS_HOURS_API, False)
        service = business_hours()

        week = await service.update_business_hours("tok", UpdateBusinessHoursRequest(business_hours=[
            day(DayOfWeek.SUNDAY, "17:00", "09:00", is_open=False),
        ]))

        assert week[0].day_of_week == DayOfWeek.SUNDAY
        assert week[0].is_open is False

    def test_time_format_enforced(self):
        with pytest.raises(ValidationError):
            day(DayOfWeek.MONDAY, "9am", "17:00")
        with pytest.raises(ValidationError):
            day(DayOfWeek.MONDAY, "24:00", "17:00")

    def test_duplicate_days_rejected(self):
        with pytest.raises(ValidationError):
            UpdateBusinessHoursRequest(business_hours=[day(DayOfWeek.MONDAY), day(DayOfWeek.MONDAY)])


class TestRemoteBusinessHours:

    @pytest.mark.asyncio
    async def test_update_sends_schedule(self, business_hours, generator):
        week = [h.model_dump(by_alias=True, mode="json") for h in generator.business_hours(1)]
        service = business_hours(lambda request: httpx.Response(200, json=week))

        result = await service.update_business_hours("tok", UpdateBusinessHoursRequest(business_hours=[
            day(DayOfWeek.SATURDAY, "10:00", "14:00"),
        ]))

        assert len(result) == 7
        request = service.requests[0]
        assert (request.method, request.url.path) == ("PUT", "/api/business-hours")
        assert json.loads(request.content) == {"businessHours": [
            {"dayOfWeek": 6, "openTime": "10:00", "closeTime": "14:00", "isOpen": True},
        ]}

    @pytest.mark.asyncio
    async def test_provider_hours_path(self, business_hours):
        service = business_hours(lambda request: httpx.Response(200, json=[]))

        assert await service.get_provider_business_hours("tok", 5) == []
        assert service.requests[0].url.path == "/api/business-hours/provider/5"


class TestMockBusinessHours:

    @pytest.mark.asyncio
    async def test_update_visible_on_next_read(self, business_hours, flags):
        flags.set(FeatureFlag.USE_REAL_BUSINESS_HOURS_API, False)
        service = business_hours()

        await service.update_business_hours("tok", UpdateBusinessHoursRequest(business_hours=[
            day(DayOfWeek.SATURDAY, "10:00", "14:00"),
        ]))
        week = await service.get_business_hours("tok")

        saturday = next(h for h in week if h.day_of_week == DayOfWeek.SATURDAY)
        assert (saturday.open_time, saturday.close_time, saturday.is_open) == ("10:00", "14:00", True)
        monday = next(h for h in week if h.day_of_week == DayOfWeek.MONDAY)
        assert monday.open_time == "09:00"
