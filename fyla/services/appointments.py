"""Appointment booking service."""
import datetime as dt
import itertools
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from fyla.feature_flags import FeatureFlag
from fyla.models.appointments import (
    Appointment,
    AppointmentListResponse,
    AppointmentStatus,
    CreateAppointmentRequest,
    TimeSlot,
    UpdateAppointmentRequest,
)
from fyla.services.base import MockDataSource, RemoteDataSource, ServiceFacade

# Statuses with a dedicated PATCH endpoint; anything else goes through PUT
STATUS_ENDPOINTS = {
    AppointmentStatus.CONFIRMED: "confirm",
    AppointmentStatus.CANCELLED: "cancel",
    AppointmentStatus.COMPLETED: "complete",
    AppointmentStatus.NO_SHOW: "no-show",
}


class AppointmentDataSource(ABC):

    @abstractmethod
    async def get_available_time_slots(self, provider_id: int, date: dt.date,
                                       service_ids: Sequence[int]) -> List[TimeSlot]: ...

    @abstractmethod
    async def create_appointment(self, request: CreateAppointmentRequest) -> Appointment: ...

    @abstractmethod
    async def get_appointments(self, page: int, limit: int,
                               status: Optional[AppointmentStatus]) -> AppointmentListResponse: ...

    @abstractmethod
    async def get_appointment(self, appointment_id: int) -> Appointment: ...

    @abstractmethod
    async def update_appointment(self, appointment_id: int, request: UpdateAppointmentRequest) -> Appointment: ...

    @abstractmethod
    async def cancel_appointment(self, appointment_id: int) -> bool: ...

    @abstractmethod
    async def update_appointment_status(self, appointment_id: int, status: AppointmentStatus) -> Appointment: ...


class RemoteAppointmentDataSource(RemoteDataSource, AppointmentDataSource):
    default_error_message = "Appointment operation failed"

    async def get_available_time_slots(self, provider_id, date, service_ids):
        params = {
            "providerId": provider_id,
            "date": date.isoformat(),
            "serviceIds": ",".join(str(service_id) for service_id in service_ids),
        }
        data = await self._request("GET", "/appointments/time-slots", params=params)
        return self._parse(List[TimeSlot], data)

    async def create_appointment(self, request):
        data = await self._request("POST", "/appointments", body=request.to_api())
        return self._parse(Appointment, data)

    async def get_appointments(self, page, limit, status):
        params = {"page": page, "limit": limit}
        if status is not None:
            params["status"] = status.value
        data = await self._request("GET", "/appointments", params=params)
        # Appointment.notes also accepts the backend's "Notes" key
        return self._parse(AppointmentListResponse, data)

    async def get_appointment(self, appointment_id):
        data = await self._request("GET", f"/appointments/{appointment_id}")
        return self._parse(Appointment, data)

    async def update_appointment(self, appointment_id, request):
        data = await self._request("PUT", f"/appointments/{appointment_id}", body=request.to_api())
        return self._parse(Appointment, data)

    async def cancel_appointment(self, appointment_id):
        await self._request("DELETE", f"/appointments/{appointment_id}/cancel")
        return True

    async def update_appointment_status(self, appointment_id, status):
        action = STATUS_ENDPOINTS.get(status)
        if action is None:
            data = await self._request(
                "PUT", f"/appointments/{appointment_id}", body={"status": status.value},
            )
        else:
            data = await self._request("PATCH", f"/appointments/{appointment_id}/{action}")
        return self._parse(Appointment, data)


class MockAppointmentDataSource(MockDataSource, AppointmentDataSource):
    """Keeps created and updated appointments so later reads see them."""

    def __init__(self, generator, delay):
        super().__init__(generator, delay)
        self._appointments: Dict[int, Appointment] = {}
        self._ids = itertools.count(1001)

    def _lookup(self, appointment_id: int) -> Appointment:
        if appointment_id not in self._appointments:
            self._appointments[appointment_id] = self.generator.appointment(appointment_id)
        return self._appointments[appointment_id]

    def _store(self, appointment: Appointment) -> Appointment:
        self._appointments[appointment.id] = appointment
        return appointment

    async def get_available_time_slots(self, provider_id, date, service_ids):
        await self._simulate()
        return self.generator.time_slots(date)

    async def create_appointment(self, request):
        await self._simulate()
        appointment = self.generator.appointment(
            next(self._ids),
            AppointmentStatus.PENDING,
            provider_id=request.provider_id,
            start=request.scheduled_start_time,
            service_ids=request.service_ids,
            notes=request.notes,
        )
        return self._store(appointment)

    async def get_appointments(self, page, limit, status):
        await self._simulate()
        return self.generator.appointments(page, limit, status)

    async def get_appointment(self, appointment_id):
        await self._simulate()
        return self._lookup(appointment_id)

    async def update_appointment(self, appointment_id, request):
        await self._simulate()
        current = self._lookup(appointment_id)
        changes = request.model_dump(exclude_none=True)
        if "scheduled_start_time" in changes:
            duration = current.scheduled_end_time - current.scheduled_start_time
            changes["scheduled_end_time"] = changes["scheduled_start_time"] + duration
        return self._store(current.model_copy(update=changes))

    async def cancel_appointment(self, appointment_id):
        await self._simulate()
        current = self._lookup(appointment_id)
        self._store(current.model_copy(update={"status": AppointmentStatus.CANCELLED}))
        return True

    async def update_appointment_status(self, appointment_id, status):
        await self._simulate()
        current = self._lookup(appointment_id)
        return self._store(current.model_copy(update={"status": status}))


class AppointmentService(ServiceFacade[AppointmentDataSource]):
    """Booking, listing and status changes for appointments."""

    flag = FeatureFlag.USE_REAL_APPOINTMENT_API

    async def get_available_time_slots(self, provider_id: int, date: dt.date,
                                       service_ids: Sequence[int] = ()) -> List[TimeSlot]:
        """
        Get bookable slots for a provider on one day.

        Args:
            provider_id: Provider to book with
            date: Day to check (sent as YYYY-MM-DD)
            service_ids: Services the booking would include

        Returns:
            Time slots in chronological order
        """
        return await self._source().get_available_time_slots(provider_id, date, service_ids)

    async def create_appointment(self, request: CreateAppointmentRequest) -> Appointment:
        return await self._source().create_appointment(request)

    async def get_appointments(self, page: int = 1, limit: int = 20,
                               status: Optional[AppointmentStatus] = None) -> AppointmentListResponse:
        self._check_paging(page, limit)
        return await self._source().get_appointments(page, limit, status)

    async def get_appointment(self, appointment_id: int) -> Appointment:
        return await self._source().get_appointment(appointment_id)

    async def update_appointment(self, appointment_id: int, request: UpdateAppointmentRequest) -> Appointment:
        return await self._source().update_appointment(appointment_id, request)

    async def cancel_appointment(self, appointment_id: int) -> bool:
        return await self._source().cancel_appointment(appointment_id)

    async def update_appointment_status(self, appointment_id: int, status: AppointmentStatus) -> Appointment:
        return await self._source().update_appointment_status(appointment_id, AppointmentStatus(status))

    async def confirm_appointment(self, appointment_id: int) -> Appointment:
        return await self.update_appointment_status(appointment_id, AppointmentStatus.CONFIRMED)

    async def complete_appointment(self, appointment_id: int) -> Appointment:
        return await self.update_appointment_status(appointment_id, AppointmentStatus.COMPLETED)

    async def mark_no_show(self, appointment_id: int) -> Appointment:
        return await self.update_appointment_status(appointment_id, AppointmentStatus.NO_SHOW)
