"""Weekly business hours service."""
from abc import ABC, abstractmethod
from typing import Dict, List

from fyla.errors import ErrorKind, ServiceError
from fyla.feature_flags import FeatureFlag
from fyla.models.business_hours import BusinessHours, UpdateBusinessHoursRequest
from fyla.services.base import MockDataSource, RemoteDataSource, ServiceFacade


class BusinessHoursDataSource(ABC):

    @abstractmethod
    async def get_business_hours(self, token: str) -> List[BusinessHours]: ...

    @abstractmethod
    async def update_business_hours(self, token: str,
                                    request: UpdateBusinessHoursRequest) -> List[BusinessHours]: ...

    @abstractmethod
    async def get_provider_business_hours(self, token: str, provider_id: int) -> List[BusinessHours]: ...


class RemoteBusinessHoursDataSource(RemoteDataSource, BusinessHoursDataSource):
    default_error_message = "Business hours operation failed"

    async def get_business_hours(self, token):
        data = await self._request("GET", "/business-hours", token=token)
        return self._parse(List[BusinessHours], data)

    async def update_business_hours(self, token, request):
        data = await self._request("PUT", "/business-hours", body=request.to_api(), token=token)
        return self._parse(List[BusinessHours], data)

    async def get_provider_business_hours(self, token, provider_id):
        data = await self._request("GET", f"/business-hours/provider/{provider_id}", token=token)
        return self._parse(List[BusinessHours], data)


class MockBusinessHoursDataSource(MockDataSource, BusinessHoursDataSource):
    """The signed-in provider's week is stored so updates are visible to later reads."""

    OWN_PROVIDER_ID = 1

    def __init__(self, generator, delay):
        super().__init__(generator, delay)
        self._week: List[BusinessHours] = []

    def _own_week(self) -> List[BusinessHours]:
        if not self._week:
            self._week = self.generator.business_hours(self.OWN_PROVIDER_ID)
        return self._week

    async def get_business_hours(self, token):
        await self._simulate()
        return [entry.model_copy() for entry in self._own_week()]

    async def update_business_hours(self, token, request):
        await self._simulate()
        by_day: Dict[int, BusinessHours] = {entry.day_of_week: entry for entry in self._own_week()}
        for change in request.business_hours:
            current = by_day[change.day_of_week]
            by_day[change.day_of_week] = current.model_copy(update={
                "open_time": change.open_time,
                "close_time": change.close_time,
                "is_open": change.is_open,
            })
        self._week = [by_day[day] for day in sorted(by_day)]
        return [entry.model_copy() for entry in self._week]

    async def get_provider_business_hours(self, token, provider_id):
        await self._simulate()
        if provider_id == self.OWN_PROVIDER_ID:
            return [entry.model_copy() for entry in self._own_week()]
        return self.generator.business_hours(provider_id)


class BusinessHoursService(ServiceFacade[BusinessHoursDataSource]):
    """Opening hours per day of week."""

    flag = FeatureFlag.USE_REAL_BUSINESS_HOURS_API

    async def get_business_hours(self, token: str) -> List[BusinessHours]:
        return await self._source().get_business_hours(token)

    async def update_business_hours(self, token: str, request: UpdateBusinessHoursRequest) -> List[BusinessHours]:
        """
        Replace the signed-in provider's schedule.

        Raises:
            ServiceError: VALIDATION when an open day closes before it opens
                (checked locally, nothing is sent)
        """
        problems = [p for p in (entry.validation_error() for entry in request.business_hours) if p]
        if problems:
            raise ServiceError("; ".join(problems), ErrorKind.VALIDATION)
        return await self._source().update_business_hours(token, request)

    async def get_provider_business_hours(self, token: str, provider_id: int) -> List[BusinessHours]:
        return await self._source().get_provider_business_hours(token, provider_id)
