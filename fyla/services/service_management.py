"""Service catalog management for providers.

Shares the provider flag: a provider's own catalog comes from the same
backend area as provider search.
"""
import itertools
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from fyla.feature_flags import FeatureFlag
from fyla.models.appointments import Service
from fyla.models.service_management import CreateServiceRequest, ServiceListResponse, UpdateServiceRequest
from fyla.services.base import MockDataSource, RemoteDataSource, ServiceFacade


class ServiceManagementDataSource(ABC):

    @abstractmethod
    async def get_provider_services(self, provider_id: Optional[int], token: Optional[str]) -> ServiceListResponse: ...

    @abstractmethod
    async def create_service(self, token: str, request: CreateServiceRequest) -> Service: ...

    @abstractmethod
    async def update_service(self, token: str, service_id: int, request: UpdateServiceRequest) -> Service: ...

    @abstractmethod
    async def delete_service(self, token: str, service_id: int) -> None: ...

    @abstractmethod
    async def toggle_service_status(self, token: str, service_id: int, is_active: bool) -> Service: ...


def _unwrap(data: Any) -> Any:
    # writes answer {"data": <service>}
    if isinstance(data, dict) and "data" in data:
        return data["data"]
    return data


class RemoteServiceManagementDataSource(RemoteDataSource, ServiceManagementDataSource):
    default_error_message = "Service operation failed"

    async def get_provider_services(self, provider_id, token):
        path = f"/services/provider/{provider_id}" if provider_id is not None else "/services/my-services"
        data = await self._request("GET", path, token=token)
        return self._parse(ServiceListResponse, data)

    async def create_service(self, token, request):
        data = await self._request("POST", "/services", body=request.to_api(), token=token)
        return self._parse(Service, _unwrap(data))

    async def update_service(self, token, service_id, request):
        data = await self._request("PUT", f"/services/{service_id}", body=request.to_api(), token=token)
        return self._parse(Service, _unwrap(data))

    async def delete_service(self, token, service_id):
        await self._request("DELETE", f"/services/{service_id}", token=token)

    async def toggle_service_status(self, token, service_id, is_active):
        data = await self._request("PUT", f"/services/{service_id}", body={"isActive": is_active}, token=token)
        return self._parse(Service, _unwrap(data))


class MockServiceManagementDataSource(MockDataSource, ServiceManagementDataSource):
    """Catalogs are kept per provider so created and edited services read back."""

    CURRENT_PROVIDER_ID = 1

    def __init__(self, generator, delay):
        super().__init__(generator, delay)
        self._catalogs: Dict[int, Dict[int, Service]] = {}
        self._ids = itertools.count(5001)

    def _catalog(self, provider_id: int) -> Dict[int, Service]:
        if provider_id not in self._catalogs:
            self._catalogs[provider_id] = {
                service.id: service for service in self.generator.provider_services(provider_id)
            }
        return self._catalogs[provider_id]

    def _own(self, service_id: int) -> Service:
        catalog = self._catalog(self.CURRENT_PROVIDER_ID)
        if service_id not in catalog:
            raise self._not_found("Service")
        return catalog[service_id]

    async def get_provider_services(self, provider_id, token):
        await self._simulate()
        services = list(self._catalog(provider_id or self.CURRENT_PROVIDER_ID).values())
        return ServiceListResponse(services=services, total=len(services), page=1, page_size=20)

    async def create_service(self, token, request):
        await self._simulate()
        service = Service(
            id=next(self._ids),
            provider_id=self.CURRENT_PROVIDER_ID,
            name=request.name,
            description=request.description or "",
            price=request.price,
            estimated_duration_minutes=request.estimated_duration_minutes,
            is_active=True if request.is_active is None else request.is_active,
            created_at=self.generator.now(),
        )
        self._catalog(self.CURRENT_PROVIDER_ID)[service.id] = service
        return service

    async def update_service(self, token, service_id, request):
        await self._simulate()
        changes = request.model_dump(exclude_none=True)
        service = self._own(service_id).model_copy(update=changes)
        self._catalog(self.CURRENT_PROVIDER_ID)[service_id] = service
        return service

    async def delete_service(self, token, service_id):
        await self._simulate()
        self._own(service_id)
        del self._catalog(self.CURRENT_PROVIDER_ID)[service_id]

    async def toggle_service_status(self, token, service_id, is_active):
        await self._simulate()
        service = self._own(service_id).model_copy(update={"is_active": is_active})
        self._catalog(self.CURRENT_PROVIDER_ID)[service_id] = service
        return service


class ServiceManagementService(ServiceFacade[ServiceManagementDataSource]):
    """Create, edit and retire the services a provider offers."""

    flag = FeatureFlag.USE_REAL_PROVIDER_API

    async def get_provider_services(self, provider_id: Optional[int] = None,
                                    token: Optional[str] = None) -> ServiceListResponse:
        """
        Args:
            provider_id: Provider whose catalog to read; None reads the caller's own services
            token: Bearer token, required for the caller's own services
        """
        return await self._source().get_provider_services(provider_id, token)

    async def create_service(self, token: str, request: CreateServiceRequest) -> Service:
        return await self._source().create_service(token, request)

    async def update_service(self, token: str, service_id: int, request: UpdateServiceRequest) -> Service:
        """
        Raises:
            ServiceError: NOT_FOUND when the service does not exist
        """
        return await self._source().update_service(token, service_id, request)

    async def delete_service(self, token: str, service_id: int) -> None:
        return await self._source().delete_service(token, service_id)

    async def toggle_service_status(self, token: str, service_id: int, is_active: bool) -> Service:
        return await self._source().toggle_service_status(token, service_id, is_active)

    async def get_active_services(self, provider_id: Optional[int] = None,
                                  token: Optional[str] = None) -> List[Service]:
        """Catalog filtered to services clients can book."""
        result = await self.get_provider_services(provider_id, token)
        return [service for service in result.services if service.is_active]
