"""DTOs for a provider managing their own service catalog."""
from typing import List, Optional

from pydantic import Field

from fyla.models.appointments import Service
from fyla.models.base import ApiModel


class CreateServiceRequest(ApiModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(ge=0)
    estimated_duration_minutes: int = Field(ge=1)
    is_active: Optional[bool] = None


class UpdateServiceRequest(ApiModel):
    """Partial update; fields left as None are not changed."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    estimated_duration_minutes: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None


class ServiceListResponse(ApiModel):
    services: List[Service] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20
