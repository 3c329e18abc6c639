"""FYLA client: REST service layer with mock data sources, plus seed scripts."""
from fyla.api_client import ApiClient, HealthStatus
from fyla.client import FylaClient
from fyla.config import ClientConfig
from fyla.errors import ErrorKind, ServiceError
from fyla.feature_flags import FeatureFlag, FeatureFlags

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ClientConfig",
    "ErrorKind",
    "FeatureFlag",
    "FeatureFlags",
    "FylaClient",
    "HealthStatus",
    "ServiceError",
]
