"""Building blocks shared by the domain services.

Pattern: Strategy + Facade
- Each domain declares a *DataSource ABC with two implementations:
  Remote* (REST API through ApiClient) and Mock* (MockDataGenerator + MockDelay).
- Both are built once by the composition root.
- The domain facade reads its feature flag on every call and forwards to one
  of the two sources. A failing remote call is never retried against the mock.
"""
from functools import lru_cache
from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from fyla.api_client import ApiClient
from fyla.errors import MALFORMED_RESPONSE_MESSAGE, ErrorKind, ServiceError, TransportError
from fyla.feature_flags import FeatureFlag, FeatureFlags
from fyla.logging_config import get_logger
from fyla.mock_data import MockDataGenerator, MockDelay

logger = get_logger(__name__)

T = TypeVar("T")
S = TypeVar("S")


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


class RemoteDataSource:
    """Base for data sources backed by the REST API."""

    default_error_message = "Request failed"

    def __init__(self, api: ApiClient):
        self.api = api

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        body: Any = None,
        token: Optional[str] = None,
    ) -> Any:
        """
        Call the transport and convert its failures into ServiceError.

        Raises:
            ServiceError: NETWORK, SERVER/NOT_FOUND or MALFORMED
        """
        try:
            return await self.api.request(method, path, params=params, body=body, token=token)
        except TransportError as exc:
            error = ServiceError.from_transport_error(exc, self.default_error_message)
            logger.error(
                "remote_call_failed",
                source=type(self).__name__,
                method=method,
                path=path,
                kind=error.kind.value,
                status_code=error.status_code,
                error=exc.message,
            )
            raise error from exc

    def _parse(self, tp: Type[T], data: Any) -> T:
        """Validate a response body into a DTO (or list of DTOs)."""
        try:
            return _adapter(tp).validate_python(data)
        except ValidationError as exc:
            logger.error(
                "malformed_response",
                source=type(self).__name__,
                expected=getattr(tp, "__name__", str(tp)),
                errors=exc.error_count(),
            )
            raise ServiceError(MALFORMED_RESPONSE_MESSAGE, ErrorKind.MALFORMED) from exc


class MockDataSource:
    """Base for data sources that synthesize responses locally."""

    def __init__(self, generator: MockDataGenerator, delay: MockDelay):
        self.generator = generator
        self.delay = delay

    async def _simulate(self) -> None:
        await self.delay.wait()

    @staticmethod
    def _not_found(what: str) -> ServiceError:
        return ServiceError(f"{what} not found", ErrorKind.NOT_FOUND, 404)


class ServiceFacade(Generic[S]):
    """Dispatches each call to the remote or mock source according to a flag."""

    flag: FeatureFlag

    def __init__(self, flags: FeatureFlags, remote: S, mock: S):
        self.flags = flags
        self.remote = remote
        self.mock = mock

    def _source(self) -> S:
        use_real = self.flags.get(self.flag)
        source = self.remote if use_real else self.mock
        logger.debug("data_source_selected", flag=self.flag.value, source=type(source).__name__)
        return source

    @property
    def uses_real_api(self) -> bool:
        return self.flags.get(self.flag)

    @staticmethod
    def _check_paging(page: int = 1, limit: int = 1) -> None:
        """
        Raises:
            ServiceError: VALIDATION for a page or page size below 1
        """
        if page < 1 or limit < 1:
            raise ServiceError(
                f"Invalid paging: page={page}, limit={limit} (both must be at least 1)",
                ErrorKind.VALIDATION,
            )
