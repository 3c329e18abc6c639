"""Error taxonomy for the FYLA client.

Two layers:
- Transport errors are raised by ApiClient and describe what happened on
  the wire (no response, server rejected, unreadable body).
- ServiceError is the single error type that domain services raise. Remote
  data sources convert transport errors into it exactly once.
"""
from enum import Enum
from typing import Any, Optional

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"
MALFORMED_RESPONSE_MESSAGE = "Received an unexpected response from the server"


class TransportError(Exception):
    """Base class for failures raised by the API transport."""

    def __init__(self, message: str, *, method: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.method = method
        self.url = url


class NoResponseError(TransportError):
    """The request never got a response (connection refused, timeout, DNS)."""
    pass


class ServerRejectedError(TransportError):
    """The server answered with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: Any = None,
        server_message: Optional[str] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message, method=method, url=url)
        self.status_code = status_code
        self.body = body
        self.server_message = server_message


class UnexpectedResponseError(TransportError):
    """The server answered but the body could not be read."""
    pass


class ErrorKind(str, Enum):
    """Why a service call failed."""
    NETWORK = "network"
    SERVER = "server"
    MALFORMED = "malformed"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"


class ServiceError(Exception):
    """Normalized error raised by every domain service."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.SERVER,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ServiceError(kind={self.kind.value!r}, message={self.message!r}, status_code={self.status_code})"

    @classmethod
    def from_transport_error(cls, error: TransportError, default_message: str) -> "ServiceError":
        """
        Convert a transport failure into a ServiceError.

        Args:
            error: Error raised by the transport
            default_message: Domain message used when the server gave none

        Returns:
            ServiceError with kind NETWORK, SERVER or MALFORMED
        """
        if isinstance(error, NoResponseError):
            return cls(NETWORK_ERROR_MESSAGE, ErrorKind.NETWORK)
        if isinstance(error, ServerRejectedError):
            kind = ErrorKind.NOT_FOUND if error.status_code == 404 else ErrorKind.SERVER
            return cls(error.server_message or default_message, kind, error.status_code)
        if isinstance(error, UnexpectedResponseError):
            return cls(MALFORMED_RESPONSE_MESSAGE, ErrorKind.MALFORMED)
        return cls(UNEXPECTED_ERROR_MESSAGE, ErrorKind.SERVER)


class UnknownFeatureFlagError(KeyError):
    """Raised when a feature flag name is not registered."""
    pass
