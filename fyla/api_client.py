"""Async transport for the FYLA REST API.

Pattern: one httpx.AsyncClient shared by every domain service, with
- bearer token and X-Request-ID headers per request
- tenacity retry with exponential backoff for connection failures
- ordered base-URL fallback checked through GET /health
- optional circuit breaker
- health status refreshed on every request, never polled
"""
import dataclasses
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fyla.circuit_breaker import CircuitBreaker, CircuitBreakerOpen
from fyla.config import HEALTH_PATH, ApiSettings
from fyla.errors import (
    NoResponseError,
    ServerRejectedError,
    TransportError,
    UnexpectedResponseError,
)
from fyla.logging_config import generate_request_id, get_logger

__all__ = [
    "ApiClient",
    "HealthStatus",
    "NoResponseError",
    "ServerRejectedError",
    "TransportError",
    "UnexpectedResponseError",
]

logger = get_logger(__name__)
_retry_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class HealthStatus:
    """Last observed state of the backend."""
    is_online: bool = False
    response_time_ms: float = 0.0
    last_checked: datetime = field(default_factory=_utc_now)
    base_url: Optional[str] = None
    features: Dict[str, bool] = field(default_factory=dict)


def _server_message(body: Any) -> Optional[str]:
    """Pull a human-readable message out of an error body."""
    if isinstance(body, dict):
        for key in ("message", "error", "title"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    if isinstance(body, str) and body.strip():
        return body.strip()[:200]
    return None


class ApiClient:
    """HTTP transport shared by the remote data sources."""

    def __init__(
        self,
        settings: Optional[ApiSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ):
        """
        Initialize the transport.

        Args:
            settings: API settings (base URL, fallbacks, timeouts, retry)
            transport: Optional httpx transport (tests inject httpx.MockTransport)
            circuit_breaker: Optional breaker; built from settings when omitted
        """
        self.settings = settings or ApiSettings()
        self._candidates: List[str] = self.settings.candidate_urls
        self._current_base_url = self._candidates[0]
        self._health = HealthStatus(base_url=self._current_base_url)

        if circuit_breaker is None and self.settings.circuit_breaker_threshold:
            circuit_breaker = CircuitBreaker(
                failure_threshold=self.settings.circuit_breaker_threshold,
                timeout=self.settings.circuit_breaker_timeout,
            )
        self._circuit_breaker = circuit_breaker

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.timeout),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )

    @property
    def current_base_url(self) -> str:
        return self._current_base_url

    @property
    def candidate_urls(self) -> List[str]:
        return list(self._candidates)

    def get_health_status(self) -> HealthStatus:
        """Return a copy of the last observed health status."""
        return dataclasses.replace(self._health, features=dict(self._health.features))

    def is_online(self) -> bool:
        return self._health.is_online

    async def get(self, path: str, *, params: Any = None, headers: Optional[Dict[str, str]] = None,
                  token: Optional[str] = None) -> Any:
        return await self.request("GET", path, params=params, headers=headers, token=token)

    async def post(self, path: str, body: Any = None, *, params: Any = None,
                   headers: Optional[Dict[str, str]] = None, token: Optional[str] = None) -> Any:
        return await self.request("POST", path, params=params, body=body, headers=headers, token=token)

    async def put(self, path: str, body: Any = None, *, params: Any = None,
                  headers: Optional[Dict[str, str]] = None, token: Optional[str] = None) -> Any:
        return await self.request("PUT", path, params=params, body=body, headers=headers, token=token)

    async def patch(self, path: str, body: Any = None, *, params: Any = None,
                    headers: Optional[Dict[str, str]] = None, token: Optional[str] = None) -> Any:
        return await self.request("PATCH", path, params=params, body=body, headers=headers, token=token)

    async def delete(self, path: str, *, params: Any = None, headers: Optional[Dict[str, str]] = None,
                     token: Optional[str] = None) -> Any:
        return await self.request("DELETE", path, params=params, headers=headers, token=token)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        token: Optional[str] = None,
    ) -> Any:
        """
        Send a request, falling back to other base URLs on connection failure.

        Args:
            method: HTTP method
            path: Path relative to the base URL (e.g. '/content/feed')
            params: Query parameters (mapping or list of pairs)
            body: JSON-serializable request body
            headers: Extra headers
            token: Bearer token

        Returns:
            Parsed JSON body, or None for an empty body

        Raises:
            NoResponseError: If no candidate base URL answered
            ServerRejectedError: If the server answered with an error status
            UnexpectedResponseError: If a success body is not valid JSON
        """
        method = method.upper()
        base_url = self._current_base_url
        try:
            return await self._send_with_retry(base_url, method, path, params, body, headers, token)
        except NoResponseError as exc:
            logger.warning(
                "request_failed_trying_fallbacks",
                method=method,
                path=path,
                base_url=base_url,
                error=exc.message,
            )
            fallback = await self.find_working_base_url(exclude=base_url)
            if fallback is None:
                logger.error("all_base_urls_failed", method=method, path=path)
                raise
            self._use_base_url(fallback)
            return await self._send_with_retry(fallback, method, path, params, body, headers, token)

    async def find_working_base_url(self, exclude: Optional[str] = None) -> Optional[str]:
        """
        Check candidate base URLs in order.

        Args:
            exclude: Base URL to skip (the one that just failed)

        Returns:
            First base URL whose /health answers 200, or None
        """
        for url in self._candidates:
            if url == exclude:
                continue
            if await self._is_healthy(url):
                logger.info("base_url_found", base_url=url)
                return url
        return None

    async def check_health(self) -> HealthStatus:
        """Call GET /health on the current base URL and record the result."""
        url = self._build_url(self._current_base_url, HEALTH_PATH)
        started = time.perf_counter()
        try:
            response = await self._client.get(url, timeout=self.settings.health_timeout)
        except httpx.HTTPError as exc:
            logger.warning("health_check_failed", url=url, error=str(exc))
            self._record(False, started, self._current_base_url)
            return self.get_health_status()

        features: Dict[str, bool] = {}
        if response.status_code == 200:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            if isinstance(payload, dict) and isinstance(payload.get("features"), dict):
                features = {str(k): bool(v) for k, v in payload["features"].items()}

        self._record(response.status_code == 200, started, self._current_base_url, features)
        logger.info(
            "health_check",
            url=url,
            online=self._health.is_online,
            response_time_ms=round(self._health.response_time_ms, 1),
        )
        return self.get_health_status()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _send_with_retry(self, base_url, method, path, params, body, headers, token) -> Any:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.retry_attempts),
            wait=wait_exponential(multiplier=self.settings.retry_backoff, max=self.settings.retry_max_wait),
            retry=retry_if_exception_type(NoResponseError),
            before_sleep=before_sleep_log(_retry_logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                result = await self._send(base_url, method, path, params, body, headers, token)
        return result

    async def _send(self, base_url, method, path, params, body, headers, token) -> Any:
        url = self._build_url(base_url, path)
        request_id = generate_request_id()
        request_headers = {"X-Request-ID": request_id}
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        if headers:
            request_headers.update(headers)

        log = logger.bind(request_id=request_id, method=method, url=url)
        log.debug("api_request")
        started = time.perf_counter()
        try:
            if self._circuit_breaker is not None:
                response = await self._circuit_breaker.call_async(
                    self._client.request, method, url,
                    params=params, json=body, headers=request_headers,
                )
            else:
                response = await self._client.request(
                    method, url, params=params, json=body, headers=request_headers,
                )
        except CircuitBreakerOpen as exc:
            self._record(False, started, base_url)
            raise NoResponseError(str(exc), method=method, url=url) from exc
        except httpx.TransportError as exc:
            self._record(False, started, base_url)
            raise NoResponseError(f"No response from {url}: {exc}", method=method, url=url) from exc
        except httpx.DecodingError as exc:
            # the server answered; its body could not be decoded
            self._record(True, started, base_url)
            raise UnexpectedResponseError(
                f"{method} {url} returned a body that could not be decoded: {exc}",
                method=method,
                url=url,
            ) from exc
        except httpx.HTTPError as exc:
            self._record(True, started, base_url)
            raise UnexpectedResponseError(f"{method} {url} failed: {exc}", method=method, url=url) from exc

        self._record(True, started, base_url)
        log.debug("api_response", status=response.status_code)

        if response.is_error:
            error_body = self._read_error_body(response)
            raise ServerRejectedError(
                f"{method} {url} failed with status {response.status_code}",
                status_code=response.status_code,
                body=error_body,
                server_message=_server_message(error_body),
                method=method,
                url=url,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise UnexpectedResponseError(
                f"{method} {url} returned a body that is not JSON",
                method=method,
                url=url,
            ) from exc

    @staticmethod
    def _read_error_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _build_url(base_url: str, path: str) -> str:
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"

    async def _is_healthy(self, base_url: str) -> bool:
        try:
            response = await self._client.get(
                self._build_url(base_url, HEALTH_PATH),
                timeout=self.settings.health_timeout,
            )
        except httpx.HTTPError as exc:
            logger.info("base_url_health_check_failed", base_url=base_url, error=str(exc))
            return False
        return response.status_code == 200

    def _use_base_url(self, base_url: str) -> None:
        if base_url == self._current_base_url:
            return
        logger.info("base_url_switched", previous=self._current_base_url, current=base_url)
        self._current_base_url = base_url
        if self._circuit_breaker is not None:
            self._circuit_breaker.reset()

    def _record(self, online: bool, started: float, base_url: str,
                features: Optional[Dict[str, bool]] = None) -> None:
        self._health = HealthStatus(
            is_online=online,
            response_time_ms=(time.perf_counter() - started) * 1000,
            last_checked=_utc_now(),
            base_url=base_url,
            features=features if features is not None else dict(self._health.features),
        )
