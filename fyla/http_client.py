"""Synchronous HTTP session for the seed scripts.

Pattern: requests.Session with connection pooling, urllib3 retries for
throttling/5xx statuses and tenacity retries for connection-level failures.
POST is never retried, so a create request reaches the backend at most once.
Every wrapped method raises for 4xx/5xx statuses, so callers handle
requests.exceptions.HTTPError instead of checking status codes.
"""
import logging
from typing import Callable, Optional

import requests
from requests.adapters import HTTPAdapter
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from urllib3.util.retry import Retry

from fyla.circuit_breaker import CircuitBreaker

logger = logging.getLogger(__name__)

RETRY_STATUSES = [429, 500, 502, 503, 504]


def is_retryable(exc: BaseException) -> bool:
    """Connection failures, timeouts and 5xx responses are retried; 4xx are not."""
    if isinstance(exc, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)):
        return True
    if isinstance(exc, requests.exceptions.HTTPError) and exc.response is not None:
        return exc.response.status_code >= 500
    return False


def create_http_session(
    max_retries: int = 3,
    backoff_factor: float = 1.0,
    timeout: int = 15,
    max_wait: float = 8,
) -> requests.Session:
    """
    Create HTTP session with retry and connection pooling.

    Args:
        max_retries: Maximum number of retry attempts (default: 3)
        backoff_factor: Backoff multiplier; delays grow 1s, 2s, 4s with the default
        timeout: Request timeout in seconds (default: 15)
        max_wait: Upper bound for a single tenacity backoff

    Returns:
        Configured requests.Session whose get/put/patch retry, and whose
        get/post/put/patch raise for status
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=["GET", "PUT", "PATCH"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(
        max_retries=retry_strategy,
        pool_connections=10,
        pool_maxsize=10,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"Content-Type": "application/json"})

    retrying = retry(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=backoff_factor, max=max_wait),
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )

    def wrap(original: Callable[..., requests.Response], retried: bool = True) -> Callable[..., requests.Response]:
        def call(*args, **kwargs):
            kwargs.setdefault("timeout", timeout)
            response = original(*args, **kwargs)
            response.raise_for_status()
            return response
        return retrying(call) if retried else call

    session.get = wrap(session.get)
    session.post = wrap(session.post, retried=False)
    session.put = wrap(session.put)
    session.patch = wrap(session.patch)

    return session


def call_with_protection(
    session: requests.Session,
    method: str,
    url: str,
    breaker: Optional[CircuitBreaker] = None,
    **kwargs,
) -> requests.Response:
    """
    Make an API call, optionally behind a circuit breaker.

    Args:
        session: Session from create_http_session()
        method: HTTP method (GET, POST, PUT, PATCH)
        url: Request URL
        breaker: Circuit breaker shared by related calls
        **kwargs: Additional arguments for requests

    Raises:
        CircuitBreakerOpen: If circuit is open
        requests.exceptions.*: If request fails
    """
    handlers = {
        "GET": session.get,
        "POST": session.post,
        "PUT": session.put,
        "PATCH": session.patch,
    }
    handler = handlers.get(method.upper())
    if handler is None:
        raise ValueError(f"Unsupported HTTP method: {method}")

    if breaker is None:
        return handler(url, **kwargs)

    # 4xx means the backend is up; only server and connection failures trip the breaker
    def guarded():
        try:
            return handler(url, **kwargs), None
        except requests.exceptions.HTTPError as exc:
            if is_retryable(exc):
                raise
            return None, exc

    response, client_error = breaker.call(guarded)
    if client_error is not None:
        raise client_error
    return response
