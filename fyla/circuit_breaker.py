"""Circuit breaker for calls to the FYLA backend.

Pattern: Three states (closed, open, half-open) with failure threshold and timeout.

States:
- CLOSED: Normal operation, requests pass through
- OPEN: Backend unreachable, requests fail immediately (fail fast)
- HALF_OPEN: Testing if the backend recovered, allow one request
"""
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from fyla.logging_config import get_logger

logger = get_logger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerOpen(Exception):
    """Raised when circuit breaker is open (fail fast)."""
    pass


class CircuitBreaker:
    """Circuit breaker usable from both sync and async code."""

    def __init__(
        self,
        failure_threshold: int = 5,
        timeout: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize circuit breaker.

        Args:
            failure_threshold: Number of consecutive failures before opening circuit
            timeout: Seconds to wait before attempting half-open
            clock: Monotonic time source
        """
        self.failure_threshold = failure_threshold
        self.timeout = timeout
        self.failure_count = 0
        self.last_failure_time: Optional[float] = None
        self._state = CircuitState.CLOSED
        self._clock = clock

    @property
    def state(self) -> str:
        """Get current state as string."""
        return self._state.value

    def call(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        """
        Execute function with circuit breaker protection.

        Raises:
            CircuitBreakerOpen: If circuit is open (fail fast)
            Exception: If function raises exception
        """
        self._before_call()
        try:
            result = func(*args, **kwargs)
        except Exception:
            self._on_failure()
            raise
        self._on_success()
        return result

    async def call_async(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        """
        Await a coroutine function with circuit breaker protection.

        Raises:
            CircuitBreakerOpen: If circuit is open (fail fast)
            Exception: If the awaited call raises
        """
        self._before_call()
        try:
            result = await func(*args, **kwargs)
        except Exception:
            self._on_failure()
            raise
        self._on_success()
        return result

    def reset(self) -> None:
        """Close the circuit and forget past failures."""
        self.failure_count = 0
        self.last_failure_time = None
        self._state = CircuitState.CLOSED

    def _before_call(self) -> None:
        if self._state != CircuitState.OPEN:
            return
        if self._should_attempt_reset():
            self._state = CircuitState.HALF_OPEN
            logger.info("circuit_breaker_half_open")
        else:
            raise CircuitBreakerOpen(
                f"Circuit breaker is OPEN. "
                f"Retry after {self._time_until_retry():.1f}s"
            )

    def _should_attempt_reset(self) -> bool:
        """Check if enough time passed to attempt half-open."""
        if self.last_failure_time is None:
            return True
        return self._clock() - self.last_failure_time >= self.timeout

    def _time_until_retry(self) -> float:
        """Calculate seconds until retry allowed."""
        if self.last_failure_time is None:
            return 0
        return max(0, self.timeout - (self._clock() - self.last_failure_time))

    def _on_success(self):
        self.failure_count = 0
        if self._state == CircuitState.HALF_OPEN:
            self._state = CircuitState.CLOSED
            logger.info("circuit_breaker_closed")

    def _on_failure(self):
        self.failure_count += 1
        self.last_failure_time = self._clock()

        if self._state == CircuitState.HALF_OPEN:
            self._state = CircuitState.OPEN
            logger.warning("circuit_breaker_reopened")
        elif self.failure_count >= self.failure_threshold:
            self._state = CircuitState.OPEN
            logger.error(
                "circuit_breaker_opened",
                failures=self.failure_count,
                timeout=self.timeout,
            )
