"""
Database fault tolerance.

``db_circuit_breaker``
    Wraps every repository call.  After ``CB_FAILURE_THRESHOLD`` consecutive
    connection-level failures it opens and rejects calls with
    :class:`CircuitBreakerError` (rendered as a generic 500) until
    ``CB_RECOVERY_TIMEOUT`` seconds have passed; then one probe call decides
    whether it closes again.

``retry_with_backoff``
    Decorator for start-up work (table creation) that has to wait for a
    database container that is still booting.

Only connection-level errors (:data:`CONNECTION_ERRORS`) count; integrity
errors and the like are the caller's business and pass straight through.
"""

import asyncio
import functools
import logging
import random
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Tuple, Type

from sqlalchemy.exc import InterfaceError, OperationalError

from app.core.config import settings

logger = logging.getLogger(__name__)

CONNECTION_ERRORS: Tuple[Type[Exception], ...] = (
    ConnectionError,
    OSError,
    TimeoutError,
    OperationalError,
    InterfaceError,
)


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerError(Exception):
    """The circuit is open; the call was not attempted."""

    def __init__(self, name: str, retry_after: float):
        self.name = name
        self.retry_after = retry_after
        super().__init__(f"circuit '{name}' is open, retry in {retry_after:.1f}s")


class CircuitBreaker:
    """
    Consecutive-failure circuit breaker for async callables.

    ``expected_exceptions`` are the failures that count towards opening the
    circuit; anything else propagates without touching the counters.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        recovery_timeout: float = 30.0,
        expected_exceptions: Tuple[Type[Exception], ...] = (Exception,),
    ):
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exceptions = expected_exceptions
        self.reset()

    def reset(self) -> None:
        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._opened_at = 0.0
        self._successes = 0

    @property
    def state(self) -> CircuitState:
        if self._state is CircuitState.OPEN and self._seconds_until_probe() <= 0:
            logger.info("circuit '%s' half-open, allowing a probe call", self.name)
            self._state = CircuitState.HALF_OPEN
        return self._state

    def _seconds_until_probe(self) -> float:
        return self.recovery_timeout - (time.monotonic() - self._opened_at)

    def _on_success(self) -> None:
        if self._state is not CircuitState.CLOSED:
            logger.info("circuit '%s' closed again", self.name)
        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._successes += 1

    def _on_failure(self, exc: BaseException) -> None:
        self._consecutive_failures += 1
        reopen = self._state is CircuitState.HALF_OPEN
        if reopen or self._consecutive_failures >= self.failure_threshold:
            self._state = CircuitState.OPEN
            self._opened_at = time.monotonic()
            logger.error(
                "circuit '%s' OPEN after %d consecutive failure(s): %s",
                self.name,
                self._consecutive_failures,
                exc,
            )
        else:
            logger.warning(
                "circuit '%s' failure %d/%d: %s",
                self.name,
                self._consecutive_failures,
                self.failure_threshold,
                exc,
            )

    async def call(self, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        """Await ``func(*args, **kwargs)`` unless the circuit is open."""
        if self.state is CircuitState.OPEN:
            raise CircuitBreakerError(self.name, max(self._seconds_until_probe(), 0.0))
        try:
            result = await func(*args, **kwargs)
        except self.expected_exceptions as exc:
            self._on_failure(exc)
            raise
        self._on_success()
        return result

    def get_status(self) -> dict:
        return {
            "name": self.name,
            "state": self.state.value,
            "failure_count": self._consecutive_failures,
            "failure_threshold": self.failure_threshold,
            "success_count": self._successes,
            "recovery_timeout_s": self.recovery_timeout,
        }


db_circuit_breaker = CircuitBreaker(
    name="database",
    failure_threshold=settings.CB_FAILURE_THRESHOLD,
    recovery_timeout=settings.CB_RECOVERY_TIMEOUT,
    expected_exceptions=CONNECTION_ERRORS,
)


def backoff_delay(attempt: int, base_delay: float, max_delay: float, jitter: bool) -> float:
    """Delay before retry number ``attempt`` (0-based): doubling, capped, plus up to 50% jitter."""
    delay = min(base_delay * (2**attempt), max_delay)
    if jitter:
        delay += random.uniform(0, delay * 0.5)
    return delay


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 0.5,
    max_delay: float = 10.0,
    jitter: bool = True,
    retryable_exceptions: Tuple[Type[Exception], ...] = CONNECTION_ERRORS,
) -> Callable:
    """
    Retry an async function on ``retryable_exceptions``.

    ``max_retries`` counts retries after the first attempt; once they are
    used up the last exception is re-raised.
    """

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except retryable_exceptions as exc:
                    if attempt >= max_retries:
                        logger.error(
                            "%s failed after %d attempt(s): %s",
                            func.__qualname__,
                            attempt + 1,
                            exc,
                        )
                        raise
                    delay = backoff_delay(attempt, base_delay, max_delay, jitter)
                    attempt += 1
                    logger.warning(
                        "%s failed (%s), retry %d/%d in %.2fs",
                        func.__qualname__,
                        exc,
                        attempt,
                        max_retries,
                        delay,
                    )
                    await asyncio.sleep(delay)

        return wrapper

    return decorator
