"""
Unit tests for the circuit breaker and the retry decorator.
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.resilience import (
    CircuitBreaker,
    CircuitBreakerError,
    CircuitState,
    backoff_delay,
    retry_with_backoff,
)


def _operational_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))


@pytest.fixture()
def breaker():
    return CircuitBreaker(
        name="test",
        failure_threshold=2,
        recovery_timeout=10.0,
        expected_exceptions=(OperationalError, ConnectionError),
    )


async def _trip(breaker: CircuitBreaker) -> None:
    failing = AsyncMock(side_effect=_operational_error())
    for _ in range(breaker.failure_threshold):
        with pytest.raises(OperationalError):
            await breaker.call(failing)


class TestCircuitBreaker:
    @pytest.mark.asyncio
    async def test_passes_result_through(self, breaker):
        assert await breaker.call(AsyncMock(return_value=42)) == 42
        assert breaker.state is CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_opens_at_threshold(self, breaker):
        await _trip(breaker)

        assert breaker.state is CircuitState.OPEN

    @pytest.mark.asyncio
    async def test_success_resets_consecutive_count(self, breaker):
        failing = AsyncMock(side_effect=_operational_error())
        with pytest.raises(OperationalError):
            await breaker.call(failing)
        await breaker.call(AsyncMock(return_value=None))
        with pytest.raises(OperationalError):
            await breaker.call(failing)

        assert breaker.state is CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_open_circuit_fails_fast(self, breaker):
        await _trip(breaker)
        func = AsyncMock()

        with pytest.raises(CircuitBreakerError) as exc_info:
            await breaker.call(func)

        func.assert_not_awaited()
        assert 0 < exc_info.value.retry_after <= 10.0

    @pytest.mark.asyncio
    async def test_unexpected_errors_do_not_count(self, breaker):
        failing = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("dup")))
        for _ in range(5):
            with pytest.raises(IntegrityError):
                await breaker.call(failing)

        assert breaker.state is CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_probe_after_timeout(self, breaker):
        await _trip(breaker)
        with patch("app.core.resilience.time") as clock:
            clock.monotonic.return_value = 1e12
            assert breaker.state is CircuitState.HALF_OPEN
            await breaker.call(AsyncMock(return_value="ok"))

        assert breaker.state is CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_failed_probe_reopens(self, breaker):
        await _trip(breaker)
        with patch("app.core.resilience.time") as clock:
            clock.monotonic.return_value = 1e12
            assert breaker.state is CircuitState.HALF_OPEN
            with pytest.raises(OperationalError):
                await breaker.call(AsyncMock(side_effect=_operational_error()))
            assert breaker.state is CircuitState.OPEN

    @pytest.mark.asyncio
    async def test_reset(self, breaker):
        await _trip(breaker)
        breaker.reset()

        assert breaker.state is CircuitState.CLOSED
        assert breaker.get_status()["failure_count"] == 0

    def test_status_shape(self, breaker):
        status = breaker.get_status()
        assert status["name"] == "test"
        assert status["state"] == "closed"
        assert status["failure_threshold"] == 2


class TestBackoffDelay:
    def test_doubles_and_caps(self):
        delays = [backoff_delay(n, base_delay=1.0, max_delay=5.0, jitter=False) for n in range(5)]
        assert delays == [1.0, 2.0, 4.0, 5.0, 5.0]

    def test_jitter_bounded(self):
        for _ in range(20):
            assert 2.0 <= backoff_delay(1, base_delay=1.0, max_delay=10.0, jitter=True) <= 3.0


class TestRetryWithBackoff:
    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        func = AsyncMock(return_value="ok")
        func.__qualname__ = "func"

        assert await retry_with_backoff(max_retries=3)(func)() == "ok"
        func.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_retries_connection_errors(self):
        func = AsyncMock(side_effect=[ConnectionError("down"), ConnectionError("down"), "ok"])
        func.__qualname__ = "func"

        with patch("app.core.resilience.asyncio.sleep", new=AsyncMock()) as sleep:
            result = await retry_with_backoff(max_retries=3, jitter=False, base_delay=1.0)(func)()

        assert result == "ok"
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_raises_after_exhausting_retries(self):
        func = AsyncMock(side_effect=ConnectionError("down"))
        func.__qualname__ = "func"

        with patch("app.core.resilience.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(ConnectionError):
                await retry_with_backoff(max_retries=2)(func)()

        assert func.await_count == 3

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self):
        func = AsyncMock(side_effect=ValueError("bug"))
        func.__qualname__ = "func"

        with pytest.raises(ValueError):
            await retry_with_backoff(max_retries=5)(func)()

        func.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_zero_retries(self):
        func = AsyncMock(side_effect=ConnectionError("down"))
        func.__qualname__ = "func"

        with pytest.raises(ConnectionError):
            await retry_with_backoff(max_retries=0)(func)()

        func.assert_awaited_once()
