"""Retry policy tests."""
from __future__ import annotations

import asyncio

import pytest

from food_rag.config import VectorStoreSettings
from food_rag.exceptions import DimensionMismatchError, OperationFailedError
from food_rag.infrastructure.vectorstore import retry as retry_module
from food_rag.infrastructure.vectorstore.retry import RetryPolicy, run_with_retry


class FlakyOperation:
    """Fail a fixed number of times before returning a value."""

    def __init__(self, failures: int, exc: Exception | None = None) -> None:
        self.failures = failures
        self.exc = exc or ConnectionError("connection reset")
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc
        return "ok"


@pytest.fixture
def recorded_sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    delays: list[float] = []

    async def _sleep(delay: float) -> None:
        delays.append(delay)

    monkeypatch.setattr(retry_module.asyncio, "sleep", _sleep)
    return delays


def test_delays_double_per_attempt() -> None:
    policy = RetryPolicy(attempts=3, base_delay=1.0)
    assert [policy.delay_for(attempt) for attempt in range(3)] == [1.0, 2.0, 4.0]


def test_policy_from_settings() -> None:
    settings = VectorStoreSettings(retry_attempts=5, retry_base_delay=0.5, operation_timeout=None)
    policy = RetryPolicy.from_settings(settings)
    assert policy == RetryPolicy(attempts=5, base_delay=0.5, timeout=None)


def test_recovers_after_transient_failures(recorded_sleeps: list[float]) -> None:
    operation = FlakyOperation(failures=2)

    async def _run() -> None:
        outcome = await run_with_retry(operation, RetryPolicy(), description="test.op")
        assert outcome.ok
        assert outcome.unwrap() == "ok"
        assert outcome.attempts == 3

    asyncio.run(_run())
    assert operation.calls == 3
    assert recorded_sleeps == [1.0, 2.0]


def test_exhaustion_reports_last_error(recorded_sleeps: list[float]) -> None:
    operation = FlakyOperation(failures=10)

    async def _run() -> None:
        outcome = await run_with_retry(operation, RetryPolicy(attempts=3), description="test.op")
        assert not outcome.ok
        assert outcome.attempts == 3
        with pytest.raises(OperationFailedError) as excinfo:
            outcome.unwrap()
        assert isinstance(excinfo.value.cause, ConnectionError)
        assert "test.op" in str(excinfo.value)

    asyncio.run(_run())
    assert operation.calls == 3
    # No sleep after the final attempt.
    assert recorded_sleeps == [1.0, 2.0]


def test_dimension_mismatch_is_not_retried(recorded_sleeps: list[float]) -> None:
    operation = FlakyOperation(failures=10, exc=DimensionMismatchError("3 != 4"))

    async def _run() -> None:
        with pytest.raises(DimensionMismatchError):
            await run_with_retry(operation, RetryPolicy(), description="test.op")

    asyncio.run(_run())
    assert operation.calls == 1
    assert recorded_sleeps == []


def test_timeout_bounds_attempts_and_backoff() -> None:
    async def _slow() -> str:
        await asyncio.sleep(5)
        return "late"

    async def _run() -> None:
        loop = asyncio.get_running_loop()
        started = loop.time()
        outcome = await run_with_retry(
            _slow,
            RetryPolicy(attempts=3, base_delay=10.0, timeout=0.05),
            description="test.slow",
        )
        assert loop.time() - started < 2.0
        assert not outcome.ok
        assert isinstance(outcome.error, asyncio.TimeoutError)

    asyncio.run(_run())
