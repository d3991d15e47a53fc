"""Bounded exponential-backoff retries for network-backed vector stores."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from time import perf_counter
from typing import Generic, TypeVar

from ...config import VectorStoreSettings
from ...exceptions import DimensionMismatchError, OperationFailedError

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget, backoff base and overall deadline for one operation."""

    attempts: int = 3
    base_delay: float = 1.0
    timeout: float | None = None

    def delay_for(self, attempt: int) -> float:
        """Backoff before the retry that follows ``attempt`` (counted from 0)."""

        return self.base_delay * (2**attempt)

    @classmethod
    def from_settings(cls, settings: VectorStoreSettings) -> "RetryPolicy":
        return cls(
            attempts=settings.retry_attempts,
            base_delay=settings.retry_base_delay,
            timeout=settings.operation_timeout,
        )


@dataclass(frozen=True)
class RetryOutcome(Generic[T]):
    """Either the value of a successful attempt or the terminal error."""

    description: str
    attempts: int
    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is None:
            return self.value  # type: ignore[return-value]
        raise OperationFailedError(
            f"{self.description} failed after {self.attempts} attempt(s): {self.error}",
            cause=self.error,
        ) from self.error


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    description: str,
) -> RetryOutcome[T]:
    """Run ``operation`` until it succeeds or the policy is exhausted.

    ``DimensionMismatchError`` is raised immediately; every other exception
    counts as a failed attempt. The policy timeout bounds attempts and backoff
    sleeps together.
    """

    loop = asyncio.get_running_loop()
    deadline = loop.time() + policy.timeout if policy.timeout is not None else None
    last_error: BaseException | None = None
    attempt = 0
    start = perf_counter()
    while attempt < policy.attempts:
        remaining = None if deadline is None else deadline - loop.time()
        if remaining is not None and remaining <= 0:
            last_error = asyncio.TimeoutError(f"{description} exceeded {policy.timeout:.1f}s")
            break
        try:
            value = await asyncio.wait_for(operation(), timeout=remaining)
        except DimensionMismatchError:
            raise
        except Exception as exc:  # noqa: BLE001
            attempt += 1
            if isinstance(exc, asyncio.TimeoutError) and deadline is not None and loop.time() >= deadline:
                last_error = asyncio.TimeoutError(f"{description} exceeded {policy.timeout:.1f}s")
                break
            last_error = exc
            LOGGER.warning(
                "Vector store operation failed | operation=%s attempt=%d/%d error=%s",
                description,
                attempt,
                policy.attempts,
                exc,
            )
        else:
            attempt += 1
            if attempt > 1:
                LOGGER.info(
                    "Vector store operation recovered | operation=%s attempts=%d duration=%.3fs",
                    description,
                    attempt,
                    perf_counter() - start,
                )
            return RetryOutcome(description=description, attempts=attempt, value=value)

        if attempt < policy.attempts:
            delay = policy.delay_for(attempt - 1)
            if deadline is not None:
                delay = min(delay, max(deadline - loop.time(), 0.0))
            await asyncio.sleep(delay)

    LOGGER.error(
        "Vector store operation exhausted retries | operation=%s attempts=%d duration=%.3fs error=%s",
        description,
        attempt,
        perf_counter() - start,
        last_error,
    )
    return RetryOutcome(description=description, attempts=attempt, error=last_error)


__all__ = ["RetryPolicy", "RetryOutcome", "run_with_retry"]
