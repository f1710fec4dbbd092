"""Bounded exponential-backoff retry for async operations.

Wraps ``tenacity.AsyncRetrying`` so that page and detail fetches share a
single backoff configuration. Only errors accepted by the classification
predicate are retried; when the attempts run out, ``RetriesExhaustedError``
is raised with the last cause chained.
"""

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from moviehub.etl.extractors.catalog.client import RetryableCatalogError
from moviehub.settings import CatalogSettings

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


class RetriesExhaustedError(Exception):
    """Raised when a retryable operation failed on every attempt.

    Attributes:
        operation: Name of the operation that was retried.
        attempts: Number of attempts made.
        last_error: Exception raised by the final attempt.
    """

    def __init__(self, operation: str, attempts: int, last_error: BaseException | None) -> None:
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"{operation} failed after {attempts} attempts: {last_error}")


def is_retryable(error: BaseException) -> bool:
    """Default classification: only transient catalog errors are retried."""
    return isinstance(error, RetryableCatalogError)


class RetryPolicy:
    """Retry an async operation with exponential backoff.

    With the defaults an operation is attempted 3 times, sleeping 2s then
    4s in between. Usable directly (``await policy.call(op, *args)``) or
    as a decorator (``@policy``).

    Attributes:
        attempts: Total attempts, the first one included.
        base_delay: Delay before the first retry, doubled afterwards.
        max_delay: Upper bound for a single delay.
    """

    def __init__(
        self,
        attempts: int = 3,
        base_delay: float = 2.0,
        max_delay: float = 30.0,
        retryable: Callable[[BaseException], bool] = is_retryable,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if attempts < 1:
            raise ValueError("attempts must be >= 1")
        self.attempts = attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._retryable = retryable
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        config: CatalogSettings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> "RetryPolicy":
        """Create a policy from ``CatalogSettings``."""
        return cls(
            attempts=config.retry_attempts,
            base_delay=config.retry_base_delay,
            max_delay=config.retry_max_delay,
            sleep=sleep,
        )

    def delay_for(self, retry_number: int) -> float:
        """Delay slept before retry ``retry_number`` (1-based)."""
        return min(self.base_delay * 2 ** (retry_number - 1), self.max_delay)

    def _retrying(self, operation: str) -> AsyncRetrying:
        def log_retry(state: RetryCallState) -> None:
            error = state.outcome.exception() if state.outcome else None
            delay = state.next_action.sleep if state.next_action else 0.0
            logger.warning(
                f"{operation} failed (attempt {state.attempt_number}/{self.attempts}): "
                f"{error}. Retrying in {delay:.1f}s"
            )

        return AsyncRetrying(
            retry=retry_if_exception(self._retryable),
            stop=stop_after_attempt(self.attempts),
            wait=wait_exponential(multiplier=self.base_delay, max=self.max_delay),
            sleep=self._sleep,
            before_sleep=log_retry,
            reraise=False,
        )

    async def call(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run ``operation(*args, **kwargs)`` under this policy.

        Raises:
            RetriesExhaustedError: Every attempt failed with a retryable error.
            Exception: Any non-retryable error, unchanged, on first occurrence.
        """
        name = getattr(operation, "__name__", repr(operation))
        try:
            async for attempt in self._retrying(name):
                with attempt:
                    return await operation(*args, **kwargs)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            raise RetriesExhaustedError(name, e.last_attempt.attempt_number, last_error) from last_error
        raise RuntimeError(f"{name} did not run")

    def __call__(self, func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await self.call(func, *args, **kwargs)

        return wrapper
