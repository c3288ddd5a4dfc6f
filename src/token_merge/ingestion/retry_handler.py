"""
Retry Handler

Exponential backoff for sequential retries of a single async operation.
Knows nothing about the endpoint being called: any exception raised by the
operation counts as a failed attempt.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from token_merge.exceptions import RetryExhaustedError
from token_merge.ingestion.config.value_objects import RetryConfig

T = TypeVar("T")


class RetryHandler:
    """Computes delays between attempts from a RetryConfig."""

    def __init__(self, config: RetryConfig):
        self.config = config

    def get_retry_delay(self, attempt_number: int) -> float:
        """
        Calculate the delay after a failed attempt.

        Args:
            attempt_number: The attempt that just failed (1-indexed)

        Returns:
            Number of seconds to wait before the next attempt
        """
        delay = self.config.base_delay * (
            self.config.backoff_multiplier ** (attempt_number - 1)
        )
        delay = min(delay, self.config.max_delay)

        if self.config.jitter:
            # Full jitter keeps the cap as the upper bound
            delay = random.uniform(0, delay)

        return delay

    def has_attempts_left(self, attempt_number: int) -> bool:
        return attempt_number < self.config.max_attempts


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    config: RetryConfig,
    logger: Any,
    description: str = "operation",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation`` until it succeeds or the attempt budget is spent.

    Each attempt completes (success, timeout or error) before the next one
    starts.

    Raises:
        RetryExhaustedError: When every attempt failed. ``last_error`` holds
            the final exception.
    """
    handler = RetryHandler(config)
    last_error: Exception | None = None

    for attempt_number in range(1, config.max_attempts + 1):
        try:
            logger.info(
                "attempt_started",
                description=description,
                attempt=attempt_number,
                max_attempts=config.max_attempts,
            )
            return await operation()
        except Exception as e:
            last_error = e
            logger.warning(
                "attempt_failed",
                description=description,
                attempt=attempt_number,
                error=str(e) or type(e).__name__,
            )

            if handler.has_attempts_left(attempt_number):
                delay = handler.get_retry_delay(attempt_number)
                logger.info("retry_scheduled", description=description, delay_s=delay)
                await sleep(delay)

    raise RetryExhaustedError(config.max_attempts, last_error)
