"""
Bounded retry for store lookups.

Only transient persistence failures are retried; logical outcomes such as
"no such admin" are ordinary return values and never trigger a retry.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Tuple, Type

from sqlalchemy.exc import OperationalError

from rth_backend.fastapi.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def linear_backoff(base_seconds: float = 1.0) -> Callable[[int], float]:
    """Delay after the n-th failed attempt: base, 2*base, 3*base, ..."""

    def backoff(attempt: int) -> float:
        return base_seconds * attempt

    return backoff


class RetryPolicy:
    """
    Retry a callable up to ``max_attempts`` times with a pluggable backoff.

    Args:
        max_attempts: Total number of attempts, including the first
        backoff: Maps the 1-based failed attempt number to a delay in seconds
        sleep: Awaitable sleep, replaced by a fake clock in tests
        retry_on: Exception types treated as transient
    """

    def __init__(
        self,
        max_attempts: int = 3,
        backoff: Callable[[int], float] = linear_backoff(1.0),
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        retry_on: Tuple[Type[BaseException], ...] = (OperationalError,),
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff = backoff
        self.sleep = sleep
        self.retry_on = retry_on

    async def run(self, fn: Callable, *args, **kwargs):
        """
        Call ``fn`` until it succeeds or the attempts run out.

        Raises:
            PersistenceError: When every attempt failed with a transient error
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return fn(*args, **kwargs)
            except self.retry_on as exc:
                if attempt == self.max_attempts:
                    logger.error("Store unavailable after %d attempts: %s", attempt, exc)
                    raise PersistenceError("Database connection error") from exc
                delay = self.backoff(attempt)
                logger.warning(
                    "Store lookup failed (attempt %d/%d), retrying in %.1fs",
                    attempt,
                    self.max_attempts,
                    delay,
                )
                await self.sleep(delay)
