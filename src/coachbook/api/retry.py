"""Bounded retry for transient storage failures at the HTTP boundary."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from coachbook.config import get_settings
from coachbook.exceptions import StorageError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def retry_on_storage_error(
    max_attempts: int | None = None, backoff_seconds: float | None = None
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Retry an endpoint on StorageError with exponential backoff.

    Every other error propagates on the first attempt. Defaults come from
    settings.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            settings = get_settings()
            attempts = max(1, max_attempts or settings.storage_retry_attempts)
            backoff = settings.storage_retry_backoff_seconds if backoff_seconds is None else backoff_seconds

            for attempt in range(attempts):
                try:
                    return await func(*args, **kwargs)
                except StorageError as exc:
                    if attempt == attempts - 1:
                        logger.error(
                            "All %s attempts failed for %s: %s", attempts, func.__name__, exc.message
                        )
                        raise
                    wait_time = backoff * (2**attempt)
                    logger.warning(
                        "Attempt %s/%s failed for %s: %s. Retrying in %ss",
                        attempt + 1,
                        attempts,
                        func.__name__,
                        exc.message,
                        wait_time,
                    )
                    await asyncio.sleep(wait_time)
            raise RuntimeError("Retry loop exited without a result")

        return wrapper

    return decorator
