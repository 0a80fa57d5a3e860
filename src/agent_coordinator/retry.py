"""Retry helpers with exponential backoff."""

import functools
import random
import time
from typing import Any, Callable, TypeVar

from .exceptions import ProviderUnavailableError, RateLimitError
from .logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

TRANSIENT_ERRORS: tuple[type[Exception], ...] = (RateLimitError, ProviderUnavailableError)


def with_retry(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    retry_on: tuple[type[Exception], ...] = TRANSIENT_ERRORS,
    give_up_on: tuple[type[Exception], ...] = (),
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator for retrying calls with exponential backoff.

    Retries on the exception types in ``retry_on`` (rate limits and provider
    outages by default). Other exceptions, and those in ``give_up_on`` even
    when they also match ``retry_on``, are raised immediately. A
    RateLimitError carrying ``retry_after`` waits that long (capped at
    ``max_delay``) instead of the backoff delay.

    Args:
        max_retries: Maximum number of retry attempts (default: 3)
        initial_delay: Initial delay in seconds between retries (default: 1.0)
        max_delay: Maximum delay in seconds (default: 60.0)
        exponential_base: Base for exponential backoff (default: 2.0)
        jitter: Whether to add random jitter to delay (default: True)
        retry_on: Exception types that trigger a retry.
        give_up_on: Exception types never retried.

    Returns:
        Decorated function with retry logic.

    Example:
        @with_retry(max_retries=3, initial_delay=1.0)
        def make_api_call():
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            delay = initial_delay

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except retry_on as e:
                    if isinstance(e, give_up_on):
                        raise
                    if attempt == max_retries:
                        if max_retries:
                            logger.warning(
                                f"max retries ({max_retries}) exceeded for {func.__name__}: {e}"
                            )
                        raise

                    if isinstance(e, RateLimitError) and e.retry_after:
                        # the provider said when to come back
                        actual_delay = min(e.retry_after, max_delay)
                    else:
                        actual_delay = min(delay, max_delay)
                        if jitter:
                            actual_delay *= (0.5 + random.random())

                    logger.info(
                        f"retry {attempt + 1}/{max_retries} for {func.__name__} "
                        f"after {actual_delay:.1f}s: {e}"
                    )
                    time.sleep(actual_delay)
                    delay *= exponential_base

            raise RuntimeError("Unexpected retry loop exit")

        return wrapper
    return decorator
