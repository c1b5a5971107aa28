"""
Retry with exponential backoff for fetching directory resources.

Remote directory JSON can hit timeouts, dropped connections or a busy
server. These helpers retry such transient failures a bounded number of
times before giving up with RetryError.
"""

import time
import functools
from typing import Callable, Optional, Tuple, Type


class RetryError(Exception):
    """Raised when all retry attempts are exhausted."""


class TransientFetchError(Exception):
    """A fetch failed in a way worth retrying (e.g. HTTP 503)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


RETRYABLE_STATUS_CODES = frozenset({
    408,  # Request Timeout
    429,  # Too Many Requests
    500,
    502,
    503,
    504,
})


def should_retry_http_status(status_code: int) -> bool:
    """True for statuses that usually clear up on their own."""
    return status_code in RETRYABLE_STATUS_CODES


def backoff_delays(
    max_retries: int,
    base_delay: float,
    max_delay: float,
    exponential_base: float = 2.0,
) -> list[float]:
    """The sleep before each retry, capped at max_delay."""
    return [min(base_delay * exponential_base ** n, max_delay) for n in range(max_retries)]


def exponential_backoff(
    max_retries: int = 3,
    base_delay: float = 0.5,
    max_delay: float = 10.0,
    exponential_base: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (TransientFetchError,),
    on_retry: Optional[Callable[[int, Exception, float], None]] = None,
    sleep: Optional[Callable[[float], None]] = None,
):
    """
    Decorator for retrying a function with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts (0 = no retries)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries in seconds
        exponential_base: Multiplier applied to the delay after each retry
        exceptions: Exception types that trigger a retry; anything else
            propagates immediately
        on_retry: Optional callback(attempt, exception, delay)
        sleep: Sleep function (default: time.sleep)

    Example:
        @exponential_backoff(max_retries=3, exceptions=(requests.Timeout,))
        def fetch(url):
            return requests.get(url, timeout=15)
    """
    delays = backoff_delays(max_retries, base_delay, max_delay, exponential_base)

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt >= max_retries:
                        raise RetryError(
                            f"Failed after {max_retries + 1} attempts: {e}"
                        ) from e
                    delay = delays[attempt]
                    attempt += 1
                    if on_retry:
                        on_retry(attempt, e, delay)
                    (sleep or time.sleep)(delay)

        return wrapper
    return decorator
