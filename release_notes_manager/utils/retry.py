"""Retry decorator for handling provider API rate limits.

Retries are the responsibility of the provider implementations. The release
notes builder itself never retries; it only sees the final result or the
final exception raised by a decorated provider call.
"""

import asyncio
import functools
import time
from typing import Any, Callable, TypeVar

import httpx
import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

RATE_LIMIT_STATUS_CODES = (403, 429)


def _is_rate_limited(status_code: int, message: str) -> bool:
    """Return True if a failed response looks like a rate limit rather than a real error."""
    if status_code == 429:
        return True
    return status_code == 403 and "rate limit" in message.lower()


def _wait_time_from_headers(headers: Any, default: float) -> float:
    """Compute how long to wait from retry-after or rate limit reset headers."""
    retry_after = headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)

    for reset_header in ("x-ratelimit-reset", "ratelimit-reset"):
        rate_limit_reset = headers.get(reset_header)
        if not rate_limit_reset:
            continue
        try:
            reset_timestamp = int(rate_limit_reset)
        except ValueError:
            logger.warning("Invalid rate limit reset header value", header=reset_header, value=rate_limit_reset)
            continue
        current_timestamp = int(time.time())
        if reset_timestamp > current_timestamp:
            return float(reset_timestamp - current_timestamp + 1)

    return default


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async provider calls when they hit a rate limit.

    Handles githubkit's primary/secondary rate limit exceptions, githubkit
    ``RequestFailed`` responses with a 403/429 rate limit status, and
    ``httpx.HTTPStatusError`` responses with the same statuses (GitLab). Any
    other exception propagates immediately and unchanged.

    Args:
        max_retries: Maximum number of retry attempts (default: 5)
        initial_delay: Initial delay in seconds between retries (default: 10.0)
        max_delay: Maximum delay in seconds between retries (default: 300.0)
        exponential_base: Base for exponential backoff calculation (default: 2.0)

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: F) -> F:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay

            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as e:
                    if attempt == max_retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            error_type=type(e).__name__,
                        )
                        raise
                    if e.retry_after:
                        wait_time = min(e.retry_after.total_seconds(), max_delay)
                    else:
                        wait_time = min(delay, max_delay)
                    rate_limit_type = "primary" if isinstance(e, PrimaryRateLimitExceeded) else "secondary"
                except RequestFailed as e:
                    if not _is_rate_limited(e.response.status_code, str(e)) or attempt == max_retries:
                        raise
                    wait_time = min(_wait_time_from_headers(e.response.headers, delay), max_delay)
                    rate_limit_type = "http"
                except httpx.HTTPStatusError as e:
                    if not _is_rate_limited(e.response.status_code, e.response.text) or attempt == max_retries:
                        raise
                    wait_time = min(_wait_time_from_headers(e.response.headers, delay), max_delay)
                    rate_limit_type = "http"

                logger.warning(
                    f"Rate limit hit, retrying in {wait_time} seconds",
                    function=func.__name__,
                    rate_limit_type=rate_limit_type,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    wait_time=wait_time,
                )
                await asyncio.sleep(wait_time)
                delay = min(delay * exponential_base, max_delay)

        return async_wrapper  # type: ignore

    return decorator
