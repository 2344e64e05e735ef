"""Retry service with exponential backoff for provider calls.

The generation handler runs with a single attempt and no timeout by
default; both are configurable through ``Settings``.
"""

import asyncio
from typing import Any, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from imagestudio.models.errors import ErrorCode, is_retryable

T = TypeVar("T")


class RetryableError(Exception):
    """Provider or I/O failure classified with an ErrorCode."""

    def __init__(self, error_code: ErrorCode, message: str, original_exception: Exception | None = None):
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.original_exception = original_exception


def _is_retryable_exception(exception: BaseException) -> bool:
    """Only retry RetryableErrors whose code is transient."""
    return isinstance(exception, RetryableError) and is_retryable(exception.error_code)


def build_retry_config(max_attempts: int = 1) -> dict[str, Any]:
    """
    Build a tenacity configuration.

    Args:
        max_attempts: Total attempts including the first one (1 = no retries)

    Returns:
        Keyword arguments for ``AsyncRetrying``
    """
    return {
        "stop": stop_after_attempt(max_attempts),
        "wait": wait_exponential(multiplier=1, min=1, max=4),  # 1s, 2s, 4s
        "retry": retry_if_exception(_is_retryable_exception),
        "reraise": True,
    }


DEFAULT_RETRY_CONFIG = build_retry_config()


async def retry_with_backoff(
    func: Callable[..., T],
    *args: Any,
    retry_config: dict[str, Any] | None = None,
    timeout_seconds: float | None = None,
    **kwargs: Any,
) -> T:
    """
    Execute an async function with retry logic and exponential backoff.

    Args:
        func: Async function to execute
        *args: Positional arguments for func
        retry_config: Optional custom retry configuration. If None, uses default (single attempt).
        timeout_seconds: Optional timeout per attempt. If None, no timeout is applied.
        **kwargs: Keyword arguments for func

    Returns:
        Result from func

    Raises:
        RetryableError: If all attempts fail or a timeout occurs
        Exception: Other exceptions are re-raised immediately
    """
    config = dict(retry_config or DEFAULT_RETRY_CONFIG)
    config.setdefault("retry", retry_if_exception(_is_retryable_exception))

    async def _execute_with_timeout():
        """Execute func with optional timeout."""
        if timeout_seconds is not None:
            try:
                return await asyncio.wait_for(func(*args, **kwargs), timeout=timeout_seconds)
            except asyncio.TimeoutError as e:
                raise RetryableError(
                    ErrorCode.PROVIDER_TIMEOUT,
                    f"Request timed out after {timeout_seconds}s",
                    original_exception=e,
                )
        else:
            return await func(*args, **kwargs)

    async for attempt in AsyncRetrying(**config):
        with attempt:
            return await _execute_with_timeout()


def should_retry(error_code: ErrorCode) -> bool:
    """Check if an error code indicates a retryable error."""
    return is_retryable(error_code)
