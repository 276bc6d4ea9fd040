"""
Retry Decorator Module

Exponential backoff for ledger client requests. Only transport failures and
rate limiting are retried; any other error is raised immediately.
"""

import asyncio
import functools
import random
from typing import Callable, Any, Tuple, Type, Optional

from hedera_agent.ledger.errors import LedgerConnectionError, LedgerRateLimitError
from hedera_agent.utils.logging import get_logger

logger = get_logger(__name__)


def retry_with_backoff(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    exponential_base: float = 2.0,
    max_delay: float = 60.0,
    retry_on: Optional[Tuple[Type[Exception], ...]] = None
):
    """
    Decorator for retrying async functions with exponential backoff.

    Honors `retry_after` on rate limit errors when the server supplied one.

    Args:
        max_retries: Maximum number of retry attempts
        initial_delay: Delay in seconds before the first retry
        exponential_base: Base for exponential backoff calculation
        max_delay: Maximum delay between retries in seconds
        retry_on: Exception types to retry on (default: connection and rate limit errors)

    Example:
        @retry_with_backoff(max_retries=3, initial_delay=1.0)
        async def get_pools(self):
            return await self._get_json(url)

    Retry Schedule (with default params):
        - Attempt 1 fails -> wait ~1s
        - Attempt 2 fails -> wait ~2s
        - Attempt 3 fails -> wait ~4s
        - Attempt 4 fails -> raise exception
    """
    retryable = retry_on or (LedgerConnectionError, LedgerRateLimitError)

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)

                except retryable as e:
                    if attempt >= max_retries:
                        logger.error(
                            f"Max retries ({max_retries}) exceeded for {func.__name__}. "
                            f"Last error: {e}"
                        )
                        raise

                    retry_after = getattr(e, 'retry_after', None)
                    if retry_after is not None:
                        actual_delay = min(float(retry_after), max_delay)
                    else:
                        delay = min(initial_delay * (exponential_base ** attempt), max_delay)
                        # Jitter to avoid synchronized retries
                        actual_delay = delay + random.uniform(0, 0.1 * delay)

                    logger.warning(
                        f"{func.__name__} - Attempt {attempt + 1}/{max_retries} failed: {e}. "
                        f"Retrying in {actual_delay:.2f}s..."
                    )
                    await asyncio.sleep(actual_delay)

        return wrapper
    return decorator
