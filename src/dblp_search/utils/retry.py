"""
Retry with exponential backoff for transient transport failures.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from .exceptions import NetworkError, RateLimitError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    backoff_factor: float = 2.0,
    max_delay: float = 60.0,
    exceptions: Tuple[Type[Exception], ...] = (NetworkError, RateLimitError),
) -> Callable:
    """Decorator for retrying failed operations with exponential backoff.

    Only ``exceptions`` are retried; anything else propagates at once. When
    a :class:`RateLimitError` carries ``retry_after``, that delay is used
    instead of the computed one (still capped by ``max_delay``).

    Args:
        max_retries: Maximum number of attempts
        base_delay: Delay in seconds before the second attempt
        backoff_factor: Multiplier applied to the delay after each attempt
        max_delay: Upper bound for any single delay
        exceptions: Exception types that trigger a retry

    Returns:
        Decorated function

    Example:
        >>> @retry_with_backoff(max_retries=3, base_delay=1.0)
        ... def fetch():
        ...     return requests.get(url)
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            delay = base_delay
            last_exception: Optional[Exception] = None
            func_name = getattr(func, "__name__", repr(func))

            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e

                    if attempt == max_retries - 1:
                        logger.error(f"All {max_retries} attempts failed for {func_name}: {e}")
                        break

                    current_delay = delay
                    if isinstance(e, RateLimitError) and e.retry_after:
                        current_delay = float(e.retry_after)
                    current_delay = min(current_delay, max_delay)

                    logger.warning(
                        f"Attempt {attempt + 1}/{max_retries} failed for {func_name}: {e}. "
                        f"Retrying in {current_delay:.2f}s..."
                    )
                    time.sleep(current_delay)
                    delay *= backoff_factor

            if last_exception:
                raise last_exception

            raise RuntimeError("Retry logic failed unexpectedly")

        return wrapper

    return decorator
