"""
Request throttling for the dblp endpoints.

dblp asks clients to keep their request rate low; every provider instance
owns one token bucket and takes a token before each GET.
"""

import logging
import time
from threading import Lock
from typing import Optional

logger = logging.getLogger(__name__)


class TokenBucket:
    """Thread-safe token bucket.

    Tokens accrue at ``rate`` per second up to ``capacity``; each request
    consumes one.

    Example:
        >>> bucket = TokenBucket(rate=1.0, capacity=3)
        >>> bucket.consume()
        True
    """

    def __init__(self, rate: float, capacity: int):
        """Initialize the token bucket.

        Args:
            rate: Tokens added per second
            capacity: Burst size

        Raises:
            ValueError: If rate or capacity is not positive
        """
        if rate <= 0:
            raise ValueError(f"Rate must be positive, got {rate}")
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got {capacity}")

        self.rate = rate
        self.capacity = capacity
        self.tokens = float(capacity)
        self.last_update = time.monotonic()
        self.lock = Lock()

    def consume(self, tokens: int = 1) -> bool:
        """Take tokens if available, without blocking."""
        with self.lock:
            self._refill()

            if self.tokens >= tokens:
                self.tokens -= tokens
                return True

            logger.debug(f"Insufficient tokens: need {tokens}, have {self.tokens:.2f}")
            return False

    def wait_for_token(self, tokens: int = 1, timeout: Optional[float] = None) -> bool:
        """Block until tokens are available or the timeout expires.

        Args:
            tokens: Number of tokens to take
            timeout: Maximum wait in seconds (None waits forever)

        Returns:
            True if the tokens were taken, False on timeout
        """
        start_time = time.monotonic()

        while not self.consume(tokens):
            sleep_time = min(self.time_until_tokens(tokens), 1.0) or 0.05

            if timeout is not None:
                remaining = timeout - (time.monotonic() - start_time)
                if remaining <= 0:
                    logger.warning(f"Timeout waiting for {tokens} token(s)")
                    return False
                sleep_time = min(sleep_time, remaining)

            time.sleep(sleep_time)

        return True

    def time_until_tokens(self, tokens: int = 1) -> float:
        """Seconds until ``tokens`` will be available (0 if they already are)."""
        with self.lock:
            self._refill()
            deficit = tokens - self.tokens
            return deficit / self.rate if deficit > 0 else 0.0

    def _refill(self) -> None:
        # Caller holds the lock.
        now = time.monotonic()
        self.tokens = min(self.capacity, self.tokens + (now - self.last_update) * self.rate)
        self.last_update = now
