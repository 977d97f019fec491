"""
Rate limiter for outbound catalog requests.
Token bucket refilled continuously at requests_per_minute / 60 tokens per second.
"""

import asyncio
import time
from typing import Optional

class RateLimiter:
    """Async token bucket shared by all requests of one API client."""

    def __init__(self, requests_per_minute: int, burst_size: Optional[int] = None):
        """
        Initialize rate limiter.

        Args:
            requests_per_minute: Sustained request rate
            burst_size: Bucket capacity (defaults to requests_per_minute)
        """
        if requests_per_minute <= 0:
            raise ValueError("requests_per_minute must be positive")

        self.requests_per_minute = requests_per_minute
        self.burst_size = burst_size or requests_per_minute
        self.tokens = float(self.burst_size)
        self.last_update = time.monotonic()
        self.lock = asyncio.Lock()

    @property
    def seconds_per_token(self) -> float:
        return 60.0 / self.requests_per_minute

    def _refilled(self, now: float) -> float:
        elapsed = now - self.last_update
        return min(self.burst_size, self.tokens + elapsed / self.seconds_per_token)

    async def acquire(self) -> None:
        """Take one token, sleeping until one is available."""
        async with self.lock:
            now = time.monotonic()
            self.tokens = self._refilled(now)
            self.last_update = now

            if self.tokens < 1:
                await asyncio.sleep((1 - self.tokens) * self.seconds_per_token)
                self.tokens = 1.0
                self.last_update = time.monotonic()

            self.tokens -= 1

    def available_tokens(self) -> float:
        """Get number of available tokens."""
        return self._refilled(time.monotonic())
