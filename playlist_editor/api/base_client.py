"""
Base HTTP client for catalog providers.
Includes the aiohttp session, transport retries, rate limiting, response
caching and the mapping of HTTP failures onto the edit error taxonomy.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from datetime import datetime
import aiohttp
import backoff
from playlist_editor.exceptions import ExternalServiceError
from playlist_editor.utils.rate_limiter import RateLimiter
from playlist_editor.utils.cache_manager import CacheManager

logger = logging.getLogger(__name__)

class APIError(ExternalServiceError):
    """Base exception for catalog HTTP errors."""
    pass

class RateLimitError(APIError):
    """Exception raised when rate limit is exceeded."""
    pass

class AuthenticationError(APIError):
    """Exception raised when authentication fails."""
    pass

class BaseAPIClient(ABC):
    """Base class for catalog provider API clients."""

    def __init__(
        self,
        base_url: str,
        rate_limit: int,
        cache_manager: Optional[CacheManager] = None,
        timeout: int = 30
    ):
        self.base_url = base_url
        self.rate_limiter = RateLimiter(rate_limit)
        self.cache_manager = cache_manager
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None
        self._auth_token: Optional[str] = None
        self._token_expires_at: Optional[datetime] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self):
        """Ensure HTTP session is created."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )

    async def close(self):
        """Close the HTTP session."""
        if self.session and not self.session.closed:
            await self.session.close()

    @abstractmethod
    async def authenticate(self) -> str:
        """Authenticate with the API and return access token."""

    async def _get_auth_token(self) -> str:
        """Get valid authentication token, refreshing if necessary."""
        if (self._auth_token is None or
            self._token_expires_at is None or
            datetime.now() >= self._token_expires_at):
            self._auth_token = await self.authenticate()

        return self._auth_token

    def _get_auth_headers(self) -> Dict[str, str]:
        """Get authentication headers. Override in subclasses."""
        return {}

    @backoff.on_exception(
        backoff.expo,
        (aiohttp.ClientConnectionError, asyncio.TimeoutError),
        max_tries=3,
        max_time=60
    )
    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """Send one HTTP request; connection errors and timeouts are retried."""
        async with self.session.request(method, url, params=params, headers=headers) as response:
            if response.status == 429:
                retry_after = response.headers.get("Retry-After", "unknown")
                logger.warning(f"Rate limited by {self.base_url}, retry after {retry_after}s")
                raise RateLimitError(f"Rate limit exceeded, retry after {retry_after}s")

            if response.status == 401:
                self._auth_token = None
                self._token_expires_at = None
                raise AuthenticationError("Authentication failed")

            response.raise_for_status()
            return await response.json()

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Make an authenticated, rate-limited request."""
        await self._ensure_session()
        await self.rate_limiter.acquire()
        await self._get_auth_token()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        try:
            return await self._send(method, url, params=params, headers=self._get_auth_headers())
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"HTTP request failed: {e}")
            raise APIError(f"Request to {endpoint} failed: {e}") from e

    async def _cached_request(
        self,
        cache_key: str,
        method: str,
        endpoint: str,
        ttl: int = 3600,
        **kwargs
    ) -> Dict[str, Any]:
        """Make request with caching support."""
        if self.cache_manager:
            cached_result = await self.cache_manager.get(cache_key)
            if cached_result is not None:
                return cached_result

        result = await self._make_request(method, endpoint, **kwargs)

        if self.cache_manager:
            await self.cache_manager.set(cache_key, result, ttl)

        return result
