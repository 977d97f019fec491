"""
Cache for catalog search responses.
Redis-backed when REDIS_URL is configured, otherwise an in-process dict with
per-entry expiry. Redis errors are logged and the in-process cache is used.
"""

import json
import logging
from typing import Any, Optional, Dict, Tuple
from datetime import datetime, timedelta
import redis.asyncio as redis

logger = logging.getLogger(__name__)

class CacheManager:
    """Cache manager with Redis backend and in-memory fallback."""

    def __init__(self, redis_url: Optional[str] = None, max_memory_items: int = 1000):
        self.redis_url = redis_url
        self.redis: Optional[redis.Redis] = None
        self.memory_cache: Dict[str, Tuple[Any, datetime]] = {}
        self.max_memory_items = max_memory_items

    async def connect(self):
        """Connect to Redis if a URL is configured."""
        if not self.redis_url:
            return
        try:
            self.redis = redis.from_url(self.redis_url)
            await self.redis.ping()
            logger.info("Connected to Redis search cache")
        except redis.RedisError as e:
            logger.warning(f"Failed to connect to Redis: {e}, using memory cache")
            self.redis = None

    async def close(self):
        """Close the Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    async def get(self, key: str) -> Optional[Any]:
        """Get a cached value, or None when absent or expired."""
        if self.redis:
            try:
                value = await self.redis.get(key)
                if value is not None:
                    return json.loads(value)
            except redis.RedisError as e:
                logger.warning(f"Redis get error: {e}")

        entry = self.memory_cache.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if datetime.now() >= expires_at:
            del self.memory_cache[key]
            return None
        return value

    async def set(self, key: str, value: Any, ttl: int = 3600):
        """Store a JSON-serializable value for ttl seconds."""
        if self.redis:
            try:
                await self.redis.setex(key, ttl, json.dumps(value))
                return
            except redis.RedisError as e:
                logger.warning(f"Redis set error: {e}")

        self.memory_cache[key] = (value, datetime.now() + timedelta(seconds=ttl))
        if len(self.memory_cache) > self.max_memory_items:
            self._evict()

    def _evict(self):
        """Drop expired entries, then the oldest ones, until under the limit."""
        now = datetime.now()
        for key in [k for k, (_, expires_at) in self.memory_cache.items() if now >= expires_at]:
            del self.memory_cache[key]

        overflow = len(self.memory_cache) - self.max_memory_items
        for key in list(self.memory_cache)[:max(overflow, 0)]:
            del self.memory_cache[key]

    @staticmethod
    def get_cache_key(prefix: str, *args) -> str:
        """Generate cache key from prefix and arguments."""
        parts = [prefix] + [str(arg).strip().lower() for arg in args]
        return ":".join(parts)
