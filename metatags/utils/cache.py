"""
Cache Utility Module

Redis access used to drop the cached tag output of a page once its tags
have been rewritten.
"""

import hashlib
import logging
import time

import redis.asyncio as redis

from metatags.config import settings
from metatags.constants import CACHE_PREFIX, CACHE_URI
from metatags.utils.metrics import REDIS_CONNECTED

logger = logging.getLogger(__name__)


def page_cache_key(uri: str) -> str:
    """Cache key of the tag output rendered for a clean URI."""
    digest = hashlib.md5(f"{CACHE_URI}{uri}".encode("utf-8")).hexdigest()  # nosec S324
    return f"{CACHE_PREFIX}{digest}"


class CacheManager:
    """
    Manages the Redis connection for page cache invalidation.

    A failed connection disables the manager; it retries after a cooldown.
    """

    RETRY_COOLDOWN = 30  # seconds

    def __init__(self):
        """Initialize Redis connection pool"""
        self._redis: redis.Redis | None = None
        self._pool: redis.ConnectionPool | None = None
        self._enabled = True
        self._last_connect_attempt: float = 0

    async def connect(self) -> None:
        """Establish connection to Redis from redis_url or individual params."""
        if self._redis is not None:
            return

        self._last_connect_attempt = time.time()

        try:
            if settings.redis_url:
                self._pool = redis.ConnectionPool.from_url(
                    settings.redis_url,
                    decode_responses=True,
                )
            else:
                self._pool = redis.ConnectionPool(
                    host=settings.redis_host,
                    port=settings.redis_port,
                    db=settings.redis_db,
                    password=settings.redis_password,
                    decode_responses=True,
                )

            self._redis = redis.Redis(connection_pool=self._pool)
            await self._redis.ping()
            REDIS_CONNECTED.set(1)
            logger.info("Cache: Successfully connected to Redis")
        except Exception as e:
            REDIS_CONNECTED.set(0)
            logger.warning(f"Cache: Failed to connect to Redis: {e}. Cache invalidation disabled.")
            self._redis = None
            self._enabled = False

    async def disconnect(self) -> None:
        """Close Redis connection"""
        if self._redis:
            await self._redis.aclose()
            self._redis = None
        if self._pool:
            await self._pool.aclose()
            self._pool = None
        REDIS_CONNECTED.set(0)
        logger.info("Cache: Disconnected from Redis")

    async def _maybe_retry_connect(self) -> None:
        """Re-attempt connection after the cooldown."""
        if not self._enabled and time.time() - self._last_connect_attempt >= self.RETRY_COOLDOWN:
            logger.info("Cache: retrying Redis connection after cooldown...")
            self._enabled = True
            await self.connect()

    async def delete(self, key: str) -> bool:
        """
        Delete a cached value.

        Args:
            key: Cache key

        Returns:
            True if deleted, False otherwise
        """
        await self._maybe_retry_connect()
        if not self._enabled or not self._redis:
            return False

        try:
            await self._redis.delete(key)
            logger.debug(f"Cache DELETE: {key}")
            return True
        except Exception as e:
            logger.warning(f"Cache delete error for {key}: {e}")
            return False

    async def invalidate_uri(self, uri: str) -> bool:
        """Drop the cached tag output of a page."""
        return await self.delete(page_cache_key(uri))


# Global cache manager instance
cache_manager = CacheManager()
