"""Redis client for rate limiting and token revocation."""

import logging
import time
from typing import Optional
from uuid import UUID

import redis.asyncio as redis

from ..config import get_settings

logger = logging.getLogger(__name__)

RECONNECT_BACKOFF_SECONDS = 30.0


class RedisClient:
    """Thin async wrapper around redis-py with logging and soft failures."""

    def __init__(self):
        self.settings = get_settings()
        self.redis: Optional[redis.Redis] = None
        # after a failed connect, callers fail fast until this monotonic time
        self._retry_after = 0.0

    async def connect(self) -> None:
        """Connect to Redis."""
        try:
            self.redis = redis.from_url(
                self.settings.redis_url,
                max_connections=self.settings.redis_max_connections,
                decode_responses=True,
            )
            # Test connection
            await self.redis.ping()
            logger.info("Connected to Redis successfully")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            self.redis = None
            self._retry_after = time.monotonic() + RECONNECT_BACKOFF_SECONDS
            raise

    async def ensure_connected(self) -> None:
        """Connect lazily, raising if Redis is not reachable."""
        if self.redis is not None:
            return
        if time.monotonic() < self._retry_after:
            raise ConnectionError("Redis unavailable, waiting before reconnecting")
        await self.connect()

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    async def set(self, key: str, value: str, expire: Optional[int] = None) -> bool:
        """Set value in Redis with optional expiration."""
        if not self.redis:
            return False
        try:
            if expire:
                return bool(await self.redis.setex(key, expire, value))
            return bool(await self.redis.set(key, value))
        except Exception as e:
            logger.error(f"Redis SET error for key {key}: {e}")
            return False

    async def exists(self, key: str) -> bool:
        """Check if key exists in Redis."""
        if not self.redis:
            return False
        try:
            return await self.redis.exists(key) > 0
        except Exception as e:
            logger.error(f"Redis EXISTS error for key {key}: {e}")
            return False

    # Token revocation
    async def add_to_blacklist(self, token_jti: str, expire: int = 900) -> bool:
        """Add token to blacklist (for secure logout)."""
        return await self.set(f"blacklist:{token_jti}", "revoked", expire)

    async def is_token_blacklisted(self, token_jti: str) -> bool:
        """Check if token is blacklisted."""
        return await self.exists(f"blacklist:{token_jti}")

    # Rate limiting
    async def increment_rate_limit(self, tenant_id: UUID, window_seconds: int = 60) -> int:
        """Count one request in the tenant's current fixed window, return the new count."""
        if not self.redis:
            return 0
        key = f"ratelimit:{tenant_id}"
        try:
            count = int(await self.redis.incr(key))
            if count == 1:
                # first hit opens the window
                await self.redis.expire(key, window_seconds)
            return count
        except Exception as e:
            logger.error(f"Rate limit error for key {key}: {e}")
            return 0

    async def ping(self) -> bool:
        if not self.redis:
            return False
        return bool(await self.redis.ping())


# Singleton instance
_redis_client: Optional[RedisClient] = None


def get_redis_client() -> RedisClient:
    """Get Redis client singleton."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client
