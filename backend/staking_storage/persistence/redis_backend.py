"""
Redis Remote Backend.

Native Redis protocol via redis.asyncio. TLS is enabled by the
``rediss://`` URL scheme.
"""

from typing import Optional

import redis.asyncio as redis
from loguru import logger

from .backend import RemoteBackend


class RedisBackend(RemoteBackend):
    """Redis remote backend."""

    mode = "redis"

    def __init__(self, redis_url: str, client: Optional[redis.Redis] = None):
        """Initialize Redis backend.

        Args:
            redis_url: Redis connection URL
            client: Pre-built client (used by tests)
        """
        self._url = redis_url
        # from_url does not open a connection until the first command
        self._redis = client or redis.from_url(redis_url, decode_responses=True)
        logger.info(f"Redis backend configured ({_redact(redis_url)})")

    async def get(self, key: str) -> Optional[str]:
        value = await self._redis.get(key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        await self._redis.set(key, value)

    async def ping(self) -> bool:
        return bool(await self._redis.ping())

    async def close(self) -> None:
        """Close Redis connection."""
        await self._redis.aclose()


def _redact(url: str) -> str:
    """Strip credentials from a connection URL for logging."""
    scheme, sep, rest = url.partition("://")
    if not sep or "@" not in rest:
        return url
    return f"{scheme}://***@{rest.split('@', 1)[1]}"
