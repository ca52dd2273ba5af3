"""
Persistence Layer - Document storage backends.

Supports:
- FileBackend: Local JSON files (always written, used as fallback)
- RedisBackend: Native Redis via REDIS_URL
- UpstashRestBackend: Upstash REST endpoint via URL + token
"""

from typing import Optional

from loguru import logger

from ..config import Settings
from .backend import RemoteBackend, RemoteBackendError
from .file_backend import FileBackend
from .redis_backend import RedisBackend
from .upstash_backend import UpstashRestBackend

MODE_FILE = "file"
MODE_REDIS = "redis"
MODE_UPSTASH_REST = "upstash-rest"

_REDIS_SCHEMES = ("redis://", "rediss://")


def select_storage_mode(settings: Settings) -> str:
    """Pick the storage mode from configured credentials.

    Priority: REDIS_URL, then an Upstash URL with a redis scheme (native
    Redis), then an http(s) Upstash REST URL + token.

    Returns:
        One of "file", "redis", "upstash-rest"
    """
    if settings.redis_url:
        return MODE_REDIS

    if settings.upstash_rest_url:
        # A redis:// or rediss:// URL is a native endpoint, token or not
        if settings.upstash_rest_url.startswith(_REDIS_SCHEMES):
            return MODE_REDIS
        if settings.upstash_rest_token:
            return MODE_UPSTASH_REST
        logger.warning("Upstash REST URL set without a token - using file storage")

    return MODE_FILE


def create_remote_backend(
    settings: Settings, mode: Optional[str] = None
) -> Optional[RemoteBackend]:
    """Create the remote backend for the configured mode.

    Args:
        settings: Storage settings
        mode: Already-selected mode (selected from settings if omitted)

    Returns:
        RemoteBackend instance, or None for file-only mode
    """
    mode = mode or select_storage_mode(settings)

    try:
        if mode == MODE_REDIS:
            return RedisBackend(redis_url=settings.redis_url or settings.upstash_rest_url)
        if mode == MODE_UPSTASH_REST:
            return UpstashRestBackend(
                rest_url=settings.upstash_rest_url,
                token=settings.upstash_rest_token,
                timeout=settings.remote_timeout,
            )
    except Exception as e:
        logger.warning(f"Could not create {mode} client, falling back to file storage: {e}")

    return None


__all__ = [
    "MODE_FILE",
    "MODE_REDIS",
    "MODE_UPSTASH_REST",
    "RemoteBackend",
    "RemoteBackendError",
    "FileBackend",
    "RedisBackend",
    "UpstashRestBackend",
    "select_storage_mode",
    "create_remote_backend",
]
