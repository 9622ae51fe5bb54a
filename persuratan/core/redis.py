"""Koneksi Redis opsional, dipakai untuk rate limit lintas worker."""

import logging
from typing import Optional

from redis.asyncio import Redis

from persuratan.core.config import settings

logger = logging.getLogger(__name__)

_redis_client: Optional[Redis] = None


async def get_redis() -> Optional[Redis]:
    """Client Redis bersama, atau None kalau REDIS_HOST tidak di-set."""
    global _redis_client

    if not settings.REDIS_HOST:
        return None

    if _redis_client is None:
        _redis_client = Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            password=settings.REDIS_PASSWORD,
            db=settings.REDIS_DB,
            decode_responses=True,
        )
        logger.info(f"Redis client created for {settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB}")

    return _redis_client


async def close_redis() -> None:
    global _redis_client

    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
        logger.info("Redis connection closed")
