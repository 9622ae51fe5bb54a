"""Rate limiting untuk endpoint login per IP (Redis kalau tersedia, selain itu in-memory)."""

import logging
import time
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from fastapi import Request, status
from redis.asyncio import Redis
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from persuratan.core.config import settings
from persuratan.core.redis import get_redis

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Terlalu banyak percobaan login. Silakan coba lagi nanti."


@dataclass
class RateLimitRecord:
    count: int
    reset_time: float


class RateLimiter:
    """Fixed window counter: maksimal ``calls`` request per ``period`` detik."""

    MAX_ENTRIES = 10000

    def __init__(self, calls: int, period: int, clock=time.monotonic):
        self.calls = calls
        self.period = period
        self._clock = clock
        self._store: Dict[str, RateLimitRecord] = {}

    def _cleanup(self, now: float) -> None:
        if len(self._store) <= self.MAX_ENTRIES:
            return
        for key in [k for k, v in self._store.items() if v.reset_time < now]:
            del self._store[key]

    async def hit(self, identifier: str) -> Optional[int]:
        """Catat satu request. Return None kalau diizinkan, selain itu retry-after (detik)."""
        now = self._clock()
        self._cleanup(now)

        record = self._store.get(identifier)
        if record is None or record.reset_time < now:
            self._store[identifier] = RateLimitRecord(count=1, reset_time=now + self.period)
            return None

        if record.count >= self.calls:
            return max(1, int(record.reset_time - now + 0.999))

        record.count += 1
        return None

    async def reset(self, identifier: str) -> None:
        self._store.pop(identifier, None)


class RedisRateLimiter:
    """Fixed window yang sama, counter disimpan di Redis supaya dibagi antar worker."""

    def __init__(self, redis: Redis, calls: int, period: int, prefix: str = "rate_limit:auth"):
        self.redis = redis
        self.calls = calls
        self.period = period
        self.prefix = prefix

    def _key(self, identifier: str) -> str:
        return f"{self.prefix}:{identifier}"

    async def hit(self, identifier: str) -> Optional[int]:
        key = self._key(identifier)
        try:
            count = await self.redis.incr(key)
            if count == 1:
                await self.redis.expire(key, self.period)
            if count <= self.calls:
                return None
            ttl = await self.redis.ttl(key)
        except RedisError as e:
            # Redis mati: request tetap dilayani
            logger.error(f"Redis error in rate limiting: {e}")
            return None
        return ttl if ttl and ttl > 0 else self.period

    async def reset(self, identifier: str) -> None:
        try:
            await self.redis.delete(self._key(identifier))
        except RedisError as e:
            logger.error(f"Redis error resetting rate limit: {e}")


def get_client_ip(request: Request) -> str:
    """Get client IP address from request."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"


class AuthRateLimitingMiddleware(BaseHTTPMiddleware):
    """Batasi percobaan login per IP. Login sukses me-reset counter."""

    def __init__(self, app, calls: int = 5, period: int = 900, paths: Iterable[str] = (), limiter=None):
        super().__init__(app)
        self.calls = calls
        self.period = period
        self.limiter = limiter
        self.paths = set(paths)

    async def _get_limiter(self):
        if self.limiter is None:
            redis = await get_redis()
            if redis is not None:
                self.limiter = RedisRateLimiter(redis, self.calls, self.period)
            else:
                self.limiter = RateLimiter(self.calls, self.period)
            logger.info(f"Auth rate limiter backend: {type(self.limiter).__name__}")
        return self.limiter

    async def dispatch(self, request: Request, call_next):
        if request.method != "POST" or request.url.path not in self.paths:
            return await call_next(request)

        client_ip = get_client_ip(request)
        limiter = await self._get_limiter()
        retry_after = await limiter.hit(client_ip)
        if retry_after is not None:
            logger.warning(f"Auth rate limit exceeded for IP {client_ip}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": RATE_LIMIT_MESSAGE},
                headers={"Retry-After": str(retry_after)},
            )

        response = await call_next(request)
        if response.status_code == status.HTTP_200_OK:
            await limiter.reset(client_ip)
        return response


def add_rate_limiting(app):
    """Add login rate limiting middleware to the application."""
    if not settings.RATE_LIMIT_ENABLED:
        logger.info("Rate limiting disabled")
        return

    app.add_middleware(
        AuthRateLimitingMiddleware,
        calls=settings.AUTH_RATE_LIMIT_CALLS,
        period=settings.AUTH_RATE_LIMIT_PERIOD,
        paths=[f"{settings.API_PREFIX}/auth/login"],
    )
