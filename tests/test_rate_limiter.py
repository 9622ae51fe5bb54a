"""
Test rate limiter login (fixed window, in-memory dan Redis)
"""


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestRateLimiter:
    """Test RateLimiter.hit / reset"""

    async def test_allows_until_limit(self):
        from persuratan.middleware.rate_limiting import RateLimiter

        limiter = RateLimiter(calls=3, period=60, clock=FakeClock())

        assert [await limiter.hit("1.2.3.4") for _ in range(3)] == [None, None, None]
        assert await limiter.hit("1.2.3.4") == 60

    async def test_limit_is_per_identifier(self):
        from persuratan.middleware.rate_limiting import RateLimiter

        limiter = RateLimiter(calls=1, period=60, clock=FakeClock())

        assert await limiter.hit("10.0.0.1") is None
        assert await limiter.hit("10.0.0.2") is None
        assert await limiter.hit("10.0.0.1") is not None

    async def test_window_expires(self):
        from persuratan.middleware.rate_limiting import RateLimiter

        clock = FakeClock()
        limiter = RateLimiter(calls=1, period=60, clock=clock)
        await limiter.hit("ip")
        assert await limiter.hit("ip") is not None

        clock.now += 61

        assert await limiter.hit("ip") is None

    async def test_retry_after_counts_down(self):
        from persuratan.middleware.rate_limiting import RateLimiter

        clock = FakeClock()
        limiter = RateLimiter(calls=1, period=900, clock=clock)
        await limiter.hit("ip")

        clock.now += 300

        assert await limiter.hit("ip") == 600

    async def test_reset_clears_counter(self):
        from persuratan.middleware.rate_limiting import RateLimiter

        limiter = RateLimiter(calls=1, period=60, clock=FakeClock())
        await limiter.hit("ip")
        await limiter.reset("ip")

        assert await limiter.hit("ip") is None


class FakeRedis:
    """Pengganti redis.asyncio.Redis untuk perintah yang dipakai limiter."""

    def __init__(self):
        self.values = {}
        self.ttls = {}

    async def incr(self, key):
        self.values[key] = self.values.get(key, 0) + 1
        return self.values[key]

    async def expire(self, key, seconds):
        self.ttls[key] = seconds
        return True

    async def ttl(self, key):
        return self.ttls.get(key, -1)

    async def delete(self, key):
        self.values.pop(key, None)
        self.ttls.pop(key, None)
        return 1


class BrokenRedis:
    async def incr(self, key):
        from redis.exceptions import ConnectionError

        raise ConnectionError("Connection refused")

    async def delete(self, key):
        from redis.exceptions import ConnectionError

        raise ConnectionError("Connection refused")


class TestRedisRateLimiter:
    """Test RedisRateLimiter dengan counter bersama"""

    async def test_allows_until_limit(self):
        from persuratan.middleware.rate_limiting import RedisRateLimiter

        redis = FakeRedis()
        limiter = RedisRateLimiter(redis, calls=2, period=900)

        assert await limiter.hit("1.2.3.4") is None
        assert await limiter.hit("1.2.3.4") is None
        assert await limiter.hit("1.2.3.4") == 900
        assert redis.ttls == {"rate_limit:auth:1.2.3.4": 900}

    async def test_counter_shared_between_limiters(self):
        """Dua worker memakai Redis yang sama."""
        from persuratan.middleware.rate_limiting import RedisRateLimiter

        redis = FakeRedis()
        worker_a = RedisRateLimiter(redis, calls=1, period=60)
        worker_b = RedisRateLimiter(redis, calls=1, period=60)

        assert await worker_a.hit("ip") is None
        assert await worker_b.hit("ip") == 60

    async def test_reset_deletes_key(self):
        from persuratan.middleware.rate_limiting import RedisRateLimiter

        redis = FakeRedis()
        limiter = RedisRateLimiter(redis, calls=1, period=60)
        await limiter.hit("ip")
        await limiter.reset("ip")

        assert redis.values == {}
        assert await limiter.hit("ip") is None

    async def test_redis_error_allows_request(self):
        from persuratan.middleware.rate_limiting import RedisRateLimiter

        limiter = RedisRateLimiter(BrokenRedis(), calls=1, period=60)

        assert await limiter.hit("ip") is None
        assert await limiter.hit("ip") is None
        await limiter.reset("ip")

    async def test_get_redis_without_host(self):
        from persuratan.core.redis import get_redis

        assert await get_redis() is None


class TestRateLimitMiddleware:
    """Test middleware pada endpoint login"""

    def test_login_blocked_after_limit(self):
        from fastapi import FastAPI
        from fastapi.testclient import TestClient
        from persuratan.middleware.rate_limiting import AuthRateLimitingMiddleware, RATE_LIMIT_MESSAGE

        app = FastAPI()

        @app.post("/api/auth/login")
        async def fake_login():
            from fastapi.responses import JSONResponse
            return JSONResponse(status_code=401, content={"error": "Email atau password salah"})

        app.add_middleware(AuthRateLimitingMiddleware, calls=2, period=900, paths=["/api/auth/login"])

        with TestClient(app) as client:
            assert client.post("/api/auth/login").status_code == 401
            assert client.post("/api/auth/login").status_code == 401
            blocked = client.post("/api/auth/login")

        assert blocked.status_code == 429
        assert blocked.json() == {"error": RATE_LIMIT_MESSAGE}
        assert int(blocked.headers["Retry-After"]) > 0

    def test_successful_login_resets_counter(self):
        from fastapi import FastAPI
        from fastapi.testclient import TestClient
        from persuratan.middleware.rate_limiting import AuthRateLimitingMiddleware

        app = FastAPI()

        @app.post("/api/auth/login")
        async def fake_login():
            return {"ok": True}

        app.add_middleware(AuthRateLimitingMiddleware, calls=1, period=900, paths=["/api/auth/login"])

        with TestClient(app) as client:
            responses = [client.post("/api/auth/login").status_code for _ in range(3)]

        assert responses == [200, 200, 200]

    def test_other_paths_not_limited(self):
        from fastapi import FastAPI
        from fastapi.testclient import TestClient
        from persuratan.middleware.rate_limiting import AuthRateLimitingMiddleware

        app = FastAPI()

        @app.post("/api/surat-masuk")
        async def fake_create():
            return {"ok": True}

        app.add_middleware(AuthRateLimitingMiddleware, calls=1, period=900, paths=["/api/auth/login"])

        with TestClient(app) as client:
            responses = [client.post("/api/surat-masuk").status_code for _ in range(3)]

        assert responses == [200, 200, 200]

    def test_middleware_uses_given_limiter(self):
        from fastapi import FastAPI
        from fastapi.testclient import TestClient
        from persuratan.middleware.rate_limiting import AuthRateLimitingMiddleware, RedisRateLimiter

        app = FastAPI()

        @app.post("/api/auth/login")
        async def fake_login():
            from fastapi.responses import JSONResponse
            return JSONResponse(status_code=401, content={"error": "Email atau password salah"})

        redis = FakeRedis()
        app.add_middleware(
            AuthRateLimitingMiddleware,
            paths=["/api/auth/login"],
            limiter=RedisRateLimiter(redis, calls=1, period=900),
        )

        with TestClient(app) as client:
            first = client.post("/api/auth/login")
            blocked = client.post("/api/auth/login")

        assert first.status_code == 401
        assert blocked.status_code == 429
        assert blocked.headers["Retry-After"] == "900"
        assert redis.values == {"rate_limit:auth:testclient": 2}
