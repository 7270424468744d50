"""
GymPass Backend — Middleware Tests
===================================

What we test:
    ✅ Rate limiter answers 429 with Retry-After once the window is full
    ✅ Excluded paths are never limited
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from gympass.middleware.rate_limit import RateLimitMiddleware


def _limited_app(max_requests: int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, max_requests=max_requests, window_seconds=60)

    @app.get("/gyms/search")
    async def search():
        return {"gyms": []}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


class TestRateLimit:

    @pytest.mark.asyncio
    async def test_rejects_after_limit(self):
        transport = ASGITransport(app=_limited_app(max_requests=2))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            assert (await client.get("/gyms/search")).status_code == 200
            assert (await client.get("/gyms/search")).status_code == 200

            response = await client.get("/gyms/search")

        assert response.status_code == 429
        assert int(response.headers["Retry-After"]) >= 1
        assert response.json()["error"] == "rate_limit_exceeded"

    @pytest.mark.asyncio
    async def test_health_is_not_limited(self):
        transport = ASGITransport(app=_limited_app(max_requests=1))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            statuses = [(await client.get("/health")).status_code for _ in range(3)]

        assert statuses == [200, 200, 200]
