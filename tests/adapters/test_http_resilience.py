from __future__ import annotations

import asyncio

import httpx
from aiolimiter import AsyncLimiter

from toolsync.adapters.http_resilience import RateLimit, ResilienceConfig, ResilientClient
from toolsync.config.producthunt import default_resilience
from tests.helpers.http import make_client_factory


def test_client_without_rate_limit_has_no_limiter() -> None:
    client = ResilientClient(default_resilience())

    assert client._limiter is None
    asyncio.run(client.aclose())


def test_client_builds_limiter_from_rate_limit() -> None:
    config = ResilienceConfig(name="test", ratelimit=RateLimit(max_calls=5, per_seconds=10.0))

    client = ResilientClient(config)

    assert isinstance(client._limiter, AsyncLimiter)
    assert client._limiter.max_rate == 5
    assert client._limiter.time_period == 10.0
    asyncio.run(client.aclose())


def test_rate_limited_requests_still_reach_the_transport() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.method)
        return httpx.Response(200, json={"ok": True})

    config = default_resilience(
        api_url="https://ph.test/graphql",
        ratelimit=RateLimit(max_calls=2, per_seconds=60.0),
    )
    factory = make_client_factory(handler)

    async def exercise() -> list[int]:
        async with factory(config) as client:
            first = await client.post("https://ph.test/graphql", json={})
            second = await client.post("https://ph.test/graphql", json={})
        return [first.status_code, second.status_code]

    assert asyncio.run(exercise()) == [200, 200]
    assert seen == ["POST", "POST"]
