"""
Shared test fixtures.

These replace real infrastructure with lightweight in-memory alternatives:
- Log sink → RecordingEventSink (completion events as a plain list)
- Redis → fakeredis (pure Python Redis mock)
- HTTP server → httpx.AsyncClient with ASGI transport (no network)
- Wash/add-on durations → 0 seconds

This means tests:
- Run without Docker
- Run in milliseconds (no network, no real waiting)
- Are fully isolated (each test gets fresh resolvers and a fresh Redis)
"""

import fakeredis
import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import AsyncClient, ASGITransport

from api.main import create_app
from api.dependencies import get_redis
from dispatch.events import RecordingEventSink
from models.job import CarJob
from strategies.registry import build_addon_resolver, build_wash_resolver
from worker.processor import JobProcessor


@pytest.fixture
def sink():
    return RecordingEventSink()


@pytest.fixture
def wash_resolver(sink):
    return build_wash_resolver(sink, duration=0)


@pytest.fixture
def addon_resolver(sink):
    return build_addon_resolver(sink, duration=0)


@pytest.fixture
def processor(wash_resolver, addon_resolver):
    return JobProcessor(wash_resolver, addon_resolver)


@pytest.fixture
def basic_job():
    return CarJob(customer_id=123456, make="Toyota", wash_tier="Basic", addons=("TireShine",))


@pytest.fixture
def redis_client():
    """Sync fake Redis for the worker pool."""
    r = fakeredis.FakeRedis()
    yield r
    r.flushall()


@pytest_asyncio.fixture
async def fake_redis():
    """Async fake Redis for the API."""
    r = FakeRedis()
    yield r
    await r.flushall()


@pytest_asyncio.fixture
async def client(fake_redis):
    """
    Test HTTP client that talks directly to the FastAPI app.

    dependency_overrides swaps the real get_redis for fakeredis.
    ASGITransport skips the lifespan, so no real Redis connection is made.
    """
    app = create_app()

    async def override_get_redis():
        return fake_redis

    app.dependency_overrides[get_redis] = override_get_redis

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
