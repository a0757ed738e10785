"""
FastAPI dependency injection.

An endpoint declares `redis: Redis = Depends(get_redis)` and FastAPI hands
it the client created at startup. Tests swap it for fakeredis through
app.dependency_overrides.
"""

from fastapi import Request
from redis.asyncio import Redis


async def get_redis(request: Request) -> Redis:
    """Returns the Redis client stored on the app during startup."""
    return request.app.state.redis
