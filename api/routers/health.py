"""
Health check endpoint.

Checks Redis connectivity: without Redis no job can reach the worker.
Load balancers and container orchestrators use this to decide if the
service is ready to receive traffic.
"""

from fastapi import APIRouter, Depends
from redis.asyncio import Redis

from api.dependencies import get_redis

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(redis: Redis = Depends(get_redis)) -> dict:
    """Check that Redis is reachable."""
    await redis.ping()
    return {"status": "healthy", "redis": "ok"}
