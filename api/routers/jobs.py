"""
Car job intake endpoints.

POST /jobs/          → Queue a car job for the worker
GET  /jobs/queue     → How many jobs are waiting
GET  /jobs/catalog   → Wash tiers and add-ons with a registered strategy

The API layer is intentionally thin:
- Validate input (Pydantic does this automatically)
- Push the job onto the Redis queue
- Return the response

It does NOT wash cars; the worker does. Separation of concerns.
"""

import json

from fastapi import APIRouter, Depends
from redis.asyncio import Redis

from api.dependencies import get_redis
from api.schemas.job import CarJobCreate, JobQueuedResponse, QueueStatus, ServiceCatalog
from strategies.registry import ADDON_STRATEGIES, WASH_STRATEGIES
from worker.pool import WorkerPool

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/", response_model=JobQueuedResponse, status_code=202)
async def submit_job(
    job_in: CarJobCreate,
    redis: Redis = Depends(get_redis),
) -> JobQueuedResponse:
    """
    Queue a car job.

    The job is serialized with CarJob.to_dict() and RPUSHed onto the queue
    the WorkerPool BLPOPs from. 202 because nothing has been washed yet.
    """
    job = job_in.to_car_job()
    queue_length = await redis.rpush(WorkerPool.REDIS_JOB_QUEUE, json.dumps(job.to_dict()))
    return JobQueuedResponse(
        customer_id=job.customer_id,
        wash_tier=job.wash_tier,
        addons=list(job.addons),
        queue_length=queue_length,
    )


@router.get("/queue", response_model=QueueStatus)
async def get_queue_status(redis: Redis = Depends(get_redis)) -> QueueStatus:
    """Number of car jobs waiting for a free wash bay."""
    return QueueStatus(pending=await redis.llen(WorkerPool.REDIS_JOB_QUEUE))


@router.get("/catalog", response_model=ServiceCatalog)
async def get_catalog() -> ServiceCatalog:
    """Services the worker has strategies for, read from the registration tables."""
    return ServiceCatalog(
        wash_tiers=[cls.key for cls in WASH_STRATEGIES],
        addons=[cls.key for cls in ADDON_STRATEGIES],
    )
