"""
FastAPI application factory.

This file:
1. Creates the FastAPI app
2. Runs startup logic (connect to Redis)
3. Registers all routers (jobs, health)
4. Runs shutdown logic (close the connection)

To run:  uvicorn api.main:app --host 0.0.0.0 --port 8000 --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from redis.asyncio import Redis as AsyncRedis

from config.settings import settings
from api.routers import health, jobs

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connects to Redis on startup (before yield), closes it on shutdown."""
    app.state.redis = AsyncRedis.from_url(settings.redis_url)
    logger.info(f"API ready, queueing car jobs on {settings.redis_url}")

    yield

    await app.state.redis.close()
    logger.info("API shut down")


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    app = FastAPI(
        title="Car Wash Processor",
        description="Queue car-wash jobs (wash tier + add-ons) for the strategy-dispatching worker",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(jobs.router)

    return app


# This is what uvicorn imports: `uvicorn api.main:app`
app = create_app()
