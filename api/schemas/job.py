"""
Pydantic schemas for the /jobs endpoints.

These define the HTTP API contract, not the domain object:
- CarJobCreate: what a client sends to queue a car job (request body)
- JobQueuedResponse: acknowledgement once the job is on the Redis queue
- QueueStatus: how many jobs are waiting
- ServiceCatalog: wash tiers and add-ons the worker can perform

FastAPI validates incoming data against these automatically.
If someone sends wash_tier="Deluxe", FastAPI returns a 422 before our code runs.
"""

from pydantic import BaseModel, Field

from models.enums import Addon, CarMake, WashTier
from models.job import CarJob


class CarJobCreate(BaseModel):
    """Request body for POST /jobs/."""

    customer_id: int = Field(
        ...,  # ... means required, no default
        gt=0,
        examples=[123456],
    )
    make: CarMake
    wash_tier: WashTier  # must be one of: Basic, Awesome, ToTheMax
    addons: list[Addon] = Field(
        default_factory=list,
        description="Duplicates are accepted; each add-on is performed at most once",
        examples=[["TireShine", "InteriorClean"]],
    )

    def to_car_job(self) -> CarJob:
        return CarJob(
            customer_id=self.customer_id,
            make=self.make,
            wash_tier=self.wash_tier,
            addons=tuple(self.addons),
        )


class JobQueuedResponse(BaseModel):
    """Response body for POST /jobs/."""

    customer_id: int
    wash_tier: WashTier
    addons: list[Addon]
    queue_length: int  # jobs waiting, including this one


class QueueStatus(BaseModel):
    pending: int


class ServiceCatalog(BaseModel):
    wash_tiers: list[WashTier]
    addons: list[Addon]
