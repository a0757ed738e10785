"""
Job processor: runs one car job through the wash and add-on phases.

This is the code that decides WHAT happens to a car. Each worker thread
calls processor.process_job(job, cancel_event), and it runs two phases:

    1. Wash phase:   resolve job.wash_tier → perform_wash(job)
    2. Add-on phase: for each DISTINCT add-on, in order of first appearance,
                     resolve the key → perform_addon(job)

Rules:
- Strictly sequential. Wash and add-ons are physical actions on one car;
  nothing overlaps.
- Fail-fast. If the wash fails, no add-on runs. If an add-on fails, the
  remaining add-ons are skipped.
- Duplicate add-on keys run once. ["TireShine", "TireShine"] is one shine.
- No retries. Every error in the dispatch taxonomy ends processing and is
  reported in the ProcessingResult, along with the phase and key that failed.

Thread safety:
- The resolvers are frozen (read-only) before the first job runs
- Strategies are stateless; the job is immutable
So any number of threads can call process_job() simultaneously without locks.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from dispatch.errors import CarWashError, InvalidArgumentError, JobCancelledError
from dispatch.events import CompletionEvent
from dispatch.registry import StrategyResolver
from models.enums import ActionKind
from models.job import CarJob

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingResult:
    """
    Outcome of one process_job() call.

    Either ok (every phase completed, `events` has one entry per action) or
    stopped at the first failure, with `error` holding the exception and
    `failed_phase` / `failed_key` saying where it happened. `events` then
    holds whatever completed before the failure.
    """
    customer_id: Optional[int]
    events: tuple[CompletionEvent, ...] = ()
    error: Optional[CarWashError] = None
    failed_phase: Optional[ActionKind] = None
    failed_key: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def cancelled(self) -> bool:
        return isinstance(self.error, JobCancelledError)

    def raise_for_error(self) -> None:
        """Re-raise the stored error, if any."""
        if self.error is not None:
            raise self.error


class JobProcessor:

    def __init__(self, wash_resolver: StrategyResolver, addon_resolver: StrategyResolver):
        if wash_resolver is None:
            raise InvalidArgumentError("wash_resolver")
        if addon_resolver is None:
            raise InvalidArgumentError("addon_resolver")
        self._wash_resolver = wash_resolver
        self._addon_resolver = addon_resolver

    def process_job(
        self, job: CarJob, cancel_event: Optional[threading.Event] = None
    ) -> ProcessingResult:
        """
        Process a single car job. Called by WorkerPool from a thread.

        Args:
            job: the car job; never mutated
            cancel_event: set it to stop the job; the running action aborts
                          and no later step starts

        Returns:
            ProcessingResult. Dispatch errors are returned, not raised.
        """
        if job is None:
            return ProcessingResult(customer_id=None, error=InvalidArgumentError("job"))
        if not isinstance(job, CarJob):
            return ProcessingResult(
                customer_id=None,
                error=InvalidArgumentError("job", f"must be a CarJob, got {type(job).__name__}"),
            )

        events: list[CompletionEvent] = []

        # ── Phase 1: wash ───────────────────────────────────────
        phase, key = ActionKind.WASH, job.wash_tier.value
        try:
            wash = self._wash_resolver.resolve(job.wash_tier)
            events.append(wash.perform_wash(job, cancel_event))

            # ── Phase 2: add-ons ────────────────────────────────
            phase = ActionKind.ADDON
            addons = job.distinct_addons()
            if len(addons) < len(job.addons):
                logger.info(
                    f"Customer {job.customer_id}: dropped "
                    f"{len(job.addons) - len(addons)} duplicate add-on(s)"
                )
            for addon in addons:
                key = addon.value
                strategy = self._addon_resolver.resolve(addon)
                events.append(strategy.perform_addon(job, cancel_event))

        except CarWashError as e:
            if isinstance(e, JobCancelledError):
                logger.warning(f"Customer {job.customer_id}: {phase.value} '{key}' cancelled")
            else:
                logger.error(f"Customer {job.customer_id}: {phase.value} '{key}' failed: {e}")
            return ProcessingResult(
                customer_id=job.customer_id,
                events=tuple(events),
                error=e,
                failed_phase=phase,
                failed_key=key,
            )

        logger.info(
            f"Customer {job.customer_id} [{job.wash_tier.value}] completed "
            f"{len(events)} action(s)"
        )
        return ProcessingResult(customer_id=job.customer_id, events=tuple(events))
