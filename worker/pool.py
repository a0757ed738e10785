"""
Worker pool: manages a thread pool that processes car jobs from Redis.

Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                    WorkerPool                            │
    │                                                         │
    │  Dispatcher Thread                                      │
    │  ┌───────────────────────┐                              │
    │  │ BLPOP from Redis      │  ← blocks until a car job    │
    │  │ (carwash:jobs)        │    arrives, zero polling     │
    │  └──────────┬────────────┘                              │
    │             │ submit(job, cancel_event)                  │
    │             ▼                                            │
    │  ┌──────────────────────────────────────────┐           │
    │  │ ThreadPoolExecutor (4 threads = 4 bays)   │           │
    │  │  ┌────────┐ ┌────────┐ ┌────────┐ ┌────────┐       │
    │  │  │ bay 1  │ │ bay 2  │ │ bay 3  │ │(idle)  │       │
    │  │  │process │ │process │ │process │ │        │       │
    │  │  └────────┘ └────────┘ └────────┘ └────────┘       │
    │  └──────────────────────────────────────────┘           │
    └─────────────────────────────────────────────────────────┘

Different car jobs run in parallel (one per thread). Inside one job the
JobProcessor keeps the wash and add-ons strictly sequential.

Cancellation:
Every submitted job gets its OWN threading.Event. stop() sets all of them,
so in-flight jobs abort their current action instead of finishing the
whole wash. Cancelling one job never touches another job's event.

Malformed payloads are logged and dropped. There is no retry and no
dead-letter queue. A job popped after the pool has shut down is pushed back
onto the head of the queue for the next worker.
"""

import json
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from redis import Redis

from config.settings import settings
from dispatch.errors import InvalidArgumentError
from models.job import CarJob
from worker.processor import JobProcessor, ProcessingResult

logger = logging.getLogger(__name__)


class WorkerPool:

    # Redis key name, shared with api/routers/jobs.py
    REDIS_JOB_QUEUE = "carwash:jobs"

    def __init__(
        self,
        redis_client: Redis,
        processor: JobProcessor,
        pool_size: Optional[int] = None,
    ):
        if redis_client is None:
            raise InvalidArgumentError("redis_client")
        if processor is None:
            raise InvalidArgumentError("processor")
        self._redis = redis_client
        self._processor = processor
        self._pool_size = pool_size or settings.WORKER_POOL_SIZE
        self._executor = ThreadPoolExecutor(
            max_workers=self._pool_size,
            thread_name_prefix="wash-bay",
        )
        self._in_flight: set[threading.Event] = set()
        self._lock = threading.Lock()
        self._running = False
        self._dispatcher: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start the dispatcher thread that feeds car jobs to the thread pool."""
        self._running = True
        self._dispatcher = threading.Thread(
            target=self._dispatch_loop, name="wash-dispatcher", daemon=True
        )
        self._dispatcher.start()
        logger.info(f"Worker pool started with {self._pool_size} threads")

    def stop(self) -> None:
        """
        Stop dispatching, cancel every in-flight job, then shut down the pool.

        The dispatcher is joined first, so no job popped from Redis can be
        submitted after the in-flight snapshot is taken.
        """
        self._running = False
        if self._dispatcher is not None:
            # a BLPOP in progress returns within WORKER_POLL_TIMEOUT
            self._dispatcher.join(timeout=settings.WORKER_POLL_TIMEOUT + 1)
            if self._dispatcher.is_alive():
                logger.warning("Dispatcher thread did not exit before shutdown")
            self._dispatcher = None
        with self._lock:
            in_flight = list(self._in_flight)
        for cancel_event in in_flight:
            cancel_event.set()
        if in_flight:
            logger.info(f"Cancelling {len(in_flight)} in-flight car job(s)")
        self._executor.shutdown(wait=True)
        logger.info("Worker pool stopped")

    def submit(self, job: CarJob) -> Future:
        """
        Hand one car job to the thread pool.

        Returns a Future resolving to the job's ProcessingResult.
        """
        cancel_event = threading.Event()
        with self._lock:
            self._in_flight.add(cancel_event)

        try:
            future: Future = self._executor.submit(
                self._processor.process_job, job, cancel_event
            )
        except RuntimeError:
            # executor already shut down
            with self._lock:
                self._in_flight.discard(cancel_event)
            raise
        future.add_done_callback(
            lambda f, ev=cancel_event: self._on_job_done(f, ev)
        )
        return future

    def dispatch_once(self, timeout: Optional[int] = None) -> Optional[Future]:
        """
        Pop at most one job from the Redis queue and submit it.

        BLPOP returns (key, value) when a job is available, or None on timeout.

        Returns:
            the Future for the submitted job, or None if the queue stayed empty
            or the payload could not be decoded
        """
        result = self._redis.blpop(
            self.REDIS_JOB_QUEUE,
            timeout=settings.WORKER_POLL_TIMEOUT if timeout is None else timeout,
        )
        if result is None:
            return None

        _, raw_data = result
        try:
            job = CarJob.from_dict(json.loads(raw_data))
        except (json.JSONDecodeError, UnicodeDecodeError, InvalidArgumentError) as e:
            logger.error(f"Dropping malformed car job payload: {e}")
            return None

        logger.debug(f"Dispatching {job!r} to thread pool")
        try:
            return self.submit(job)
        except RuntimeError:
            # pool shut down after the pop: put the job back at the head of the queue
            self._redis.lpush(self.REDIS_JOB_QUEUE, raw_data)
            logger.warning(f"Pool is shut down, re-queued {job!r}")
            return None

    def _dispatch_loop(self) -> None:
        """
        Continuously pop jobs from Redis and submit them to the thread pool.

        The BLPOP timeout ensures we check self._running periodically
        so the loop can exit cleanly on shutdown.
        """
        while self._running:
            try:
                self.dispatch_once()
            except Exception as e:
                logger.error(f"Dispatch error: {e}", exc_info=True)

    def _on_job_done(self, future: Future, cancel_event: threading.Event) -> None:
        """
        Callback fired when a worker thread finishes a car job.

        Removes the job's cancel event from the in-flight set and logs the
        outcome. Normal failures arrive as a ProcessingResult; an exception
        here means a bug escaped the processor.
        """
        with self._lock:
            self._in_flight.discard(cancel_event)

        if future.cancelled():
            return
        exc = future.exception()
        if exc:
            logger.error(f"Unhandled worker exception: {exc}", exc_info=exc)
            return

        result: ProcessingResult = future.result()
        if result.ok:
            logger.info(
                f"Car job for customer {result.customer_id} done: "
                f"{', '.join(e.action_name for e in result.events)}"
            )
        elif result.cancelled:
            logger.warning(f"Car job for customer {result.customer_id} cancelled")
        else:
            logger.error(
                f"Car job for customer {result.customer_id} failed at "
                f"{result.failed_phase.value if result.failed_phase else 'start'} "
                f"'{result.failed_key}': {result.error}"
            )

    @property
    def in_flight(self) -> int:
        with self._lock:
            return len(self._in_flight)
