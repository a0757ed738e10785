"""
Worker process entry point.

This is a SEPARATE process from the FastAPI intake server.
On startup it:

    1. Builds the wash and add-on resolvers. A duplicate key fails
       HERE, before any job is processed.
    2. Starts a WorkerPool that pops car jobs from the Redis queue
       and runs them through the JobProcessor in a thread pool.

The main thread then waits for Ctrl+C (SIGINT) or a kill signal (SIGTERM)
and shuts down gracefully: in-flight jobs are cancelled, not finished.

To run:
    python -m worker.main
"""

import logging
import signal
import threading

from redis import Redis

from config.settings import settings
from dispatch.events import LoggingEventSink
from strategies.registry import build_addon_resolver, build_wash_resolver
from worker.pool import WorkerPool
from worker.processor import JobProcessor

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_processor() -> JobProcessor:
    """Wire resolvers → processor. Raises DuplicateKeyError on a bad registration table."""
    sink = LoggingEventSink(logging.getLogger("carwash.completions"))
    wash_resolver = build_wash_resolver(sink)
    addon_resolver = build_addon_resolver(sink)

    for resolver in (wash_resolver, addon_resolver):
        missing = resolver.missing_keys()
        if missing:
            logger.warning(
                f"No {resolver.kind} strategy for {[k.value for k in missing]}; "
                f"jobs requesting them will fail with UnknownKeyError"
            )

    return JobProcessor(wash_resolver, addon_resolver)


def main():
    processor = build_processor()
    redis_client = Redis.from_url(settings.redis_url)

    pool = WorkerPool(redis_client, processor)
    pool.start()

    # ── Graceful shutdown on Ctrl+C or SIGTERM ──────────────────
    shutdown_event = threading.Event()

    def shutdown(signum, frame):
        logger.info("Shutdown signal received, stopping...")
        pool.stop()
        shutdown_event.set()

    signal.signal(signal.SIGTERM, shutdown)
    signal.signal(signal.SIGINT, shutdown)

    logger.info("Car wash worker running. Press Ctrl+C to stop.")

    # Event.wait() instead of signal.pause() for Windows compatibility
    shutdown_event.wait()

    logger.info("Worker process exited")


if __name__ == "__main__":
    main()
