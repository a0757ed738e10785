"""
Abstract base classes for wash and add-on strategies.

The processor calls strategy.perform_wash(job) or strategy.perform_addon(job)
without knowing which tier or add-on it is: it looks the strategy up in a
StrategyResolver by the job's key.

Strategy pattern, same shape for both kinds:
- AbstractWashStrategy / AbstractAddonStrategy = interfaces
- BasicWash, TireShine, ... = implementations, one per enum member
- strategies/registry.py = registration table

To add a new wash tier:
1. Add the member to WashTier in models/enums.py
2. Create a class that inherits AbstractWashStrategy and sets `key`
3. Add it to WASH_STRATEGIES in strategies/registry.py

Every action is the same simulated unit of work: wait for a fixed duration
(cancellable), then emit one CompletionEvent. Strategies are stateless
apart from their injected sink, so one instance serves every worker thread.
"""

import threading
import time
from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from config.settings import settings
from dispatch.errors import InvalidArgumentError, JobCancelledError
from dispatch.events import CompletionEvent, EventSink
from models.enums import ActionKind, Addon, WashTier
from models.job import CarJob


class CarWashStrategy(ABC):

    action_kind: ClassVar[ActionKind]

    def __init__(self, sink: EventSink, duration: float):
        if sink is None:
            raise InvalidArgumentError("sink")
        if duration is None or duration < 0:
            raise InvalidArgumentError("duration", "must be a non-negative number of seconds")
        self._sink = sink
        self._duration = duration

    @property
    @abstractmethod
    def key(self):
        """The WashTier / Addon member this strategy owns."""
        ...

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def action_name(self) -> str:
        return f"{self.key.value} {self.action_kind.value}"

    def _perform(self, job: CarJob, cancel_event: Optional[threading.Event]) -> CompletionEvent:
        if job is None:
            raise InvalidArgumentError("job")
        if not isinstance(job, CarJob):
            raise InvalidArgumentError("job", f"must be a CarJob, got {type(job).__name__}")

        self._simulate_work(job, cancel_event)

        event = CompletionEvent(
            action_kind=self.action_kind,
            action_key=self.key.value,
            customer_id=job.customer_id,
        )
        self._sink.emit(event)
        return event

    def _simulate_work(self, job: CarJob, cancel_event: Optional[threading.Event]) -> None:
        """
        Stand-in for the physical work. Event.wait() returns True as soon as
        the event is set, so cancellation interrupts the wait immediately.
        """
        if cancel_event is None:
            time.sleep(self._duration)
            return
        if cancel_event.is_set() or cancel_event.wait(self._duration):
            raise JobCancelledError(self.action_name, job.customer_id)


class AbstractWashStrategy(CarWashStrategy):

    action_kind = ActionKind.WASH
    key: ClassVar[WashTier]

    def __init__(self, sink: EventSink, duration: Optional[float] = None):
        super().__init__(sink, settings.WASH_DURATION if duration is None else duration)

    def perform_wash(
        self, job: CarJob, cancel_event: Optional[threading.Event] = None
    ) -> CompletionEvent:
        """
        Wash the car described by job.

        Returns:
            the CompletionEvent that was emitted to the sink

        Raises:
            InvalidArgumentError: job is absent or not a CarJob
            JobCancelledError: cancel_event was set before or during the wash
        """
        return self._perform(job, cancel_event)


class AbstractAddonStrategy(CarWashStrategy):

    action_kind = ActionKind.ADDON
    key: ClassVar[Addon]

    def __init__(self, sink: EventSink, duration: Optional[float] = None):
        super().__init__(sink, settings.ADDON_DURATION if duration is None else duration)

    def perform_addon(
        self, job: CarJob, cancel_event: Optional[threading.Event] = None
    ) -> CompletionEvent:
        """Apply this add-on to job. Same contract as perform_wash."""
        return self._perform(job, cancel_event)
