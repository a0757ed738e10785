"""
Completion events: the observable record of every finished action.

Each wash or add-on that completes emits exactly one CompletionEvent to an
EventSink. The message follows one fixed template for both kinds:

    --> Basic wash performed for customer 123456!
    --> TireShine addon performed for customer 123456!

so log-based monitoring can match either with a single pattern.

Two sinks ship here:
- LoggingEventSink   → stdlib logging, with the fields attached as `extra`
- RecordingEventSink → keeps events in memory (tests, demos)
"""

import logging
import threading
from dataclasses import dataclass
from typing import Protocol

from models.enums import ActionKind

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATE = "--> {action_name} performed for customer {customer_id}!"


@dataclass(frozen=True)
class CompletionEvent:
    action_kind: ActionKind
    action_key: str          # enum value, e.g. "Basic" or "TireShine"
    customer_id: int

    @property
    def action_name(self) -> str:
        return f"{self.action_key} {self.action_kind.value}"

    @property
    def message(self) -> str:
        return MESSAGE_TEMPLATE.format(
            action_name=self.action_name, customer_id=self.customer_id
        )


class EventSink(Protocol):
    def emit(self, event: CompletionEvent) -> None:
        ...


class LoggingEventSink:
    """Writes each event at INFO level. Structured fields go into `extra`."""

    def __init__(self, log: logging.Logger | None = None):
        self._logger = log or logger

    def emit(self, event: CompletionEvent) -> None:
        self._logger.info(
            event.message,
            extra={
                "action_kind": event.action_kind.value,
                "action_key": event.action_key,
                "customer_id": event.customer_id,
            },
        )


class RecordingEventSink:
    """
    In-memory sink. Worker threads may emit concurrently, so appends
    go through a lock.
    """

    def __init__(self):
        self._events: list[CompletionEvent] = []
        self._lock = threading.Lock()

    def emit(self, event: CompletionEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[CompletionEvent]:
        with self._lock:
            return list(self._events)

    def for_customer(self, customer_id: int) -> list[CompletionEvent]:
        return [e for e in self.events if e.customer_id == customer_id]
