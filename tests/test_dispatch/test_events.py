"""Tests for completion events and the two event sinks."""

import logging

from dispatch.events import CompletionEvent, LoggingEventSink, RecordingEventSink
from models.enums import ActionKind


def test_wash_message():
    event = CompletionEvent(ActionKind.WASH, "Basic", 123456)
    assert event.action_name == "Basic wash"
    assert event.message == "--> Basic wash performed for customer 123456!"


def test_addon_message():
    event = CompletionEvent(ActionKind.ADDON, "TireShine", 42)
    assert event.message == "--> TireShine addon performed for customer 42!"


def test_logging_sink_writes_message_and_fields(caplog):
    log = logging.getLogger("test.completions")
    sink = LoggingEventSink(log)

    with caplog.at_level(logging.INFO, logger="test.completions"):
        sink.emit(CompletionEvent(ActionKind.ADDON, "InteriorClean", 8675309))

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.getMessage() == "--> InteriorClean addon performed for customer 8675309!"
    assert record.levelno == logging.INFO
    assert record.action_kind == "addon"
    assert record.action_key == "InteriorClean"
    assert record.customer_id == 8675309


def test_recording_sink_keeps_order_and_filters_by_customer():
    sink = RecordingEventSink()
    sink.emit(CompletionEvent(ActionKind.WASH, "Basic", 1))
    sink.emit(CompletionEvent(ActionKind.WASH, "Awesome", 2))
    sink.emit(CompletionEvent(ActionKind.ADDON, "TireShine", 1))

    assert [e.action_key for e in sink.events] == ["Basic", "Awesome", "TireShine"]
    assert [e.action_key for e in sink.for_customer(1)] == ["Basic", "TireShine"]


def test_recording_sink_events_is_a_copy():
    sink = RecordingEventSink()
    sink.events.append("junk")
    assert sink.events == []
