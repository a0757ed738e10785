"""Tests for the three wash strategies."""

import threading
import time

import pytest

from dispatch.errors import InvalidArgumentError, JobCancelledError
from dispatch.events import RecordingEventSink
from models.enums import ActionKind, WashTier
from models.job import CarJob
from strategies.awesome_wash import AwesomeWash
from strategies.basic_wash import BasicWash
from strategies.to_the_max_wash import ToTheMaxWash


@pytest.mark.parametrize(
    "strategy_cls, tier",
    [
        (BasicWash, WashTier.BASIC),
        (AwesomeWash, WashTier.AWESOME),
        (ToTheMaxWash, WashTier.TO_THE_MAX),
    ],
)
def test_wash_emits_one_completion_event(strategy_cls, tier):
    sink = RecordingEventSink()
    job = CarJob(customer_id=8675309, make="Ford", wash_tier=tier)

    event = strategy_cls(sink, duration=0).perform_wash(job)

    assert strategy_cls.key == tier
    assert sink.events == [event]
    assert event.action_kind == ActionKind.WASH
    assert event.action_key == tier.value
    assert event.customer_id == 8675309
    assert event.message == f"--> {tier.value} wash performed for customer 8675309!"


def test_wash_waits_for_configured_duration():
    sink = RecordingEventSink()
    job = CarJob(customer_id=1, make="Ford", wash_tier="Basic")

    start = time.monotonic()
    BasicWash(sink, duration=0.05).perform_wash(job, threading.Event())
    assert time.monotonic() - start >= 0.04


def test_wash_does_not_mutate_job():
    job = CarJob(customer_id=1, make="Ford", wash_tier="Awesome", addons=["TireShine"])
    before = job.to_dict()
    AwesomeWash(RecordingEventSink(), duration=0).perform_wash(job)
    assert job.to_dict() == before


def test_missing_job():
    sink = RecordingEventSink()
    with pytest.raises(InvalidArgumentError, match="job"):
        BasicWash(sink, duration=0).perform_wash(None)
    assert sink.events == []


def test_wrong_job_type():
    with pytest.raises(InvalidArgumentError, match="CarJob"):
        BasicWash(RecordingEventSink(), duration=0).perform_wash({"customer_id": 1})


def test_missing_sink():
    with pytest.raises(InvalidArgumentError, match="sink"):
        BasicWash(None, duration=0)


def test_negative_duration():
    with pytest.raises(InvalidArgumentError, match="duration"):
        BasicWash(RecordingEventSink(), duration=-1)


def test_default_duration_comes_from_settings(monkeypatch):
    from config.settings import settings

    monkeypatch.setattr(settings, "WASH_DURATION", 0.25)
    assert ToTheMaxWash(RecordingEventSink()).duration == 0.25


def test_cancel_during_wash_aborts_without_event():
    sink = RecordingEventSink()
    job = CarJob(customer_id=1, make="Ford", wash_tier="ToTheMax")
    cancel = threading.Event()
    threading.Timer(0.05, cancel.set).start()

    start = time.monotonic()
    with pytest.raises(JobCancelledError) as exc_info:
        ToTheMaxWash(sink, duration=5).perform_wash(job, cancel)

    assert time.monotonic() - start < 2
    assert exc_info.value.action_name == "ToTheMax wash"
    assert sink.events == []


def test_already_cancelled_wash_never_starts():
    sink = RecordingEventSink()
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(JobCancelledError):
        BasicWash(sink, duration=0).perform_wash(
            CarJob(customer_id=1, make="Ford", wash_tier="Basic"), cancel
        )
    assert sink.events == []
