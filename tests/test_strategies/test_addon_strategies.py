"""Tests for the three add-on strategies."""

import threading

import pytest

from dispatch.errors import InvalidArgumentError, JobCancelledError
from dispatch.events import RecordingEventSink
from models.enums import ActionKind, Addon
from models.job import CarJob
from strategies.hand_wax_and_shine import HandWaxAndShine
from strategies.interior_clean import InteriorClean
from strategies.tire_shine import TireShine


@pytest.fixture
def job():
    return CarJob(customer_id=123456, make="Honda", wash_tier="Basic", addons=["TireShine"])


@pytest.mark.parametrize(
    "strategy_cls, addon",
    [
        (TireShine, Addon.TIRE_SHINE),
        (InteriorClean, Addon.INTERIOR_CLEAN),
        (HandWaxAndShine, Addon.HAND_WAX_AND_SHINE),
    ],
)
def test_addon_emits_one_completion_event(job, strategy_cls, addon):
    sink = RecordingEventSink()

    event = strategy_cls(sink, duration=0).perform_addon(job)

    assert strategy_cls.key == addon
    assert sink.events == [event]
    assert event.action_kind == ActionKind.ADDON
    assert event.action_key == addon.value
    assert event.message == f"--> {addon.value} addon performed for customer 123456!"


def test_addon_runs_even_if_not_listed_on_job(job):
    """The strategy performs what it is asked; choosing add-ons is the processor's job."""
    sink = RecordingEventSink()
    HandWaxAndShine(sink, duration=0).perform_addon(job)
    assert len(sink.events) == 1


def test_missing_job():
    with pytest.raises(InvalidArgumentError):
        InteriorClean(RecordingEventSink(), duration=0).perform_addon(None)


def test_cancel_during_addon(job):
    sink = RecordingEventSink()
    cancel = threading.Event()
    threading.Timer(0.05, cancel.set).start()

    with pytest.raises(JobCancelledError, match="HandWaxAndShine addon cancelled for customer 123456"):
        HandWaxAndShine(sink, duration=5).perform_addon(job, cancel)
    assert sink.events == []


def test_default_duration_comes_from_settings(monkeypatch):
    from config.settings import settings

    monkeypatch.setattr(settings, "ADDON_DURATION", 0.5)
    assert TireShine(RecordingEventSink()).duration == 0.5
