import pytest

from deploystate.errors import InvalidEventType
from deploystate.events import (
    StartFailureEvent,
    StartFinishedEvent,
    StartStartedEvent,
    StartSuccessEvent,
    StopFailureEvent,
    StopFinishedEvent,
    StopStartedEvent,
    StopSuccessEvent,
    new_start_failure_event_binding,
    new_start_finished_event_binding,
    new_start_started_event_binding,
    new_start_success_event_binding,
    new_stop_failure_event_binding,
    new_stop_finished_event_binding,
    new_stop_started_event_binding,
    new_stop_success_event_binding,
)


class Event:
    """A generic event that no binding accepts."""

    type = ""
    data = None


def test_start_started_binding():
    assert new_start_started_event_binding(None).accepts(StartStartedEvent()) is True
    assert new_start_started_event_binding(None).accepts(Event()) is False
    received = []
    binding = new_start_started_event_binding(received.append)
    event = StartStartedEvent()
    binding.emit(event)
    assert received == [event]
    with pytest.raises(InvalidEventType, match="invalid event type"):
        binding.emit(Event())
    assert received == [event]


def test_start_success_binding():
    assert new_start_success_event_binding(None).accepts(StartSuccessEvent()) is True
    assert new_start_success_event_binding(None).accepts(Event()) is False
    received = []
    binding = new_start_success_event_binding(received.append)
    event = StartSuccessEvent()
    binding.emit(event)
    assert received == [event]
    with pytest.raises(InvalidEventType, match="invalid event type"):
        binding.emit(Event())
    assert received == [event]


def test_start_failure_binding():
    assert new_start_failure_event_binding(None).accepts(StartFailureEvent()) is True
    assert new_start_failure_event_binding(None).accepts(Event()) is False
    received = []
    binding = new_start_failure_event_binding(received.append)
    event = StartFailureEvent()
    binding.emit(event)
    assert received == [event]
    with pytest.raises(InvalidEventType, match="invalid event type"):
        binding.emit(Event())
    assert received == [event]


def test_start_finished_binding():
    assert new_start_finished_event_binding(None).accepts(StartFinishedEvent()) is True
    assert new_start_finished_event_binding(None).accepts(Event()) is False
    received = []
    binding = new_start_finished_event_binding(received.append)
    event = StartFinishedEvent()
    binding.emit(event)
    assert received == [event]
    with pytest.raises(InvalidEventType, match="invalid event type"):
        binding.emit(Event())
    assert received == [event]


def test_stop_started_binding():
    assert new_stop_started_event_binding(None).accepts(StopStartedEvent()) is True
    assert new_stop_started_event_binding(None).accepts(Event()) is False
    received = []
    binding = new_stop_started_event_binding(received.append)
    event = StopStartedEvent()
    binding.emit(event)
    assert received == [event]
    with pytest.raises(InvalidEventType, match="invalid event type"):
        binding.emit(Event())
    assert received == [event]


def test_stop_success_binding():
    assert new_stop_success_event_binding(None).accepts(StopSuccessEvent()) is True
    assert new_stop_success_event_binding(None).accepts(Event()) is False
    received = []
    binding = new_stop_success_event_binding(received.append)
    event = StopSuccessEvent()
    binding.emit(event)
    assert received == [event]
    with pytest.raises(InvalidEventType, match="invalid event type"):
        binding.emit(Event())
    assert received == [event]


def test_stop_failure_binding():
    assert new_stop_failure_event_binding(None).accepts(StopFailureEvent()) is True
    assert new_stop_failure_event_binding(None).accepts(Event()) is False
    received = []
    binding = new_stop_failure_event_binding(received.append)
    event = StopFailureEvent()
    binding.emit(event)
    assert received == [event]
    with pytest.raises(InvalidEventType, match="invalid event type"):
        binding.emit(Event())
    assert received == [event]


def test_stop_finished_binding():
    assert new_stop_finished_event_binding(None).accepts(StopFinishedEvent()) is True
    assert new_stop_finished_event_binding(None).accepts(Event()) is False
    received = []
    binding = new_stop_finished_event_binding(received.append)
    event = StopFinishedEvent()
    binding.emit(event)
    assert received == [event]
    with pytest.raises(InvalidEventType, match="invalid event type"):
        binding.emit(Event())
    assert received == [event]


def test_start_binding_rejects_stop_event():
    binding = new_start_started_event_binding(lambda event: None)
    assert binding.accepts(StopStartedEvent()) is False
    with pytest.raises(InvalidEventType):
        binding.emit(StopStartedEvent())


def test_handler_error_propagates():
    def handler(event):
        raise RuntimeError("errors")

    binding = new_stop_success_event_binding(handler)
    with pytest.raises(RuntimeError, match="errors"):
        binding.emit(StopSuccessEvent())


def test_event_names_are_their_types():
    names = [
        StartStartedEvent().name,
        StartSuccessEvent().name,
        StartFailureEvent().name,
        StartFinishedEvent().name,
        StopStartedEvent().name,
        StopSuccessEvent().name,
        StopFailureEvent().name,
        StopFinishedEvent().name,
    ]
    assert names == [
        "StartStartedEvent",
        "StartSuccessEvent",
        "StartFailureEvent",
        "StartFinishedEvent",
        "StopStartedEvent",
        "StopSuccessEvent",
        "StopFailureEvent",
        "StopFinishedEvent",
    ]


def test_names_match_source_strings():
    assert StartFinishedEvent().name == "StartFinishedEvent"
    assert StopFailureEvent().name == "StopFailureEvent"


def test_failure_event_carries_error():
    err = ValueError("deploy error")
    event = StartFailureEvent(data={"mykey": "first value"}, error=err)
    assert event.error is err
    assert event.data == {"mykey": "first value"}