"""Lifecycle events for start and stop operations, and bindings for them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from deploystate.errors import InvalidEventType
from deploystate.structs import (
    Authorization,
    CFContext,
    DeploymentLogger,
    Environment,
)


class EventBinding:
    """Routes events of exactly one type to a handler."""

    def __init__(self, event_type: type, handler: Callable[[Any], Any] | None) -> None:
        self.event_type = event_type
        self.handler = handler

    def accepts(self, event: Any) -> bool:
        return type(event) is self.event_type

    def emit(self, event: Any) -> Any:
        """Pass the event to the handler; raise InvalidEventType if it is foreign."""
        if not self.accepts(event) or self.handler is None:
            raise InvalidEventType()
        return self.handler(event)


@dataclass
class _LifecycleEvent:
    cf_context: CFContext = field(default_factory=CFContext)
    data: dict[str, Any] = field(default_factory=dict)
    environment: Environment = field(default_factory=Environment)
    authorization: Authorization = field(default_factory=Authorization)
    response: Any = None
    log: DeploymentLogger | None = None

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass
class StartStartedEvent(_LifecycleEvent):
    """Emitted before an application is started."""


@dataclass
class StartSuccessEvent(_LifecycleEvent):
    """Emitted when an application was started."""


@dataclass
class StartFailureEvent(_LifecycleEvent):
    """Emitted when starting an application failed."""

    error: BaseException | None = None


@dataclass
class StartFinishedEvent(_LifecycleEvent):
    """Emitted after a start, whatever its outcome."""


@dataclass
class StopStartedEvent(_LifecycleEvent):
    """Emitted before an application is stopped."""


@dataclass
class StopSuccessEvent(_LifecycleEvent):
    """Emitted when an application was stopped."""


@dataclass
class StopFailureEvent(_LifecycleEvent):
    """Emitted when stopping an application failed."""

    error: BaseException | None = None


@dataclass
class StopFinishedEvent(_LifecycleEvent):
    """Emitted after a stop, whatever its outcome."""


def new_start_started_event_binding(handler):
    return EventBinding(StartStartedEvent, handler)


def new_start_success_event_binding(handler):
    return EventBinding(StartSuccessEvent, handler)


def new_start_failure_event_binding(handler):
    return EventBinding(StartFailureEvent, handler)


def new_start_finished_event_binding(handler):
    return EventBinding(StartFinishedEvent, handler)


def new_stop_started_event_binding(handler):
    return EventBinding(StopStartedEvent, handler)


def new_stop_success_event_binding(handler):
    return EventBinding(StopSuccessEvent, handler)


def new_stop_failure_event_binding(handler):
    return EventBinding(StopFailureEvent, handler)


def new_stop_finished_event_binding(handler):
    return EventBinding(StopFinishedEvent, handler)