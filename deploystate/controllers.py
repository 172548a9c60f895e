"""Controllers that drive the start and stop of an application across foundations."""

from __future__ import annotations

import contextlib
import io
from collections.abc import Sequence
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, ClassVar, Protocol

from deploystate.errors import (
    BasicAuthError,
    EnvironmentNotFoundError,
    EventError,
    InitializationError,
)
from deploystate.events import (
    StartFailureEvent,
    StartFinishedEvent,
    StartStartedEvent,
    StartSuccessEvent,
    StopFailureEvent,
    StopFinishedEvent,
    StopStartedEvent,
    StopSuccessEvent,
)
from deploystate.structs import (
    Authorization,
    CFContext,
    Config,
    DeployEventData,
    Deployment,
    DeploymentInfo,
    DeploymentLogger,
    DeployResponse,
    Environment,
)

_BANNER = "*******************"


class EventManager(Protocol):
    """Delivers events to their handlers; raises if a handler fails."""

    def emit_event(self, event: Any) -> Any: ...


class Deployer(Protocol):
    """Runs the actions an action creator builds on every foundation."""

    def deploy(
        self,
        deployment_info: DeploymentInfo,
        environment: Environment,
        action_creator: Any,
        response: Any,
    ) -> DeployResponse: ...


class LogMatchedError(Protocol):
    """An error recognised in command output, with an explanation."""

    details: Sequence[str]
    solution: str


class ErrorFinder(Protocol):
    """Finds known errors in command output."""

    def find_errors(self, text: str) -> Sequence[Any]: ...


class StartManagerFactory(Protocol):
    def start_manager(self, log: DeploymentLogger, deploy_event_data: DeployEventData) -> Any: ...


class StopManagerFactory(Protocol):
    def stop_manager(self, log: DeploymentLogger, deploy_event_data: DeployEventData) -> Any: ...


def _write(response: Any, text: str) -> None:
    if response is None:
        return
    if isinstance(response, io.TextIOBase):
        response.write(text)
    else:
        response.write(text.encode("utf-8"))


def _contents(response: Any) -> str:
    if response is None:
        return ""
    value = response.getvalue() if hasattr(response, "getvalue") else response.read()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


@dataclass
class _Controller:
    log: DeploymentLogger = field(default_factory=DeploymentLogger)
    deployer: Any = None
    config: Config = field(default_factory=Config)
    event_manager: Any = None
    error_finder: Any = None

    _verb: ClassVar[str]
    _started_event: ClassVar[type]
    _success_event: ClassVar[type]
    _failure_event: ClassVar[type]
    _finished_event: ClassVar[type]
    _finish_carries_response: ClassVar[bool]

    def _manager(self, deploy_event_data: DeployEventData) -> Any:
        raise NotImplementedError

    def _run(
        self, deployment: Deployment, data: dict[str, Any] | None, response: Any
    ) -> DeployResponse:
        cf = deployment.cf_context
        self.log.debug(
            "Preparing to %s %s with UUID %s", self._verb, cf.application, self.log.uuid
        )
        if data is None:
            data = {}

        try:
            environment = self._resolve_environment(cf.environment)
        except EnvironmentNotFoundError as exc:
            _write(response, f"{exc}\n")
            return DeployResponse(
                status_code=HTTPStatus.INTERNAL_SERVER_ERROR, error=exc
            )

        try:
            auth = self._resolve_authorization(deployment.authorization, environment)
        except BasicAuthError as exc:
            return DeployResponse(status_code=HTTPStatus.UNAUTHORIZED, error=exc)

        info = DeploymentInfo(
            org=cf.organization,
            space=cf.space,
            app_name=cf.application,
            environment=cf.environment,
            uuid=self.log.uuid,
            domain=environment.domain,
            skip_ssl=environment.skip_ssl,
            custom_params=environment.custom_params,
            username=auth.username,
            password=auth.password,
            data=data,
        )

        deploy_response = self._deploy(cf, auth, environment, data, response, info)
        self._emit_success_or_failure(response, cf, auth, environment, data, deploy_response)
        self._emit_finish(response, cf, auth, environment, data)
        return deploy_response

    def _deploy(
        self,
        cf: CFContext,
        auth: Authorization,
        environment: Environment,
        data: dict[str, Any],
        response: Any,
        info: DeploymentInfo,
    ) -> DeployResponse:
        started = self._started_event(
            cf_context=cf,
            authorization=auth,
            environment=environment,
            data=data,
            response=response,
            log=self.log,
        )
        try:
            self.event_manager.emit_event(started)
        except Exception as exc:
            self.log.error(exc)
            return DeployResponse(
                status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                error=EventError(started.name, InitializationError(exc)),
                deployment_info=info,
            )

        manager = self._manager(DeployEventData(response=response, deployment_info=info))
        return self.deployer.deploy(info, environment, manager, response)

    def _resolve_authorization(
        self, auth: Authorization, environment: Environment
    ) -> Authorization:
        self.log.debug("checking for basic auth")
        if not auth.username and not auth.password:
            if environment.authenticate:
                raise BasicAuthError()
            return Authorization(
                username=self.config.username, password=self.config.password
            )
        return Authorization(username=auth.username, password=auth.password)

    def _resolve_environment(self, name: str) -> Environment:
        try:
            return self.config.environments[name]
        except KeyError:
            raise EnvironmentNotFoundError(name) from None

    def _emit_finish(
        self,
        response: Any,
        cf: CFContext,
        auth: Authorization,
        environment: Environment,
        data: dict[str, Any],
    ) -> None:
        event = self._finished_event(
            cf_context=cf,
            authorization=auth,
            environment=environment,
            data=data,
            response=response if self._finish_carries_response else None,
            log=self.log,
        )
        self.log.debug("emitting a %s event", event.name)
        with contextlib.suppress(Exception):
            self.event_manager.emit_event(event)

    def _emit_success_or_failure(
        self,
        response: Any,
        cf: CFContext,
        auth: Authorization,
        environment: Environment,
        data: dict[str, Any],
        deploy_response: DeployResponse,
    ) -> None:
        common = dict(
            cf_context=cf,
            authorization=auth,
            environment=environment,
            data=data,
            response=response,
            log=self.log,
        )
        if deploy_response.error is not None:
            self._print_errors(response, deploy_response)
            event = self._failure_event(error=deploy_response.error, **common)
        else:
            event = self._success_event(**common)

        self.log.debug("emitting a %s event", event.name)
        try:
            self.event_manager.emit_event(event)
        except Exception as exc:
            self.log.error(
                "an error occurred when emitting a %s event: %s", event.name, exc
            )
            _write(response, f"{exc}\n")

    def _print_errors(self, response: Any, deploy_response: DeployResponse) -> None:
        if self.error_finder is None:
            return
        found = list(self.error_finder.find_errors(_contents(response)))
        if not found:
            return
        deploy_response.error = found[0]
        for error in found:
            _write(
                response,
                f"\n{_BANNER}\n\n"
                f"The following error was found in the above logs: {error}\n\n"
                f"Error: {error.details[0]}\n\n"
                f"Potential solution: {error.solution}\n\n"
                f"{_BANNER}\n",
            )


@dataclass
class StartController(_Controller):
    """Starts an application in an environment and emits its lifecycle events."""

    start_manager_factory: Any = None

    _verb: ClassVar[str] = "start"
    _started_event: ClassVar[type] = StartStartedEvent
    _success_event: ClassVar[type] = StartSuccessEvent
    _failure_event: ClassVar[type] = StartFailureEvent
    _finished_event: ClassVar[type] = StartFinishedEvent
    _finish_carries_response: ClassVar[bool] = False

    def _manager(self, deploy_event_data: DeployEventData) -> Any:
        return self.start_manager_factory.start_manager(self.log, deploy_event_data)

    def start_deployment(
        self, deployment: Deployment, data: dict[str, Any] | None, response: Any
    ) -> DeployResponse:
        """Start the application named by the deployment on every foundation."""
        return self._run(deployment, data, response)


@dataclass
class StopController(_Controller):
    """Stops an application in an environment and emits its lifecycle events."""

    stop_manager_factory: Any = None

    _verb: ClassVar[str] = "stop"
    _started_event: ClassVar[type] = StopStartedEvent
    _success_event: ClassVar[type] = StopSuccessEvent
    _failure_event: ClassVar[type] = StopFailureEvent
    _finished_event: ClassVar[type] = StopFinishedEvent
    _finish_carries_response: ClassVar[bool] = True

    def _manager(self, deploy_event_data: DeployEventData) -> Any:
        return self.stop_manager_factory.stop_manager(self.log, deploy_event_data)

    def stop_deployment(
        self, deployment: Deployment, data: dict[str, Any] | None, response: Any
    ) -> DeployResponse:
        """Stop the application named by the deployment on every foundation."""
        return self._run(deployment, data, response)