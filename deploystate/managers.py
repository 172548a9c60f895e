"""Action creators that build starters and stoppers for each foundation."""

from __future__ import annotations

import io
from collections.abc import Iterable
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Protocol

from deploystate.actions import Courier, Starter, Stopper
from deploystate.errors import (
    CourierCreationError,
    FinishStartError,
    FinishStopError,
    LoginError,
    RollbackStartError,
    RollbackStopError,
    StartError,
    StopError,
)
from deploystate.structs import (
    Authorization,
    CFContext,
    DeployEventData,
    DeploymentInfo,
    DeploymentLogger,
    DeployResponse,
    Environment,
)

SUCCESSFUL_START = "Your start was successful! (^_^)b\n\n"
SUCCESSFUL_STOP = "Your stop was successful! (^_^)b\n\n"


class CourierCreator(Protocol):
    def create_courier(self) -> Courier: ...


def _write(response: Any, text: str) -> None:
    if response is None:
        return
    if isinstance(response, io.TextIOBase):
        response.write(text)
    else:
        response.write(text.encode("utf-8"))


def _finish(
    response: Any, err: BaseException | None, verb: str
) -> DeployResponse | None:
    if err is None:
        return None
    _write(
        response,
        f"\nYour application was not successfully {verb} on all foundations: {err}\n\n",
    )
    if "login failed" in str(err):
        return DeployResponse(status_code=HTTPStatus.BAD_REQUEST, error=err)
    return DeployResponse(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, error=err)


def _info(data: DeployEventData) -> DeploymentInfo:
    return data.deployment_info or DeploymentInfo()


def _make_courier(creator: Any, logger: DeploymentLogger) -> Any:
    try:
        return creator.create_courier()
    except Exception as exc:
        logger.error(exc)
        raise CourierCreationError(exc) from exc


def _context(environment: Environment, info: DeploymentInfo) -> CFContext:
    return CFContext(
        environment=environment.name,
        organization=info.org,
        space=info.space,
        application=info.app_name,
        skip_ssl=info.skip_ssl,
    )


def _skip_stage(logger: DeploymentLogger, stage: str, data: DeployEventData) -> None:
    logger.debug("%s: nothing to do for application %s", stage, _info(data).app_name)


@dataclass
class StartManager:
    """Creates a Starter for each foundation and reports the overall result."""

    courier_creator: Any = None
    event_manager: Any = None
    logger: DeploymentLogger = field(default_factory=DeploymentLogger)
    deploy_event_data: DeployEventData = field(default_factory=DeployEventData)

    def set_up(self) -> None:
        """Starting needs no set-up."""
        _skip_stage(self.logger, "set up", self.deploy_event_data)

    def on_start(self) -> None:
        """Starting needs no preparation before the actions run."""
        _skip_stage(self.logger, "on start", self.deploy_event_data)

    def on_finish(
        self, env: Environment, response: Any, err: BaseException | None
    ) -> DeployResponse:
        failed = _finish(response, err, "started")
        if failed is not None:
            return failed
        self.logger.info(
            "successfully started application %s",
            _info(self.deploy_event_data).app_name,
        )
        _write(response, "\n" + SUCCESSFUL_START)
        return DeployResponse(status_code=HTTPStatus.OK)

    def clean_up(self) -> None:
        """Starting leaves nothing to clean up."""
        _skip_stage(self.logger, "clean up", self.deploy_event_data)

    def create(
        self, environment: Environment, response: Any, foundation_url: str
    ) -> Starter:
        courier = _make_courier(self.courier_creator, self.logger)
        info = _info(self.deploy_event_data)
        return Starter(
            courier=courier,
            cf_context=_context(environment, info),
            authorization=Authorization(username=info.username, password=info.password),
            event_manager=self.event_manager,
            response=response,
            log=self.logger,
            foundation_url=foundation_url,
            app_name=info.app_name,
            data=info.data,
        )

    def initially_error(self, initially_errors: Iterable[BaseException]) -> LoginError:
        return LoginError(initially_errors)

    def execute_error(self, execute_errors: Iterable[BaseException]) -> StartError:
        return StartError(execute_errors)

    def undo_error(
        self,
        execute_errors: Iterable[BaseException],
        undo_errors: Iterable[BaseException],
    ) -> RollbackStartError:
        return RollbackStartError(execute_errors, undo_errors)

    def success_error(
        self, success_errors: Iterable[BaseException]
    ) -> FinishStartError:
        return FinishStartError(success_errors)


@dataclass
class StopManager:
    """Creates a Stopper for each foundation and reports the overall result."""

    courier_creator: Any = None
    event_manager: Any = None
    log: DeploymentLogger = field(default_factory=DeploymentLogger)
    deploy_event_data: DeployEventData = field(default_factory=DeployEventData)

    @property
    def logger(self) -> DeploymentLogger:
        return self.log

    def set_up(self) -> None:
        """Stopping needs no set-up."""
        _skip_stage(self.log, "set up", self.deploy_event_data)

    def on_start(self) -> None:
        """Stopping needs no preparation before the actions run."""
        _skip_stage(self.log, "on start", self.deploy_event_data)

    def on_finish(
        self, env: Environment, response: Any, err: BaseException | None
    ) -> DeployResponse:
        failed = _finish(response, err, "stopped")
        if failed is not None:
            return failed
        self.log.info(
            "successfully stopped application %s",
            _info(self.deploy_event_data).app_name,
        )
        _write(response, "\n" + SUCCESSFUL_STOP)
        return DeployResponse(status_code=HTTPStatus.OK)

    def clean_up(self) -> None:
        """Stopping leaves nothing to clean up."""
        _skip_stage(self.log, "clean up", self.deploy_event_data)

    def create(
        self, environment: Environment, response: Any, foundation_url: str
    ) -> Stopper:
        courier = _make_courier(self.courier_creator, self.log)
        info = _info(self.deploy_event_data)
        return Stopper(
            courier=courier,
            cf_context=_context(environment, info),
            authorization=Authorization(username=info.username, password=info.password),
            event_manager=self.event_manager,
            response=response,
            log=self.log,
            foundation_url=foundation_url,
            app_name=info.app_name,
        )

    def initially_error(self, initially_errors: Iterable[BaseException]) -> LoginError:
        return LoginError(initially_errors)

    def execute_error(self, execute_errors: Iterable[BaseException]) -> StopError:
        return StopError(execute_errors)

    def undo_error(
        self,
        execute_errors: Iterable[BaseException],
        undo_errors: Iterable[BaseException],
    ) -> RollbackStopError:
        return RollbackStopError(execute_errors, undo_errors)

    def success_error(self, success_errors: Iterable[BaseException]) -> FinishStopError:
        return FinishStopError(success_errors)