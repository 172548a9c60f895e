"""Errors raised while starting or stopping applications."""

from __future__ import annotations

from collections.abc import Iterable


def _join(errors: Iterable[BaseException]) -> str:
    return "; ".join(str(error) for error in errors)


class DeployError(Exception):
    """Base class of every error raised by this package."""


class InvalidEventType(DeployError):
    """An event binding was handed an event of the wrong type."""

    def __init__(self, err: BaseException | None = None) -> None:
        self.err = err
        super().__init__(str(err) if err is not None else "invalid event type")


class EventError(DeployError):
    """Emitting an event failed."""

    def __init__(self, event_type: str, err: BaseException) -> None:
        self.event_type = event_type
        self.err = err
        super().__init__(f"an error occurred in the {event_type} event: {err}")


class BasicAuthError(DeployError):
    """Credentials are required by the environment but none were given."""

    def __init__(self) -> None:
        super().__init__("basic auth header not found")


class EnvironmentNotFoundError(DeployError):
    """The requested environment is not configured."""

    def __init__(self, environment: str) -> None:
        self.environment = environment
        super().__init__(f"environment not found: {environment}")


class InitializationError(DeployError):
    """The operation could not be initialised."""

    def __init__(self, err: BaseException) -> None:
        self.err = err
        super().__init__(f"initialization error: {err}")


class CourierCreationError(DeployError):
    """A courier for talking to a foundation could not be created."""

    def __init__(self, err: BaseException) -> None:
        self.err = err
        super().__init__(f"could not create courier: {err}")


class FoundationLoginError(DeployError):
    """Logging into a single foundation failed."""

    def __init__(self, foundation_url: str, output: bytes = b"") -> None:
        self.foundation_url = foundation_url
        self.output = output
        super().__init__(f"could not login to foundation {foundation_url}")


class AppExistsError(DeployError):
    """The application does not exist on the foundation."""

    def __init__(self, application_name: str) -> None:
        self.application_name = application_name
        super().__init__(f"application {application_name} does not exist")


class AppStartError(DeployError):
    """Starting an application failed."""

    def __init__(self, application_name: str, out: bytes = b"") -> None:
        self.application_name = application_name
        self.out = out
        super().__init__(f"failed to start application {application_name}")


class AppStopError(DeployError):
    """Stopping an application failed."""

    def __init__(self, application_name: str, out: bytes = b"") -> None:
        self.application_name = application_name
        self.out = out
        super().__init__(f"failed to stop application {application_name}")


class LoginError(DeployError):
    """Logging into one or more foundations failed."""

    def __init__(self, login_errors: Iterable[BaseException]) -> None:
        self.login_errors = list(login_errors)
        super().__init__(f"login failed: {_join(self.login_errors)}")


class StartError(DeployError):
    """Starting failed on one or more foundations."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors = list(errors)
        super().__init__(f"start failed: {_join(self.errors)}")


class StopError(DeployError):
    """Stopping failed on one or more foundations."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors = list(errors)
        super().__init__(f"stop failed: {_join(self.errors)}")


class RollbackStartError(DeployError):
    """Starting failed and undoing the start failed too."""

    def __init__(
        self,
        start_errors: Iterable[BaseException],
        rollback_errors: Iterable[BaseException],
    ) -> None:
        self.start_errors = list(start_errors)
        self.rollback_errors = list(rollback_errors)
        super().__init__(
            f"start failed: {_join(self.start_errors)}; "
            f"rollback failed: {_join(self.rollback_errors)}"
        )


class RollbackStopError(DeployError):
    """Stopping failed and undoing the stop failed too."""

    def __init__(
        self,
        stop_errors: Iterable[BaseException],
        rollback_errors: Iterable[BaseException],
    ) -> None:
        self.stop_errors = list(stop_errors)
        self.rollback_errors = list(rollback_errors)
        super().__init__(
            f"stop failed: {_join(self.stop_errors)}; "
            f"rollback failed: {_join(self.rollback_errors)}"
        )


class FinishStartError(DeployError):
    """Finishing a start failed."""

    def __init__(self, finish_start_errors: Iterable[BaseException]) -> None:
        self.finish_start_errors = list(finish_start_errors)
        super().__init__(f"finish start failed: {_join(self.finish_start_errors)}")


class FinishStopError(DeployError):
    """Finishing a stop failed."""

    def __init__(self, finish_stop_errors: Iterable[BaseException]) -> None:
        self.finish_stop_errors = list(finish_stop_errors)
        super().__init__(f"finish stop failed: {_join(self.finish_stop_errors)}")