"""Per-foundation actions that start or stop an application."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any, Protocol

from deploystate.errors import (
    AppExistsError,
    AppStartError,
    AppStopError,
    FoundationLoginError,
)
from deploystate.structs import Authorization, CFContext, DeploymentLogger


class Courier(Protocol):
    """Runs commands against a foundation.

    Each command returns its output as bytes. On failure it raises; the
    exception may carry the command output in an ``output`` attribute.
    """

    def login(
        self,
        foundation_url: str,
        username: str,
        password: str,
        org: str,
        space: str,
        skip_ssl: bool,
    ) -> bytes: ...

    def exists(self, app_name: str) -> bool: ...

    def start(self, app_name: str) -> bytes: ...

    def stop(self, app_name: str) -> bytes: ...


def _write(response: Any, payload: bytes | str) -> None:
    if response is None:
        return
    if isinstance(response, io.TextIOBase):
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8", errors="replace")
    elif isinstance(payload, str):
        payload = payload.encode("utf-8")
    response.write(payload)


def _output_of(exc: BaseException) -> bytes:
    output = getattr(exc, "output", b"")
    if isinstance(output, str):
        return output.encode("utf-8")
    return output or b""


@dataclass
class _Action:
    courier: Any = None
    cf_context: CFContext = field(default_factory=CFContext)
    authorization: Authorization = field(default_factory=Authorization)
    event_manager: Any = None
    response: Any = None
    log: DeploymentLogger = field(default_factory=DeploymentLogger)
    foundation_url: str = ""
    app_name: str = ""

    def _skip_stage(self, stage: str) -> None:
        """Note a lifecycle stage that needs no work for this action."""
        self.log.debug(
            "%s: nothing to do for app %s on foundation %s",
            stage,
            self.app_name,
            self.foundation_url,
        )

    def _login(self) -> None:
        """Log into the foundation, echoing the login output to the response."""
        self.log.debug(
            "logging into cloud foundry with parameters:\n"
            "\t\tfoundation URL: %s\n"
            "\t\tusername: %s\n"
            "\t\torg: %s\n"
            "\t\tspace: %s",
            self.foundation_url,
            self.authorization.username,
            self.cf_context.organization,
            self.cf_context.space,
        )
        try:
            output = self.courier.login(
                self.foundation_url,
                self.authorization.username,
                self.authorization.password,
                self.cf_context.organization,
                self.cf_context.space,
                self.cf_context.skip_ssl,
            )
        except Exception as exc:
            output = _output_of(exc)
            _write(self.response, output)
            self.log.error("could not login to %s", self.foundation_url)
            raise FoundationLoginError(self.foundation_url, output) from exc
        _write(self.response, output)
        self.log.info("logged into cloud foundry %s", self.foundation_url)


@dataclass
class Starter(_Action):
    """Starts an application on one foundation."""

    data: dict[str, Any] = field(default_factory=dict)

    def verify(self) -> None:
        """Starting needs no verification."""
        self._skip_stage("verify")

    def success(self) -> None:
        """Starting needs no follow-up on success."""
        self._skip_stage("success")

    def finally_(self) -> None:
        """Starting needs no final step."""
        self._skip_stage("finally")

    def initially(self) -> None:
        """Log into the foundation."""
        self._login()

    def execute(self) -> None:
        if not self.courier.exists(self.app_name):
            self.log.error(
                "failed to start app on foundation %s: application doesn't exist",
                self.foundation_url,
            )
            raise AppExistsError(self.app_name)

        self.log.info("starting app %s", self.app_name)
        try:
            output = self.courier.start(self.app_name)
        except Exception as exc:
            self.log.error(
                "failed to start app on foundation %s: %s", self.foundation_url, exc
            )
            raise AppStartError(self.app_name, _output_of(exc)) from exc
        _write(self.response, output)
        self.log.info("successfully started app %s", self.app_name)

    def undo(self) -> None:
        if not self.courier.exists(self.app_name):
            raise AppExistsError(self.app_name)

        self.log.info("stopping app %s", self.app_name)
        try:
            output = self.courier.stop(self.app_name)
        except Exception as exc:
            raise AppStopError(self.app_name, _output_of(exc)) from exc
        _write(self.response, output)
        self.log.info("successfully restopped app %s", self.app_name)


@dataclass
class Stopper(_Action):
    """Stops an application on one foundation."""

    def verify(self) -> None:
        """Stopping needs no verification."""
        self._skip_stage("verify")

    def success(self) -> None:
        """Stopping needs no follow-up on success."""
        self._skip_stage("success")

    def finally_(self) -> None:
        """Stopping needs no final step."""
        self._skip_stage("finally")

    def initially(self) -> None:
        """Log into the foundation."""
        self._login()

    def execute(self) -> None:
        if not self.courier.exists(self.app_name):
            self.log.error(
                "failed to stop app on foundation %s: application doesn't exist",
                self.foundation_url,
            )
            raise AppExistsError(self.app_name)

        self.log.info("stopping app %s", self.app_name)
        try:
            output = self.courier.stop(self.app_name)
        except Exception as exc:
            self.log.error(
                "failed to stop app on foundation %s: %s", self.foundation_url, exc
            )
            raise AppStopError(self.app_name, _output_of(exc)) from exc
        _write(self.response, output)
        self.log.info("successfully stopped app %s", self.app_name)

    def undo(self) -> None:
        if not self.courier.exists(self.app_name):
            return None

        self.log.info("starting app %s", self.app_name)
        try:
            output = self.courier.start(self.app_name)
        except Exception as exc:
            raise AppStartError(self.app_name, _output_of(exc)) from exc
        _write(self.response, output)
        self.log.info("successfully restarted app %s", self.app_name)
        return None