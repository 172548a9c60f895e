"""Plain data shapes shared by the deployment state machinery."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import IO, Any


@dataclass
class DeploymentInfo:
    """Everything needed to carry out a deployment."""

    artifact_url: str = ""
    manifest: str = ""
    username: str = ""
    password: str = ""
    environment: str = ""
    org: str = ""
    space: str = ""
    app_name: str = ""
    uuid: str = ""
    skip_ssl: bool = False
    instances: int = 0
    domain: str = ""
    app_path: str = ""
    content_type: str = ""
    body: IO[bytes] | None = None
    environment_variables: dict[str, str] = field(default_factory=dict)
    health_check_endpoint: str = ""
    custom_params: dict[str, Any] = field(default_factory=dict)
    # Free-form properties supplied by the caller.
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class Environment:
    """Configuration of a single environment."""

    name: str = ""
    domain: str = ""
    foundations: list[str] = field(default_factory=list)
    authenticate: bool = False
    skip_ssl: bool = False
    instances: int = 0
    enable_rollback: bool = False
    custom_params: dict[str, Any] = field(default_factory=dict)


@dataclass
class ErrorMatcherDescriptor:
    """Describes a log pattern, what it means and how to fix it."""

    description: str = ""
    pattern: str = ""
    solution: str = ""
    code: str = ""


@dataclass
class DeployEventData:
    """The response stream and deployment info handed to event handlers."""

    response: Any = None
    deployment_info: DeploymentInfo | None = None
    request_body: IO[bytes] | None = None
    # Kept for older handlers; new code writes to ``response``.
    writer: Any = None


@dataclass
class PrecheckerEventData:
    """An environment together with a description of a precheck."""

    environment: Environment = field(default_factory=Environment)
    description: str = ""


@dataclass
class PushEventData:
    """Data describing a push to a single foundation."""

    app_path: str = ""
    foundation_url: str = ""
    temp_app_with_uuid: str = ""
    deployment_info: DeploymentInfo | None = None
    courier: Any = None
    response: Any = None


@dataclass
class StopEventData:
    """Data describing a stop request."""

    response: Any = None
    deployment_info: DeploymentInfo | None = None


@dataclass
class CFContext:
    """The target of an operation on a Cloud Foundry installation."""

    environment: str = ""
    organization: str = ""
    space: str = ""
    application: str = ""
    skip_ssl: bool = False


@dataclass
class Authorization:
    """Credentials for a foundation."""

    username: str = ""
    password: str = ""


@dataclass
class Deployment:
    """A request to act on an application."""

    body: bytes | None = None
    deployment_type: Any = None
    cf_context: CFContext = field(default_factory=CFContext)
    authorization: Authorization = field(default_factory=Authorization)


@dataclass
class DeployResponse:
    """The outcome of an operation."""

    status_code: int = 0
    error: BaseException | None = None
    deployment_info: DeploymentInfo | None = None


@dataclass
class Config:
    """Service configuration: default credentials and known environments."""

    username: str = ""
    password: str = ""
    environments: dict[str, Environment] = field(default_factory=dict)


@dataclass
class DeploymentLogger:
    """A logger bound to the UUID of one deployment."""

    log: logging.Logger = field(
        default_factory=lambda: logging.getLogger("deploystate")
    )
    uuid: str = ""

    def debug(self, msg: Any, *args: Any) -> None:
        self.log.debug(str(msg), *args)

    def info(self, msg: Any, *args: Any) -> None:
        self.log.info(str(msg), *args)

    def error(self, msg: Any, *args: Any) -> None:
        self.log.error(str(msg), *args)