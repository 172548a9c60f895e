import logging

from deploystate.structs import (
    Config,
    Deployment,
    DeploymentInfo,
    DeploymentLogger,
    DeployResponse,
    Environment,
)

LOGGER_NAME = "deploystate.test_structs"


def _logger():
    return DeploymentLogger(log=logging.getLogger(LOGGER_NAME), uuid="abc")


def test_mutable_defaults_are_not_shared():
    first = DeploymentInfo()
    second = DeploymentInfo()
    first.data["key"] = "value"
    first.custom_params["x"] = 1
    assert second.data == {}
    assert second.custom_params == {}


def test_environment_lists_are_independent():
    one = Environment()
    two = Environment()
    one.foundations.append("f1")
    assert two.foundations == []
    assert two.authenticate is False


def test_deployment_has_empty_context_and_auth():
    deployment = Deployment()
    assert deployment.cf_context.environment == ""
    assert deployment.authorization.username == ""
    assert deployment.authorization.password == ""


def test_deploy_response_defaults():
    response = DeployResponse()
    assert response.error is None
    assert response.deployment_info is None
    assert response.status_code == 0


def test_config_environments_lookup():
    config = Config(environments={"dev": Environment(name="dev")})
    assert config.environments["dev"].name == "dev"
    assert "prod" not in config.environments


def test_logger_debug_formats_args(caplog):
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        _logger().debug("Preparing to start %s with UUID %s", "myApp", "abc")
    assert "Preparing to start myApp with UUID abc" in caplog.text


def test_logger_info_and_error(caplog):
    logger = _logger()
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        logger.info("started %s", "thing")
        logger.error(ValueError("boom"))
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["started thing", "boom"]
    assert caplog.records[1].levelno == logging.ERROR