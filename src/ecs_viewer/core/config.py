"""Environment configuration loading."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema

from .errors import ConfigurationError, EnvironmentNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "environments.json"
CONFIG_PATH_ENV_VAR = "ECS_VIEWER_CONFIG"
DEFAULT_ENVIRONMENT_NAME = "default"
DEFAULT_MAIN_CONTAINER = "app"

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "envs": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "cluster_name": {"type": "string", "minLength": 1},
                    "main_container": {"type": "string", "minLength": 1},
                    "log_group_name": {"type": "string", "minLength": 1},
                },
                "required": ["cluster_name", "log_group_name"],
            },
        },
    },
    "required": ["envs"],
}


@dataclass(frozen=True)
class EnvironmentConfig:
    """Where one environment's tasks and state change events live."""

    cluster_name: str
    main_container: str
    log_group_name: str


class EnvironmentsConfig:
    """Named environments in the order they were declared."""

    def __init__(self, envs: dict[str, EnvironmentConfig]) -> None:
        self._envs = dict(envs)

    def names(self) -> list[str]:
        return list(self._envs)

    def get(self, name: str) -> EnvironmentConfig:
        if name not in self._envs:
            raise EnvironmentNotFoundError(name)
        return self._envs[name]

    def default_name(self) -> str:
        if not self._envs:
            raise EnvironmentNotFoundError(DEFAULT_ENVIRONMENT_NAME)
        return next(iter(self._envs))

    def __contains__(self, name: object) -> bool:
        return name in self._envs

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EnvironmentsConfig:
        envs = {}
        for name, env in (data.get("envs") or {}).items():
            envs[name] = EnvironmentConfig(
                cluster_name=env["cluster_name"],
                main_container=env.get("main_container", DEFAULT_MAIN_CONTAINER),
                log_group_name=env["log_group_name"],
            )
        return cls(envs)


def validate_config(data: Any, config_path: Path) -> None:  # noqa: ANN401
    try:
        jsonschema.validate(instance=data, schema=CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {e.message}") from e


def load_environments(path: str | None = None, environ: dict[str, str] | None = None) -> EnvironmentsConfig:
    """Load environments from a JSON file, falling back to CLUSTER_NAME/LOG_GROUP_NAME variables."""
    environ = dict(os.environ) if environ is None else environ
    config_path = Path(path or environ.get(CONFIG_PATH_ENV_VAR) or DEFAULT_CONFIG_PATH)

    if config_path.is_file():
        logger.debug("Loading environments from %s", config_path)
        with config_path.open(encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Failed to parse {config_path}: {e}") from e
        validate_config(data, config_path)
        config = EnvironmentsConfig.from_dict(data)
        if not config.names():
            raise EnvironmentNotFoundError(DEFAULT_ENVIRONMENT_NAME)
        return config

    if path:
        raise EnvironmentNotFoundError(str(config_path))

    cluster_name = environ.get("CLUSTER_NAME")
    if not cluster_name:
        raise EnvironmentNotFoundError(DEFAULT_ENVIRONMENT_NAME)

    logger.debug("No %s found, using CLUSTER_NAME/LOG_GROUP_NAME", config_path)
    env = EnvironmentConfig(
        cluster_name=cluster_name,
        main_container=environ.get("MAIN_CONTAINER", DEFAULT_MAIN_CONTAINER),
        log_group_name=environ.get("LOG_GROUP_NAME", ""),
    )
    return EnvironmentsConfig({DEFAULT_ENVIRONMENT_NAME: env})
