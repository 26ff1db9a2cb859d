"""Loading config.yaml: placeholder expansion, validation and env overrides."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from fitness_users.runtime.config.config_data import ConfigData
from fitness_users.runtime.settings import EnvironmentVariables

_PLACEHOLDER = re.compile(
    r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?:(?P<op>:[-?])(?P<arg>[^}]*))?\}"
)


def _resolve_placeholder(match: re.Match) -> str:
    name, op, arg = match.group("name", "op", "arg")
    value = os.getenv(name)
    if value is not None:
        return value
    if op == ":-":
        return arg
    if op == ":?":
        raise ValueError(f"Required environment variable {name}: {arg}")
    raise ValueError(f"Required environment variable {name} not set")


def substitute_env_vars(text: str) -> str:
    """Expand ``${VAR}``, ``${VAR:-default}`` and ``${VAR:?message}`` in ``text``.

    A bare ``${VAR}`` or a ``:?`` form whose variable is unset raises
    ``ValueError``.
    """
    return _PLACEHOLDER.sub(_resolve_placeholder, text)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Parse the ``config:`` mapping of ``file_path`` into ``ConfigData``.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: on a missing required variable, malformed YAML or
            values that fail validation
    """
    content = substitute_env_vars(Path(file_path).read_text())

    try:
        document = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML in {file_path}: {e}") from e

    try:
        return ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {file_path}: {e}") from e


def apply_environment_overrides(
    config: ConfigData, env_vars: EnvironmentVariables
) -> ConfigData:
    """Copy every environment override that is set onto ``config``, in place."""
    if env_vars.environment is not None:
        config.app.environment = env_vars.environment
    if env_vars.log_level is not None:
        config.logging.level = env_vars.log_level
    if env_vars.database_url is not None:
        config.database.url = env_vars.database_url
    return config


def load_config(env_vars: EnvironmentVariables | None = None) -> ConfigData:
    env_vars = env_vars or EnvironmentVariables()
    config_path = Path(env_vars.config_file)

    if config_path.is_file():
        logger.debug("Loading configuration from {}", config_path)
        config = load_templated_yaml(config_path)
    else:
        logger.debug("No configuration file at {}, using defaults", config_path)
        config = ConfigData()

    return apply_environment_overrides(config, env_vars)
