"""Process-wide access to the active configuration.

The configuration is resolved once at import (config.yaml plus environment
overrides) and published through a ``ContextVar`` so tests and scripts can
swap it for the duration of a block with ``with_context``.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel

from fitness_users.runtime.config.config_data import ConfigData
from fitness_users.runtime.config.config_template import load_config


@dataclass
class AppContext:
    config: ConfigData


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Install ``context`` and return the token that restores the previous one."""
    return _app_context.set(context)


def _explicit_values(model: BaseModel) -> dict[str, Any]:
    """Collect the values a caller actually set on ``model``, section by section.

    A nested section left at its defaults contributes nothing, so merging the
    result never clobbers values inherited from the current configuration.
    """
    values: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_values(value)
            if nested:
                values[name] = nested
            elif name in model.model_fields_set:
                values[name] = value.model_dump()
        elif name in model.model_fields_set:
            values[name] = value
    return values


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily layer ``config_override`` over the active configuration.

    Example:
        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            assert get_config().database.url == "sqlite://"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData or None, got {type(config_override)}"
        )

    current = get_context()
    merged = ConfigData.model_validate(
        _deep_merge(current.config.model_dump(), _explicit_values(config_override))
    )
    token = set_context(replace(current, config=merged))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Return the configuration active in the current context."""
    return get_context().config
