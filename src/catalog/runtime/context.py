from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace

from pydantic import BaseModel

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.config.config_template import load_config
from src.catalog.runtime.config.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


_default_config = load_config(EnvironmentVariables().app_config_file)
_default_context = AppContext(config=_default_config)

_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.

    Returns:
        Token that can be passed to ``reset_context`` to restore the previous value.
    """
    return _app_context.set(context)


def reset_context(token: Token[AppContext]) -> None:
    """Restore the context that was current before ``set_context`` returned ``token``."""
    _app_context.reset(token)


def _explicit_fields(model: BaseModel) -> dict:
    """Dump only the fields of ``model`` that were explicitly set, at any depth.

    A nested section is included whole when any of its own fields was set,
    so the override replaces that section of the base configuration.
    """
    result = {}
    for field_name in type(model).model_fields:
        value = getattr(model, field_name)
        if isinstance(value, BaseModel):
            if _explicit_fields(value) or field_name in model.model_fields_set:
                result[field_name] = value.model_dump()
        elif field_name in model.model_fields_set:
            result[field_name] = value
    return result


def _merge_dicts(base: dict, override: dict) -> dict:
    merged = base.copy()
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge ``override_config`` into ``base_config``; override values win."""
    merged = _merge_dicts(base_config.model_dump(), _explicit_fields(override_config))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Context manager for temporarily overriding the application context.

    Args:
        config_override: Optional ConfigData instance. Nested sections that
            carry explicitly set fields replace the matching section of the
            current configuration; untouched sections are inherited.

    Example:
        override_config = ConfigData()
        override_config.database.backend = "memory"
        with with_context(override_config):
            assert get_config().database.backend == "memory"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        reset_context(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration with ``config``."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
