"""Centralized logging initialization for all entry points.

Provides a single source of truth for lib_log_rich runtime configuration,
shared by module execution and console scripts, and ensures initialization
happens exactly once.

Contents:
    * :func:`init_logging` – idempotent logging initialization from a resolved store.
    * :func:`translate_log_level` – maps ``Logging:LogLevel:Default`` names to lib_log_rich levels.
    * :func:`_build_runtime_config` – constructs RuntimeConfig from the store.

Settings are read from the ``lib_log_rich`` section of the resolved store.
When that section does not set ``console_level``, the conventional
``Logging:LogLevel:Default`` key is translated instead.
"""

from __future__ import annotations

import lib_log_rich.config
import lib_log_rich.runtime
from pydantic import BaseModel, ConfigDict

from layered_appsettings import __init__conf__
from layered_appsettings.adapters.config.binding import coerce_value
from layered_appsettings.domain.store import ConfigurationStore

LOGGING_SECTION = "lib_log_rich"
DEFAULT_LOG_LEVEL_KEY = "Logging:LogLevel:Default"

_LEVEL_NAMES = {
    "trace": "DEBUG",
    "debug": "DEBUG",
    "information": "INFO",
    "info": "INFO",
    "warning": "WARNING",
    "error": "ERROR",
    "critical": "CRITICAL",
    "none": "CRITICAL",
}


class LoggingConfigModel(BaseModel):
    """Pydantic model for the ``lib_log_rich`` section.

    Extra fields are allowed to pass through to lib_log_rich.RuntimeConfig.

    Example:
        >>> model = LoggingConfigModel(service="myapp", environment="staging")
        >>> model.service
        'myapp'

        >>> LoggingConfigModel().environment
        'prod'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def translate_log_level(level: str | None) -> str | None:
    """Map a ``Logging:LogLevel`` name onto a lib_log_rich console level.

    Example:
        >>> translate_log_level("Information")
        'INFO'
        >>> translate_log_level("Trace")
        'DEBUG'
        >>> translate_log_level("verbose") is None
        True
    """
    if not level:
        return None
    return _LEVEL_NAMES.get(level.strip().casefold())


def _section_values(store: ConfigurationStore) -> dict[str, object]:
    section = store.get_section(LOGGING_SECTION)
    data = section.to_data()
    if not isinstance(data, dict):
        return {}
    return {name.lower(): value for name, value in data.items() if value is not None}


def _build_runtime_config(store: ConfigurationStore) -> lib_log_rich.runtime.RuntimeConfig:
    """Build RuntimeConfig from a resolved store.

    Uses Pydantic for single-parse validation at the boundary. Extra string
    values are coerced (``"true"`` → ``True``, ``"500"`` → ``500``) since
    the store only holds strings.
    """
    parsed = LoggingConfigModel.model_validate(_section_values(store))

    service = parsed.service or __init__conf__.name
    extra_config = {
        name: coerce_value(value) if isinstance(value, str) else value
        for name, value in parsed.model_dump(exclude={"service", "environment"}, exclude_none=True).items()
    }

    if "console_level" not in extra_config:
        level = translate_log_level(store.get(DEFAULT_LOG_LEVEL_KEY))
        if level is not None:
            extra_config["console_level"] = level

    return lib_log_rich.runtime.RuntimeConfig(
        service=service,
        environment=parsed.environment,
        **extra_config,
    )


def init_logging(store: ConfigurationStore) -> None:
    """Initialize lib_log_rich runtime from the resolved configuration store.

    Safe to call multiple times: the first call loads .env files (making
    LOG_* variables available), initializes the runtime and bridges standard
    Python logging; later calls return immediately.

    Args:
        store: Resolved configuration store.

    Example:
        >>> init_logging(ConfigurationStore.empty())  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    runtime_config = _build_runtime_config(store)
    lib_log_rich.runtime.init(runtime_config)
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
    "translate_log_level",
]
