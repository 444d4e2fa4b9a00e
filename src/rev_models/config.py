"""
Runtime configuration for rev_models.

Settings are read once from environment variables and cached:

- REV_MODELS_VALIDATION_TIMEOUT: seconds before validation gives up (default 5.0)
- REV_MODELS_READ_LIMIT: default page size for read() (default 20)
- REV_MODELS_DEFAULT_BACKEND: backend name used by models that don't set one
- REV_MODELS_LOG_LEVEL: level used by setup_logging() when none is passed
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import cache

from rev_models.errors import ConfigurationError


@dataclass(frozen=True)
class ModelsConfig:
    """Configuration loaded from environment variables.

    Attributes:
        validation_timeout: Seconds allowed for a whole validate() call
        default_read_limit: Page size used when read() is not given a limit
        default_backend: Backend name assigned to models without one
        log_level: Default logging level name
    """

    validation_timeout: float = 5.0
    default_read_limit: int = 20
    default_backend: str = "default"
    log_level: str = "INFO"


def _env_number(name: str, default: float, cast: type[int] | type[float]) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be greater than zero, got '{raw}'")
    return value


@cache
def get_config() -> ModelsConfig:
    """Load configuration from environment variables.

    Returns:
        ModelsConfig with validated settings.

    Raises:
        ConfigurationError: If a numeric setting cannot be parsed or is not positive.
    """
    return ModelsConfig(
        validation_timeout=float(
            _env_number("REV_MODELS_VALIDATION_TIMEOUT", 5.0, float)
        ),
        default_read_limit=int(_env_number("REV_MODELS_READ_LIMIT", 20, int)),
        default_backend=os.environ.get("REV_MODELS_DEFAULT_BACKEND") or "default",
        log_level=(os.environ.get("REV_MODELS_LOG_LEVEL") or "INFO").upper(),
    )


def reset_config() -> None:
    """Clear the cached configuration (used by tests after changing the environment)."""
    get_config.cache_clear()
