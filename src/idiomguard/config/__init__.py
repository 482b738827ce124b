"""
Configuration management.

- YAML configuration loading and validation
- Environment variable substitution and IDIOMGUARD_* overrides
- Settings for assertions, the default value source and logging
"""

from idiomguard.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATHS,
    ENV_VAR_OVERRIDES,
    ConfigLoader,
    ConfigurationError,
    get_config,
    load_config,
    load_config_from_env,
    reset_config,
)
from idiomguard.config.models import (
    ConstructorConfig,
    EqualityConfig,
    GuardClauseConfig,
    IdiomguardConfig,
    LoggingConfig,
    LogLevel,
    ValueSourceConfig,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATHS",
    "ENV_VAR_OVERRIDES",
    "ConfigLoader",
    "ConfigurationError",
    "ConstructorConfig",
    "EqualityConfig",
    "GuardClauseConfig",
    "IdiomguardConfig",
    "LogLevel",
    "LoggingConfig",
    "ValueSourceConfig",
    "get_config",
    "load_config",
    "load_config_from_env",
    "reset_config",
]
