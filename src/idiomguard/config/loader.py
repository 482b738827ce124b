"""
Configuration Loader.

Loads and validates configuration from YAML files with environment
variable substitution and ``IDIOMGUARD_*`` overrides.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from idiomguard.config.models import IdiomguardConfig

logger = logging.getLogger(__name__)

# Default configuration file locations
DEFAULT_CONFIG_PATHS = [
    "idiomguard.yaml",
    "idiomguard.yml",
    ".idiomguard.yaml",
    ".idiomguard.yml",
]

# Environment variable for config path
CONFIG_ENV_VAR = "IDIOMGUARD_CONFIG"

# Maps env var name to config path (dot-separated)
ENV_VAR_OVERRIDES = {
    "IDIOMGUARD_LOG_LEVEL": "logging.level",
    "IDIOMGUARD_REPEAT_COUNT": "value_source.repeat_count",
    "IDIOMGUARD_SUCCESSIVE_CALLS": "equality.successive_calls",
    "IDIOMGUARD_INCLUDE_PRIVATE": "guard_clause.include_private",
    "IDIOMGUARD_INCLUDE_INHERITED": "guard_clause.include_inherited",
}


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        path: Path | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            errors: List of validation errors (from Pydantic)
            path: Path to the config file that caused the error
        """
        super().__init__(message)
        self.errors = errors or []
        self.path = path

    def __str__(self) -> str:
        """Format error message with details."""
        msg = super().__str__()
        if self.path:
            msg = f"{msg} (file: {self.path})"
        if self.errors:
            details = []
            for err in self.errors[:5]:
                loc = ".".join(str(x) for x in err.get("loc", []))
                details.append(f"  - {loc}: {err.get('msg', 'Unknown error')}")
            if len(self.errors) > 5:
                details.append(f"  ... and {len(self.errors) - 5} more errors")
            msg = f"{msg}\n" + "\n".join(details)
        return msg


class ConfigLoader:
    """Loads configuration from YAML files.

    Supports:
    - YAML configuration files
    - Environment variable substitution (${VAR} and ${VAR:-default} syntax)
    - IDIOMGUARD_* environment overrides
    - Validation via Pydantic

    Usage:
        loader = ConfigLoader("idiomguard.yaml")
        config = loader.load()

        # Search IDIOMGUARD_CONFIG and the default locations
        config = ConfigLoader().load_from_env()
    """

    # Matches ${VAR_NAME}, ${VAR_NAME:-default} and ${VAR_NAME:default}
    ENV_PATTERN = re.compile(r"\$\{(\w+)(?::-?([^}]*))?\}")

    def __init__(self, config_path: str | Path | None = None) -> None:
        """Initialize the config loader.

        Args:
            config_path: Path to YAML config file (optional)
        """
        self._config_path = Path(config_path) if config_path else None
        self._config: IdiomguardConfig | None = None
        self._loaded_from_path: Path | None = None

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    @property
    def loaded_from_path(self) -> Path | None:
        """Path the config was actually loaded from, if any."""
        return self._loaded_from_path

    @property
    def config(self) -> IdiomguardConfig | None:
        return self._config

    def load(self, path: str | Path | None = None) -> IdiomguardConfig:
        """Load and validate configuration.

        Without a path every setting takes its default, after environment
        overrides are applied.

        Args:
            path: Optional path overriding the one given in __init__

        Returns:
            Validated IdiomguardConfig

        Raises:
            ConfigurationError: If config is invalid
            FileNotFoundError: If config file not found
        """
        if path is not None:
            self._config_path = Path(path)

        raw: dict[str, Any] = {}
        if self._config_path:
            raw = self._load_yaml()
        self._loaded_from_path = self._config_path

        processed = self._substitute_env_vars(raw)
        processed = self._apply_env_overrides(processed)
        # YAML parses empty sections as None; drop them so defaults apply
        processed = self._clean_none_values(processed)

        try:
            self._config = IdiomguardConfig(**processed)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e.error_count()} errors",
                errors=e.errors(),
                path=self._loaded_from_path,
            ) from e

        logger.debug("Loaded configuration from %s", self._loaded_from_path or "defaults")
        return self._config

    def load_from_env(self) -> IdiomguardConfig:
        """Load configuration from IDIOMGUARD_CONFIG or the default locations.

        Falls back to defaults when no file is found.

        Raises:
            ConfigurationError: If config is invalid
            FileNotFoundError: If IDIOMGUARD_CONFIG points to a missing file
        """
        env_config_path = os.environ.get(CONFIG_ENV_VAR)
        if env_config_path:
            config_path = Path(env_config_path)
            if not config_path.exists():
                raise FileNotFoundError(
                    f"Config file specified by {CONFIG_ENV_VAR} not found: {env_config_path}"
                )
            return self.load(config_path)

        for default_path in DEFAULT_CONFIG_PATHS:
            path = Path(default_path)
            if path.exists():
                return self.load(path)

        return self.load()

    def _load_yaml(self) -> dict[str, Any]:
        if not self._config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self._config_path}")

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}", path=self._config_path) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration root must be a mapping", path=self._config_path
            )
        return data

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively substitute ${VAR} references."""
        if isinstance(data, dict):
            return {k: self._substitute_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        elif isinstance(data, str):
            return self._substitute_string(data)
        return data

    def _clean_none_values(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: self._clean_none_values(v) for k, v in data.items() if v is not None}
        elif isinstance(data, list):
            return [self._clean_none_values(item) for item in data]
        return data

    def _substitute_string(self, value: str) -> Any:
        """Substitute environment variables in a string.

        A string that is exactly one reference is type-coerced; embedded
        references are substituted textually. Unset variables without a
        default are left as-is so validation reports them.
        """
        full_match = self.ENV_PATTERN.fullmatch(value)
        if full_match:
            env_value = os.environ.get(full_match.group(1))
            resolved = env_value if env_value is not None else full_match.group(2)
            return self._coerce_type(resolved) if resolved is not None else value

        def replace(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            if match.group(2) is not None:
                return match.group(2)
            return match.group(0)

        return self.ENV_PATTERN.sub(replace, value)

    def _coerce_type(self, value: str) -> Any:
        """Coerce string value to bool, int, float, None or str."""
        if value == "":
            return None

        lower_value = value.lower()
        if lower_value in ("true", "yes", "on"):
            return True
        if lower_value in ("false", "no", "off"):
            return False

        try:
            if "." not in value and "e" not in lower_value:
                return int(value)
            return float(value)
        except ValueError:
            pass
        return value

    def _apply_env_overrides(self, config_dict: dict[str, Any]) -> dict[str, Any]:
        """Apply IDIOMGUARD_* overrides, which take precedence over the file."""
        for env_var, config_path in ENV_VAR_OVERRIDES.items():
            env_value = os.environ.get(env_var)
            if env_value is not None:
                self._set_nested_value(config_dict, config_path, self._coerce_type(env_value))
        return config_dict

    def _set_nested_value(self, config_dict: dict[str, Any], path: str, value: Any) -> None:
        parts = path.split(".")
        current = config_dict
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value

    def save(self, path: str | Path | None = None) -> None:
        """Save current configuration to a YAML file.

        Raises:
            ValueError: If no config loaded or no path specified
        """
        if self._config is None:
            raise ValueError("No configuration loaded")

        save_path = Path(path) if path else self._config_path
        if save_path is None:
            raise ValueError("No path specified for saving")

        with open(save_path, "w") as f:
            yaml.safe_dump(
                self._config.to_yaml_dict(),
                f,
                default_flow_style=False,
                sort_keys=False,
            )


# Global configuration cache
_global_config: IdiomguardConfig | None = None


def load_config(config_path: str | Path | None = None) -> IdiomguardConfig:
    """Load configuration from a file and cache it globally."""
    global _global_config

    _global_config = ConfigLoader(config_path).load()
    return _global_config


def load_config_from_env() -> IdiomguardConfig:
    """Load configuration from IDIOMGUARD_CONFIG or default locations and cache it."""
    global _global_config

    _global_config = ConfigLoader().load_from_env()
    return _global_config


def get_config() -> IdiomguardConfig:
    """Get the global configuration, loading it from the environment on first use."""
    if _global_config is None:
        return load_config_from_env()
    return _global_config


def reset_config() -> None:
    """Clear the cached configuration. Useful for testing."""
    global _global_config
    _global_config = None
