"""
Configuration Data Models.

Defines the configuration schemas for assertions, the default value
source and logging, using Pydantic for validation.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels accepted by the configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GuardClauseConfig(BaseModel):
    """Configuration for the guard clause assertion.

    Attributes:
        unannotated_is_reference: Probe unannotated parameters with None
        exercise_generators: Advance returned generators once
        await_coroutines: Run returned coroutines to completion
        include_private: Check single-underscore methods
        include_inherited: Check methods declared on base classes
    """

    unannotated_is_reference: bool = Field(
        default=True,
        description="Probe unannotated parameters with None",
    )
    exercise_generators: bool = Field(
        default=True,
        description="Advance returned generators once",
    )
    await_coroutines: bool = Field(
        default=True,
        description="Run returned coroutines to completion",
    )
    include_private: bool = Field(
        default=False,
        description="Check single-underscore methods",
    )
    include_inherited: bool = Field(
        default=False,
        description="Check methods declared on base classes",
    )


class ConstructorConfig(BaseModel):
    """Configuration for the constructor-initialized-member assertion.

    Attributes:
        case_sensitive: Match parameter and member names case-sensitively
        max_distinct_attempts: Attempts to obtain a value distinct from the others
    """

    case_sensitive: bool = Field(
        default=False,
        description="Case-sensitive name matching",
    )
    max_distinct_attempts: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Attempts to obtain a distinct value",
    )


class EqualityConfig(BaseModel):
    """Configuration for the equality micro-assertions."""

    successive_calls: int = Field(
        default=3,
        ge=2,
        le=100,
        description="Repetitions for successive-call checks",
    )


class ValueSourceConfig(BaseModel):
    """Configuration for the default specimen factory.

    Attributes:
        repeat_count: Number of items in generated collections
        string_prefix: Prefix for generated strings
    """

    repeat_count: int = Field(
        default=3,
        ge=1,
        le=100,
        description="Items per generated collection",
    )
    string_prefix: str = Field(
        default="",
        description="Prefix for generated strings",
    )


class LoggingConfig(BaseModel):
    """Configuration for the idiomguard logger hierarchy."""

    level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Log level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log record format",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class IdiomguardConfig(BaseModel):
    """Root configuration.

    Attributes:
        guard_clause: Guard clause assertion settings
        constructor: Constructor wiring assertion settings
        equality: Equality assertion settings
        value_source: Default value source settings
        logging: Logging settings
    """

    guard_clause: GuardClauseConfig = Field(
        default_factory=GuardClauseConfig,
        description="Guard clause settings",
    )
    constructor: ConstructorConfig = Field(
        default_factory=ConstructorConfig,
        description="Constructor wiring settings",
    )
    equality: EqualityConfig = Field(
        default_factory=EqualityConfig,
        description="Equality settings",
    )
    value_source: ValueSourceConfig = Field(
        default_factory=ValueSourceConfig,
        description="Value source settings",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )

    def to_yaml_dict(self) -> dict[str, Any]:
        """Convert to YAML-friendly dictionary."""
        return self.model_dump(mode="json", exclude_none=True)
