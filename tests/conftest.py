"""
idiomguard Test Configuration and Fixtures

Fixture Categories:
- Value sources: fresh SpecimenFactory instances
- Configuration: isolation from IDIOMGUARD_* environment variables
- Members: descriptors for commonly inspected sample members
"""

import logging

import pytest

from idiomguard.config import CONFIG_ENV_VAR, ENV_VAR_OVERRIDES, reset_config
from idiomguard.reflection import constructors_of, methods_of
from idiomguard.valuesource import SpecimenFactory
from tests.fixtures import sample_types as samples

# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Clear IDIOMGUARD_* variables and the cached global config."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    for var in ENV_VAR_OVERRIDES:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clean_package_logger():
    """Remove handlers added to the idiomguard logger during a test."""
    logger = logging.getLogger("idiomguard")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)


# =============================================================================
# Value Sources
# =============================================================================


@pytest.fixture
def factory() -> SpecimenFactory:
    """A fresh specimen factory with default settings."""
    return SpecimenFactory()


# =============================================================================
# Member Fixtures
# =============================================================================


@pytest.fixture
def guarded_constructor():
    """Constructor of a class that guards both of its parameters."""
    return constructors_of(samples.GuardedService)[0]


@pytest.fixture
def greeter_methods():
    """Methods of Greeter keyed by name."""
    return {m.name: m for m in methods_of(samples.Greeter)}
