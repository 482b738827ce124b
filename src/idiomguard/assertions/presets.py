"""Ready-made assertion bundles."""

from idiomguard.assertions.composite import CompositeAssertion
from idiomguard.assertions.constructor_initialized import ConstructorInitializedMemberAssertion
from idiomguard.assertions.equality import (
    EqualsNewObjectAssertion,
    EqualsNoneAssertion,
    EqualsSelfAssertion,
    EqualsSuccessiveAssertion,
    HashSuccessiveAssertion,
)
from idiomguard.assertions.guard_clause import GuardClauseAssertion
from idiomguard.assertions.writable_property import WritablePropertyAssertion
from idiomguard.config.models import EqualityConfig, IdiomguardConfig
from idiomguard.valuesource.base import ValueSource
from idiomguard.valuesource.factory import SpecimenFactory


def equality_assertions(
    value_source: ValueSource,
    settings: EqualityConfig | None = None,
) -> CompositeAssertion:
    """All five equality micro-assertions, in a fixed order."""
    return CompositeAssertion(
        EqualsSelfAssertion(value_source, settings),
        EqualsNoneAssertion(value_source, settings),
        EqualsNewObjectAssertion(value_source, settings),
        EqualsSuccessiveAssertion(value_source, settings),
        HashSuccessiveAssertion(value_source, settings),
    )


def default_assertions(
    config: IdiomguardConfig | None = None,
    value_source: ValueSource | None = None,
) -> CompositeAssertion:
    """Every idiom check, configured from one IdiomguardConfig.

    Args:
        config: Settings for each assertion (defaults to IdiomguardConfig())
        value_source: Value source (defaults to a SpecimenFactory built from config)

    Returns:
        Guard clauses, constructor wiring, writable properties and equality
    """
    config = config or IdiomguardConfig()
    if value_source is None:
        value_source = SpecimenFactory(config.value_source)
    return CompositeAssertion(
        GuardClauseAssertion(value_source, settings=config.guard_clause),
        ConstructorInitializedMemberAssertion(value_source, settings=config.constructor),
        WritablePropertyAssertion(value_source),
        equality_assertions(value_source, config.equality),
    )
