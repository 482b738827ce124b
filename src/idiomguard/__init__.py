"""
idiomguard: reflective assertions for Python coding idioms.

Verifies guard clauses, constructor-to-member wiring and equality
contracts by inspecting classes and modules and invoking their members
with generated values, instead of a hand-written test per parameter.

Example:
    from idiomguard import GuardClauseAssertion, SpecimenFactory

    assertion = GuardClauseAssertion(SpecimenFactory())
    assertion.verify(Order)        # raises GuardClauseViolation if unguarded
"""

from idiomguard.assertions import (
    CompositeAssertion,
    ConstructorInitializedMemberAssertion,
    EqualsNewObjectAssertion,
    EqualsNoneAssertion,
    EqualsSelfAssertion,
    EqualsSuccessiveAssertion,
    GuardClauseAssertion,
    HashSuccessiveAssertion,
    IdiomaticAssertion,
    InvalidArgumentExpectation,
    WritablePropertyAssertion,
    default_assertions,
    equality_assertions,
)
from idiomguard.errors import (
    ConstructionWiringViolation,
    EqualityContractViolation,
    GuardClauseViolation,
    IdiomViolation,
    ValueGenerationError,
    WritablePropertyViolation,
)
from idiomguard.models import MemberDescriptor, MemberKind, ParameterDescriptor
from idiomguard.utils.logging import configure_logging
from idiomguard.valuesource import SpecimenFactory, ValueSource
from idiomguard.version import __version__

__all__ = [
    "__version__",
    "CompositeAssertion",
    "ConstructionWiringViolation",
    "ConstructorInitializedMemberAssertion",
    "EqualityContractViolation",
    "EqualsNewObjectAssertion",
    "EqualsNoneAssertion",
    "EqualsSelfAssertion",
    "EqualsSuccessiveAssertion",
    "GuardClauseAssertion",
    "GuardClauseViolation",
    "HashSuccessiveAssertion",
    "IdiomViolation",
    "IdiomaticAssertion",
    "InvalidArgumentExpectation",
    "MemberDescriptor",
    "MemberKind",
    "ParameterDescriptor",
    "SpecimenFactory",
    "ValueGenerationError",
    "ValueSource",
    "WritablePropertyAssertion",
    "WritablePropertyViolation",
    "configure_logging",
    "default_assertions",
    "equality_assertions",
]
