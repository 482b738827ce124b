"""
Idiomatic assertions.

Each assertion checks one coding convention and can be pointed at a
module, a class, a collection of members or a single member.
"""

from idiomguard.assertions.base import IdiomaticAssertion
from idiomguard.assertions.composite import CompositeAssertion
from idiomguard.assertions.constructor_initialized import (
    ConstructorInitializedMemberAssertion,
)
from idiomguard.assertions.equality import (
    EqualityAssertion,
    EqualsNewObjectAssertion,
    EqualsNoneAssertion,
    EqualsSelfAssertion,
    EqualsSuccessiveAssertion,
    HashSuccessiveAssertion,
)
from idiomguard.assertions.guard_clause import (
    CompositeExpectation,
    GuardClauseAssertion,
    GuardFailureExpectation,
    InvalidArgumentExpectation,
    PredicateExpectation,
)
from idiomguard.assertions.presets import default_assertions, equality_assertions
from idiomguard.assertions.writable_property import WritablePropertyAssertion

__all__ = [
    "CompositeAssertion",
    "CompositeExpectation",
    "ConstructorInitializedMemberAssertion",
    "EqualityAssertion",
    "EqualsNewObjectAssertion",
    "EqualsNoneAssertion",
    "EqualsSelfAssertion",
    "EqualsSuccessiveAssertion",
    "GuardClauseAssertion",
    "GuardFailureExpectation",
    "HashSuccessiveAssertion",
    "IdiomaticAssertion",
    "InvalidArgumentExpectation",
    "PredicateExpectation",
    "WritablePropertyAssertion",
    "default_assertions",
    "equality_assertions",
]
