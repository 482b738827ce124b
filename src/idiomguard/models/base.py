"""
Base enumerations used throughout the metadata and outcome models.

These enums provide type-safe values for the categorical fields the
assertion engine dispatches and pattern-matches on.
"""

from enum import Enum


class MemberKind(str, Enum):
    """Kind of member a descriptor identifies.

    Assertions dispatch on this value; each kind maps to one
    ``verify_<kind>`` leaf on the assertion base class.
    """

    CONSTRUCTOR = "constructor"
    METHOD = "method"
    PROPERTY = "property"
    FIELD = "field"


class FailureClassification(str, Enum):
    """Classification tag carried by a failed invocation.

    Guard expectations match on the tag rather than on exception types.
    """

    INVALID_ARGUMENT = "invalid_argument"  # ValueError, TypeError
    NOT_IMPLEMENTED = "not_implemented"  # NotImplementedError
    UNEXPECTED = "unexpected"  # Anything else
