"""
Violation and failure types.

Violations subclass ``AssertionError`` so test runners report them as
ordinary assertion failures. ``ValueGenerationError`` is not a
violation: it means the engine could not build the inputs it needed.
"""

from typing import Any, Optional

from idiomguard.models.metadata import MemberDescriptor


class IdiomViolation(AssertionError):
    """Base class for all idiom violations.

    The rendered message names the declaring type, the member signature
    and the offending parameter or member, so it can be diagnosed without
    knowledge of the engine.
    """

    kind = "Idiom violation"

    def __init__(
        self,
        message: str,
        member: Optional[MemberDescriptor] = None,
        target_name: Optional[str] = None,
        expected: Optional[str] = None,
        observed: Optional[str] = None,
        declaring_type: Optional[type] = None,
    ) -> None:
        """Initialize the violation.

        Args:
            message: Short statement of what went wrong
            member: Member that broke the idiom
            target_name: Offending parameter or member name
            expected: Expected behaviour
            observed: Observed behaviour
            declaring_type: Declaring type (defaults to member's)
        """
        super().__init__(message)
        self.message = message
        self.member = member
        self.target_name = target_name
        self.expected = expected
        self.observed = observed
        if declaring_type is None and member is not None:
            declaring_type = member.declaring_type
        self.declaring_type = declaring_type

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        if self.declaring_type is not None:
            lines.append(
                f"  Type: {self.declaring_type.__module__}.{self.declaring_type.__qualname__}"
            )
        if self.member is not None:
            lines.append(f"  Member: {self.member.signature}")
        if self.target_name is not None:
            lines.append(f"  Name: {self.target_name}")
        if self.expected is not None:
            lines.append(f"  Expected: {self.expected}")
        if self.observed is not None:
            lines.append(f"  Observed: {self.observed}")
        return "\n".join(lines)


class GuardClauseViolation(IdiomViolation):
    """A parameter does not reject the boundary value, or rejects it for the wrong reason."""

    kind = "Guard clause violation"

    @property
    def parameter_name(self) -> Optional[str]:
        return self.target_name


class ConstructionWiringViolation(IdiomViolation):
    """A member does not expose the exact value passed to the constructor."""

    kind = "Construction wiring violation"

    def __init__(
        self,
        message: str,
        member: Optional[MemberDescriptor] = None,
        parameter_name: Optional[str] = None,
        member_name: Optional[str] = None,
        expected: Optional[str] = None,
        observed: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            member=member,
            target_name=f"{parameter_name} -> {member_name}",
            expected=expected,
            observed=observed,
        )
        self.parameter_name = parameter_name
        self.member_name = member_name


class EqualityContractViolation(IdiomViolation):
    """A named equality or hashing invariant does not hold."""

    kind = "Equality contract violation"

    def __init__(
        self,
        message: str,
        invariant: str,
        declaring_type: Optional[type] = None,
        expected: Optional[str] = None,
        observed: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            target_name=invariant,
            expected=expected,
            observed=observed,
            declaring_type=declaring_type,
        )
        self.invariant = invariant


class WritablePropertyViolation(IdiomViolation):
    """A writable property or field does not return the value assigned to it."""

    kind = "Writable property violation"


class ValueGenerationError(Exception):
    """Raised when a value source cannot manufacture a value for a type."""

    def __init__(self, message: str, requested: Any = None) -> None:
        super().__init__(message)
        self.requested = requested
