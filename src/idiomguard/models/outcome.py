"""
Invocation outcome models.

A member invocation never lets an exception escape into the assertion
algorithms. It yields an ``InvocationOutcome`` that is either a produced
value or a classified failure, and the algorithms match on that.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from idiomguard.models.base import FailureClassification


@dataclass(frozen=True)
class InvocationFailure:
    """A failure raised by an invoked member.

    Attributes:
        classification: Classification tag derived from the exception
        message: Exception message
        exception: The original exception, kept for diagnostics
    """

    classification: FailureClassification
    message: str
    exception: Optional[BaseException] = field(default=None, compare=False)

    @property
    def exception_type(self) -> str:
        if self.exception is None:
            return self.classification.value
        return type(self.exception).__name__

    def describe(self) -> str:
        return f"{self.exception_type}: {self.message}"


@dataclass(frozen=True)
class InvocationOutcome:
    """Result of invoking a member: a value or a failure, never both."""

    value: Any = None
    failure: Optional[InvocationFailure] = None

    @classmethod
    def success(cls, value: Any) -> "InvocationOutcome":
        return cls(value=value)

    @classmethod
    def failed(
        cls,
        classification: FailureClassification,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> "InvocationOutcome":
        return cls(failure=InvocationFailure(classification, message, exception))

    @property
    def succeeded(self) -> bool:
        return self.failure is None

    def describe(self) -> str:
        """Short description used as the observed behaviour in violations."""
        if self.failure is None:
            return f"returned normally ({self.value!r})"
        return f"raised {self.failure.describe()}"
