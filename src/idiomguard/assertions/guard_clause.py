"""
Guard clause assertion.

Checks that constructors and methods reject ``None`` for every parameter
that cannot legitimately be ``None``. Each probe holds all other
parameters at arbitrary valid values from the value source, replaces
exactly one parameter with ``None``, invokes the member and classifies
the outcome. A failure is attributed to the parameter that received
``None``.

The first unguarded parameter raises a ``GuardClauseViolation``; the
remaining parameters are not probed.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from idiomguard.assertions.base import IdiomaticAssertion
from idiomguard.config.models import GuardClauseConfig
from idiomguard.errors import GuardClauseViolation
from idiomguard.models.base import FailureClassification, MemberKind
from idiomguard.models.metadata import MemberDescriptor, ParameterDescriptor
from idiomguard.models.outcome import InvocationOutcome
from idiomguard.reflection.introspection import (
    can_represent_absence,
    constructors_of,
    is_constructible,
    methods_of,
)
from idiomguard.reflection.invoker import invoke
from idiomguard.valuesource.base import ValueSource

logger = logging.getLogger(__name__)


# =============================================================================
# Guard failure expectations
# =============================================================================


class GuardFailureExpectation(ABC):
    """Decides whether an invocation outcome is the expected guard failure."""

    @abstractmethod
    def is_expected_guard_failure(self, outcome: InvocationOutcome, parameter_name: str) -> bool:
        """Check whether the outcome shows the parameter was guarded.

        Args:
            outcome: Outcome of invoking the member with the boundary value
            parameter_name: Name of the parameter that received the boundary value

        Returns:
            True if the member rejected the value as expected
        """
        ...

    def describe(self, parameter_name: str) -> str:
        """Describe the expected behaviour for violation messages."""
        return f"a guard failure for '{parameter_name}'"


class InvalidArgumentExpectation(GuardFailureExpectation):
    """Expects an invalid-argument failure whose message names the parameter.

    ``ValueError`` and ``TypeError`` are classified as invalid-argument.
    The name must appear as a whole word, so ``dependency`` does not
    match a message about ``first_dependency``.
    """

    def is_expected_guard_failure(self, outcome: InvocationOutcome, parameter_name: str) -> bool:
        failure = outcome.failure
        if failure is None or failure.classification != FailureClassification.INVALID_ARGUMENT:
            return False
        return re.search(rf"\b{re.escape(parameter_name)}\b", failure.message) is not None

    def describe(self, parameter_name: str) -> str:
        return f"ValueError or TypeError whose message names '{parameter_name}'"


class PredicateExpectation(GuardFailureExpectation):
    """Adapts a plain ``(outcome, parameter_name) -> bool`` callable."""

    def __init__(
        self,
        predicate: Callable[[InvocationOutcome, str], bool],
        description: str = "",
    ) -> None:
        if predicate is None:
            raise ValueError("predicate must not be None")
        self._predicate = predicate
        self._description = description

    def is_expected_guard_failure(self, outcome: InvocationOutcome, parameter_name: str) -> bool:
        return bool(self._predicate(outcome, parameter_name))

    def describe(self, parameter_name: str) -> str:
        return self._description or super().describe(parameter_name)


class CompositeExpectation(GuardFailureExpectation):
    """Accepts an outcome when any child expectation accepts it."""

    def __init__(self, *expectations: GuardFailureExpectation) -> None:
        if not expectations:
            raise ValueError("expectations must not be empty")
        self._expectations = expectations

    @property
    def expectations(self) -> tuple[GuardFailureExpectation, ...]:
        return self._expectations

    def is_expected_guard_failure(self, outcome: InvocationOutcome, parameter_name: str) -> bool:
        return any(
            e.is_expected_guard_failure(outcome, parameter_name) for e in self._expectations
        )

    def describe(self, parameter_name: str) -> str:
        return " or ".join(e.describe(parameter_name) for e in self._expectations)


# =============================================================================
# Assertion
# =============================================================================


class GuardClauseAssertion(IdiomaticAssertion):
    """Verifies that constructors and methods guard their parameters against None.

    Usage:
        assertion = GuardClauseAssertion(SpecimenFactory())
        assertion.verify(Order)                      # constructor and methods
        assertion.verify(constructors_of(Order))     # constructors only
        assertion.verify(my_module)                  # every public class and function

    Attributes:
        value_source: Source of arbitrary values for the other parameters
        expectation: Classifies outcomes as guarded or not
        settings: Guard clause configuration
    """

    def __init__(
        self,
        value_source: ValueSource,
        expectation: GuardFailureExpectation | Callable[[InvocationOutcome, str], bool] | None = None,
        settings: GuardClauseConfig | None = None,
    ) -> None:
        """Initialize the assertion.

        Args:
            value_source: Source of arbitrary valid values
            expectation: Expectation object or ``(outcome, name) -> bool`` predicate;
                defaults to InvalidArgumentExpectation
            settings: Guard clause configuration
        """
        if value_source is None:
            raise ValueError("value_source must not be None")
        if expectation is None:
            expectation = InvalidArgumentExpectation()
        elif not hasattr(expectation, "is_expected_guard_failure"):
            expectation = PredicateExpectation(expectation)
        self._value_source = value_source
        self._expectation = expectation
        self._settings = settings or GuardClauseConfig()

    @property
    def value_source(self) -> ValueSource:
        return self._value_source

    @property
    def expectation(self) -> GuardFailureExpectation:
        return self._expectation

    @property
    def settings(self) -> GuardClauseConfig:
        return self._settings

    def verify_type(self, cls: type) -> None:
        """Verify the constructor and methods; properties and fields are skipped."""
        logger.debug("Guard clauses: verifying type %s", cls.__qualname__)
        methods = methods_of(
            cls,
            include_private=self._settings.include_private,
            include_inherited=self._settings.include_inherited,
        )
        if not is_constructible(cls):
            logger.debug(
                "%s cannot be instantiated; only its static and class methods are checked",
                cls.__qualname__,
            )
            methods = [
                m
                for m in methods
                if m.is_static and not getattr(m.target, "__isabstractmethod__", False)
            ]
        self.verify_members([*constructors_of(cls), *methods])

    def verify_constructor(self, member: MemberDescriptor) -> None:
        self._verify_guards(member)

    def verify_method(self, member: MemberDescriptor) -> None:
        self._verify_guards(member)

    def _verify_guards(self, member: MemberDescriptor) -> None:
        for parameter in member.parameters:
            if not can_represent_absence(parameter, self._settings.unannotated_is_reference):
                logger.debug(
                    "Skipping %s in %s: None is not a boundary value",
                    parameter.name,
                    member.qualified_name,
                )
                continue

            outcome = self._probe(member, parameter)
            if not self._expectation.is_expected_guard_failure(outcome, parameter.name):
                logger.info(
                    "%s does not guard '%s': %s",
                    member.qualified_name,
                    parameter.name,
                    outcome.describe(),
                )
                raise GuardClauseViolation(
                    f"{member.qualified_name} does not guard parameter "
                    f"'{parameter.name}' against None",
                    member=member,
                    target_name=parameter.name,
                    expected=self._expectation.describe(parameter.name),
                    observed=outcome.describe(),
                )

    def _probe(self, member: MemberDescriptor, boundary: ParameterDescriptor) -> InvocationOutcome:
        """Invoke the member with None for one parameter and valid values elsewhere."""
        arguments = [
            None if parameter.position == boundary.position else self._create(parameter)
            for parameter in member.parameters
        ]
        owner = None
        if not member.is_static and member.kind != MemberKind.CONSTRUCTOR:
            owner = self._value_source.create(member.declaring_type)

        logger.debug("Probing %s with %s=None", member.qualified_name, boundary.name)
        return invoke(
            member,
            arguments,
            owner=owner,
            exercise_generators=self._settings.exercise_generators,
            await_coroutines=self._settings.await_coroutines,
        )

    def _create(self, parameter: ParameterDescriptor) -> Any:
        return self._value_source.create(parameter.annotation if parameter.is_annotated else object)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(expectation={self._expectation.__class__.__name__})"
