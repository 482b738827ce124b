"""
Equality micro-assertions.

Five small, independent checks of the ``__eq__``/``__hash__`` contract,
each targeting a whole class:

- EqualsSelfAssertion: ``x == x``
- EqualsNoneAssertion: ``x != None``
- EqualsNewObjectAssertion: ``x != object()``
- EqualsSuccessiveAssertion: ``x == y`` is stable across calls
- HashSuccessiveAssertion: ``hash(x)`` is stable across calls

Classes that inherit ``object``'s identity equality are skipped, as are
member-level targets. Symmetry and transitivity across independent
objects are not checked.
"""

import logging
import operator
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from idiomguard.assertions.base import IdiomaticAssertion
from idiomguard.config.models import EqualityConfig
from idiomguard.errors import EqualityContractViolation
from idiomguard.reflection.introspection import is_constructible
from idiomguard.valuesource.base import ValueSource

logger = logging.getLogger(__name__)


def overrides_equality(cls: type) -> bool:
    """Check whether a class defines its own ``__eq__``."""
    return getattr(cls, "__eq__", object.__eq__) is not object.__eq__


def overrides_hash(cls: type) -> bool:
    """Check whether a class defines a usable ``__hash__`` of its own."""
    hash_method = getattr(cls, "__hash__", None)
    return hash_method is not None and hash_method is not object.__hash__


class EqualityAssertion(IdiomaticAssertion, ABC):
    """Base for the equality micro-assertions.

    Subclasses set ``invariant`` and implement ``check``.
    """

    invariant = "equality"

    def __init__(
        self,
        value_source: ValueSource,
        settings: EqualityConfig | None = None,
    ) -> None:
        if value_source is None:
            raise ValueError("value_source must not be None")
        self._value_source = value_source
        self._settings = settings or EqualityConfig()

    @property
    def value_source(self) -> ValueSource:
        return self._value_source

    @property
    def settings(self) -> EqualityConfig:
        return self._settings

    def applies_to(self, cls: type) -> bool:
        return is_constructible(cls) and overrides_equality(cls)

    def verify_type(self, cls: type) -> None:
        if not self.applies_to(cls):
            logger.debug("%s: %s is not checked", self, cls.__qualname__)
            return
        self.check(cls, self._value_source.create(cls))

    @abstractmethod
    def check(self, cls: type, instance: Any) -> None:
        """Check the invariant on a generated instance of cls."""
        ...

    def _evaluate(self, cls: type, description: str, call: Callable[[], Any]) -> Any:
        """Run a comparison, turning an exception into a violation."""
        try:
            return call()
        except Exception as e:
            raise self._violation(
                cls,
                f"{description} raised {type(e).__name__}: {e}",
                expected="no exception",
                observed=f"{type(e).__name__}: {e}",
            ) from e

    def _violation(
        self,
        cls: type,
        message: str,
        expected: str,
        observed: str,
    ) -> EqualityContractViolation:
        logger.info("%s breaks %s: %s", cls.__qualname__, self.invariant, message)
        return EqualityContractViolation(
            f"{cls.__qualname__}: {message}",
            invariant=self.invariant,
            declaring_type=cls,
            expected=expected,
            observed=observed,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(invariant={self.invariant!r})"


class EqualsSelfAssertion(EqualityAssertion):
    """An instance must equal itself."""

    invariant = "equals-self"

    def check(self, cls: type, instance: Any) -> None:
        result = self._evaluate(cls, "x == x", lambda: bool(operator.eq(instance, instance)))
        if not result:
            raise self._violation(cls, "x == x is False", expected="True", observed="False")


class EqualsNoneAssertion(EqualityAssertion):
    """An instance must not equal None."""

    invariant = "equals-none"

    def check(self, cls: type, instance: Any) -> None:
        result = self._evaluate(cls, "x == None", lambda: bool(operator.eq(instance, None)))
        if result:
            raise self._violation(cls, "x == None is True", expected="False", observed="True")


class EqualsNewObjectAssertion(EqualityAssertion):
    """An instance must not equal an unrelated plain ``object()``."""

    invariant = "equals-new-object"

    def check(self, cls: type, instance: Any) -> None:
        other = object()
        result = self._evaluate(cls, "x == object()", lambda: bool(operator.eq(instance, other)))
        if result:
            raise self._violation(
                cls, "x == object() is True", expected="False", observed="True"
            )


class EqualsSuccessiveAssertion(EqualityAssertion):
    """Comparing the same two instances repeatedly must give the same answer."""

    invariant = "equals-successive"

    def check(self, cls: type, instance: Any) -> None:
        other = self._value_source.create(cls)
        results = [
            self._evaluate(cls, "x == y", lambda: bool(operator.eq(instance, other)))
            for _ in range(self._settings.successive_calls)
        ]
        if len(set(results)) > 1:
            raise self._violation(
                cls,
                f"x == y changed across {len(results)} calls",
                expected=f"{results[0]} every time",
                observed=", ".join(str(r) for r in results),
            )


class HashSuccessiveAssertion(EqualityAssertion):
    """Hashing the same instance repeatedly must give the same value.

    Unhashable classes (``__hash__ = None``) are skipped.
    """

    invariant = "hash-successive"

    def applies_to(self, cls: type) -> bool:
        return is_constructible(cls) and overrides_hash(cls)

    def check(self, cls: type, instance: Any) -> None:
        results = [
            self._evaluate(cls, "hash(x)", lambda: hash(instance))
            for _ in range(self._settings.successive_calls)
        ]
        if len(set(results)) > 1:
            raise self._violation(
                cls,
                f"hash(x) changed across {len(results)} calls",
                expected=f"{results[0]} every time",
                observed=", ".join(str(r) for r in results),
            )
