"""
Composite assertion.

Runs an ordered sequence of child assertions at whatever granularity it
is asked to verify. The first child to raise a violation aborts the
run; later children are not executed.
"""

import logging
import types
from collections.abc import Iterable

from idiomguard.assertions.base import IdiomaticAssertion
from idiomguard.models.metadata import MemberDescriptor

logger = logging.getLogger(__name__)


class CompositeAssertion(IdiomaticAssertion):
    """An ordered aggregate of assertions, itself an assertion."""

    def __init__(self, *assertions: IdiomaticAssertion) -> None:
        for assertion in assertions:
            if assertion is None:
                raise ValueError("assertions must not contain None")
        self._assertions = tuple(assertions)

    @property
    def assertions(self) -> tuple[IdiomaticAssertion, ...]:
        return self._assertions

    def verify_assembly(self, module: types.ModuleType) -> None:
        for assertion in self._assertions:
            assertion.verify_assembly(module)

    def verify_type(self, cls: type) -> None:
        for assertion in self._assertions:
            assertion.verify_type(cls)

    def verify_members(self, members: Iterable[MemberDescriptor]) -> None:
        # Materialize so every child sees the same members
        members = list(members)
        for assertion in self._assertions:
            assertion.verify_members(members)

    def verify_member(self, member: MemberDescriptor) -> None:
        for assertion in self._assertions:
            assertion.verify_member(member)

    def __repr__(self) -> str:
        children = ", ".join(repr(a) for a in self._assertions)
        return f"{self.__class__.__name__}({children})"
