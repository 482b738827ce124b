"""
Assertion protocol and default decomposition.

Every idiomatic assertion can be pointed at four granularities:

- assembly (a module or package): decomposes to its public classes and
  public module-level functions
- type (a class): decomposes to constructor, methods, properties, fields
- members (an iterable of descriptors): decomposes to each member in order
- member (one descriptor): dispatches on the member kind to a leaf

Leaves default to silent no-ops, so a broad ``verify(cls)`` is always
safe to issue; concrete assertions override only the leaves they
understand. Violations raised below propagate upward and abort the run.
"""

import inspect
import logging
import types
from collections.abc import Iterable
from typing import Any

from idiomguard.models.base import MemberKind
from idiomguard.models.metadata import MemberDescriptor
from idiomguard.reflection.introspection import (
    describe_callable,
    functions_of,
    members_of,
    types_of,
)

logger = logging.getLogger(__name__)


class IdiomaticAssertion:
    """Base class for reusable idiom checks.

    Subclasses override any of:
        - verify_constructor / verify_method / verify_property / verify_field
        - verify_type, verify_members or verify_assembly for a different
          decomposition
    """

    def verify(self, target: Any) -> None:
        """Verify a module, class, member descriptor, callable or member collection.

        Raises:
            IdiomViolation: When the target breaks the idiom
            TypeError: If the target is none of the supported granularities
        """
        if isinstance(target, types.ModuleType):
            self.verify_assembly(target)
        elif inspect.isclass(target):
            self.verify_type(target)
        elif isinstance(target, MemberDescriptor):
            self.verify_member(target)
        elif callable(target):
            self.verify_member(describe_callable(target))
        elif isinstance(target, Iterable) and not isinstance(target, (str, bytes)):
            self.verify_members(target)
        else:
            raise TypeError(
                f"Cannot verify {target!r}: expected a module, class, member or members"
            )

    def verify_assembly(self, module: types.ModuleType) -> None:
        """Verify every public class and module-level function of a module."""
        logger.debug("%s: verifying module %s", self, module.__name__)
        for cls in types_of(module):
            self.verify_type(cls)
        self.verify_members(functions_of(module))

    def verify_type(self, cls: type) -> None:
        """Verify constructor, methods, properties and fields of a class."""
        logger.debug("%s: verifying type %s", self, cls.__qualname__)
        self.verify_members(members_of(cls))

    def verify_members(self, members: Iterable[MemberDescriptor]) -> None:
        """Verify each member in the order supplied."""
        for member in members:
            if not isinstance(member, MemberDescriptor):
                raise TypeError(f"Expected a MemberDescriptor, got {member!r}")
            self.verify_member(member)

    def verify_member(self, member: MemberDescriptor) -> None:
        """Dispatch a single member to the leaf for its kind."""
        leaves = {
            MemberKind.CONSTRUCTOR: self.verify_constructor,
            MemberKind.METHOD: self.verify_method,
            MemberKind.PROPERTY: self.verify_property,
            MemberKind.FIELD: self.verify_field,
        }
        leaves[member.kind](member)

    def verify_constructor(self, member: MemberDescriptor) -> None:
        """Verify a constructor. No-op unless overridden."""

    def verify_method(self, member: MemberDescriptor) -> None:
        """Verify a method. No-op unless overridden."""

    def verify_property(self, member: MemberDescriptor) -> None:
        """Verify a property. No-op unless overridden."""

    def verify_field(self, member: MemberDescriptor) -> None:
        """Verify a field. No-op unless overridden."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
