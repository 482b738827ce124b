"""
Writable property assertion.

Assigns a generated value to each writable property or field of a fresh
instance and checks the same value is read back. Read-only properties
and frozen fields are skipped.
"""

import logging

from idiomguard.assertions.base import IdiomaticAssertion
from idiomguard.errors import WritablePropertyViolation
from idiomguard.models.metadata import MemberDescriptor
from idiomguard.reflection.introspection import is_constructible
from idiomguard.reflection.invoker import read_member, same_value, write_member
from idiomguard.valuesource.base import ValueSource

logger = logging.getLogger(__name__)


class WritablePropertyAssertion(IdiomaticAssertion):
    """Verifies that writable properties and fields round-trip assigned values."""

    def __init__(self, value_source: ValueSource) -> None:
        if value_source is None:
            raise ValueError("value_source must not be None")
        self._value_source = value_source

    @property
    def value_source(self) -> ValueSource:
        return self._value_source

    def verify_type(self, cls: type) -> None:
        if not is_constructible(cls):
            logger.debug("Skipping %s: it cannot be instantiated", cls.__qualname__)
            return
        super().verify_type(cls)

    def verify_property(self, member: MemberDescriptor) -> None:
        self._verify_round_trip(member)

    def verify_field(self, member: MemberDescriptor) -> None:
        self._verify_round_trip(member)

    def _verify_round_trip(self, member: MemberDescriptor) -> None:
        if not member.writable:
            logger.debug("Skipping read-only %s", member.qualified_name)
            return

        owner = self._value_source.create(member.declaring_type)
        value = self._value_source.create(
            member.annotation if member.parameters[0].is_annotated else object
        )

        written = write_member(member, owner, value)
        if written.failure is not None:
            raise WritablePropertyViolation(
                f"{member.qualified_name} rejected an assigned value",
                member=member,
                target_name=member.name,
                expected="assignment to succeed",
                observed=written.describe(),
            )

        read = read_member(member, owner)
        if read.failure is None and same_value(value, read.value):
            return
        logger.info("%s does not return the assigned value", member.qualified_name)
        raise WritablePropertyViolation(
            f"{member.qualified_name} does not return the value assigned to it",
            member=member,
            target_name=member.name,
            expected=repr(value),
            observed=read.describe() if read.failure else repr(read.value),
        )
