"""
Constructor-initialized-member assertion.

Checks that values passed to a constructor are exposed verbatim by the
properties, fields or instance attributes whose names match the
parameters; leading underscores are ignored. Every argument is distinct
from the others, so a member that exposes the wrong argument (for
example two swapped assignments) is caught as well as one that is never
assigned.
"""

import logging
from collections.abc import Iterable
from typing import Any

from idiomguard.assertions.base import IdiomaticAssertion
from idiomguard.config.models import ConstructorConfig
from idiomguard.errors import ConstructionWiringViolation, ValueGenerationError
from idiomguard.models.metadata import MemberDescriptor, ParameterDescriptor
from idiomguard.reflection.introspection import (
    annotations_compatible,
    constructors_of,
    instance_fields_of,
    readable_members_of,
)
from idiomguard.reflection.invoker import invoke, read_member, same_value
from idiomguard.valuesource.base import ValueSource

logger = logging.getLogger(__name__)


class ConstructorInitializedMemberAssertion(IdiomaticAssertion):
    """Verifies constructor arguments are exposed through same-named members.

    Parameters without a matching readable property or field are skipped:
    not every constructor argument needs to be exposed.
    """

    def __init__(
        self,
        value_source: ValueSource,
        settings: ConstructorConfig | None = None,
    ) -> None:
        if value_source is None:
            raise ValueError("value_source must not be None")
        self._value_source = value_source
        self._settings = settings or ConstructorConfig()

    @property
    def value_source(self) -> ValueSource:
        return self._value_source

    @property
    def settings(self) -> ConstructorConfig:
        return self._settings

    def verify_type(self, cls: type) -> None:
        """Verify the constructor of a class."""
        self.verify_members(constructors_of(cls))

    def verify_constructor(self, member: MemberDescriptor) -> None:
        if not member.parameters:
            return
        declared = self._by_name(
            readable_members_of(member.declaring_type, include_private=True)
        )
        matches = self._match(member.parameters, declared)

        arguments = self._distinct_arguments(member, matches)
        outcome = invoke(member, arguments)
        if outcome.failure is not None:
            if not matches:
                logger.debug(
                    "Skipping %s: construction failed with %s",
                    member.qualified_name,
                    outcome.describe(),
                )
                return
            raise outcome.failure.exception or RuntimeError(outcome.failure.message)
        instance = outcome.value

        undeclared = [p for p in member.parameters if self._normalize(p.name) not in declared]
        if undeclared:
            assigned = self._by_name(instance_fields_of(instance, include_private=True))
            matches.update(self._match(undeclared, assigned))
        if not matches:
            logger.debug("%s exposes none of its constructor parameters", member.qualified_name)
            return

        for parameter in member.parameters:
            exposed = matches.get(parameter.position)
            if exposed is None:
                continue
            expected = arguments[parameter.position]
            read = read_member(exposed, instance)
            if read.failure is None and same_value(expected, read.value):
                continue

            observed = read.describe() if read.failure else repr(read.value)
            if read.failure is None:
                for other in member.parameters:
                    if other.position != parameter.position and same_value(
                        arguments[other.position], read.value
                    ):
                        observed = f"{observed} (the value passed for '{other.name}')"
                        break
            logger.info(
                "%s does not expose '%s' through '%s'",
                member.qualified_name,
                parameter.name,
                exposed.name,
            )
            raise ConstructionWiringViolation(
                f"{member.qualified_name} does not initialize '{exposed.name}' "
                f"from constructor parameter '{parameter.name}'",
                member=member,
                parameter_name=parameter.name,
                member_name=exposed.name,
                expected=repr(expected),
                observed=observed,
            )

    def _normalize(self, name: str) -> str:
        name = name.lstrip("_")
        return name if self._settings.case_sensitive else name.lower()

    def _by_name(self, candidates: list[MemberDescriptor]) -> dict[str, MemberDescriptor]:
        """Index readable members by normalized name; public names win."""
        named: dict[str, MemberDescriptor] = {}
        for candidate in sorted(candidates, key=lambda c: c.name.startswith("_")):
            named.setdefault(self._normalize(candidate.name), candidate)
        return named

    def _match(
        self,
        parameters: Iterable[ParameterDescriptor],
        readable: dict[str, MemberDescriptor],
    ) -> dict[int, MemberDescriptor]:
        """Map parameter positions to the readable member exposing them."""
        matches = {}
        for parameter in parameters:
            candidate = readable.get(self._normalize(parameter.name))
            if candidate is None:
                continue
            if not annotations_compatible(parameter.annotation, candidate.annotation):
                logger.debug(
                    "Skipping %s: type of '%s' is incompatible",
                    parameter.name,
                    candidate.name,
                )
                continue
            matches[parameter.position] = candidate
        return matches

    def _distinct_arguments(
        self,
        member: MemberDescriptor,
        matches: dict[int, MemberDescriptor],
    ) -> list[Any]:
        """Create one argument per parameter, each different from the others.

        Raises:
            ValueGenerationError: If a compared parameter cannot get a distinct value
        """
        arguments: list[Any] = []
        for parameter in member.parameters:
            value = self._create(parameter)
            attempts = 1
            while any(same_value(previous, value) for previous in arguments):
                if attempts >= self._settings.max_distinct_attempts:
                    if parameter.position in matches:
                        raise ValueGenerationError(
                            f"Could not create a distinct value for '{parameter.name}' "
                            f"of {member.qualified_name} after {attempts} attempts",
                            requested=parameter.annotation,
                        )
                    break
                value = self._create(parameter)
                attempts += 1
            arguments.append(value)
        return arguments

    def _create(self, parameter: ParameterDescriptor) -> Any:
        return self._value_source.create(parameter.annotation if parameter.is_annotated else object)
