"""
Generic member invocation.

Invoking a member never lets an exception escape: every failure is
captured into an ``InvocationOutcome`` with a classification tag, so the
assertion algorithms can match on outcomes instead of unwinding.
"""

import asyncio
import inspect
import logging
from collections.abc import Sequence
from typing import Any

from idiomguard.models.base import FailureClassification, MemberKind
from idiomguard.models.metadata import MemberDescriptor
from idiomguard.models.outcome import InvocationOutcome

logger = logging.getLogger(__name__)


def classify_exception(exc: BaseException) -> FailureClassification:
    """Map an exception onto a failure classification."""
    if isinstance(exc, NotImplementedError):
        return FailureClassification.NOT_IMPLEMENTED
    if isinstance(exc, (ValueError, TypeError)):
        return FailureClassification.INVALID_ARGUMENT
    return FailureClassification.UNEXPECTED


def bind_arguments(
    member: MemberDescriptor,
    values: Sequence[Any],
) -> tuple[list[Any], dict[str, Any]]:
    """Split an argument vector into positional and keyword arguments.

    Raises:
        ValueError: If the vector length does not match the parameters
    """
    if len(values) != len(member.parameters):
        raise ValueError(
            f"{member.signature} takes {len(member.parameters)} arguments, "
            f"got {len(values)}"
        )
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    for parameter, value in zip(member.parameters, values):
        if parameter.keyword_only:
            kwargs[parameter.name] = value
        else:
            args.append(value)
    return args, kwargs


def _settle(result: Any, exercise_generators: bool, await_coroutines: bool) -> Any:
    """Force deferred execution so guards inside it actually run."""
    if exercise_generators and inspect.isgenerator(result):
        try:
            next(result)
        except StopIteration:
            pass
        finally:
            result.close()
        return result
    if await_coroutines and inspect.iscoroutine(result):
        return asyncio.run(result)
    return result


def invoke(
    member: MemberDescriptor,
    arguments: Sequence[Any],
    owner: Any = None,
    exercise_generators: bool = True,
    await_coroutines: bool = True,
) -> InvocationOutcome:
    """Invoke a constructor or method with an argument vector.

    Args:
        member: Constructor or method to invoke
        arguments: One value per parameter, in position order
        owner: Instance to invoke an instance method on
        exercise_generators: Advance returned generators once
        await_coroutines: Run returned coroutines to completion

    Returns:
        The produced value or the classified failure

    Raises:
        TypeError: If the member is a property or field
        ValueError: If an instance method is invoked without an owner
    """
    if not member.is_invocable:
        raise TypeError(f"{member.signature} is a {member.kind.value}, not invocable")
    if not member.is_static and owner is None:
        raise ValueError(f"{member.signature} requires an owner instance")

    args, kwargs = bind_arguments(member, arguments)
    if not member.is_static:
        args.insert(0, owner)

    try:
        result = member.target(*args, **kwargs)
        result = _settle(result, exercise_generators, await_coroutines)
    except Exception as e:
        logger.debug("%s raised %s: %s", member.qualified_name, type(e).__name__, e)
        return InvocationOutcome.failed(classify_exception(e), str(e), e)
    return InvocationOutcome.success(result)


def read_member(member: MemberDescriptor, instance: Any) -> InvocationOutcome:
    """Read a property or field value from an instance."""
    if member.kind not in (MemberKind.PROPERTY, MemberKind.FIELD):
        raise TypeError(f"{member.signature} is not a property or field")
    try:
        return InvocationOutcome.success(getattr(instance, member.name))
    except Exception as e:
        return InvocationOutcome.failed(classify_exception(e), str(e), e)


def write_member(member: MemberDescriptor, instance: Any, value: Any) -> InvocationOutcome:
    """Assign a value to a writable property or field."""
    if member.kind not in (MemberKind.PROPERTY, MemberKind.FIELD):
        raise TypeError(f"{member.signature} is not a property or field")
    if not member.writable:
        raise TypeError(f"{member.signature} is read-only")
    try:
        setattr(instance, member.name, value)
    except Exception as e:
        return InvocationOutcome.failed(classify_exception(e), str(e), e)
    return InvocationOutcome.success(value)


def same_value(expected: Any, actual: Any) -> bool:
    """Identity or equality; comparison errors count as different."""
    if actual is expected:
        return True
    try:
        return bool(actual == expected)
    except Exception:
        return False
