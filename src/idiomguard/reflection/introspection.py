"""
Metadata adapter: turns modules and classes into member descriptors.

This is the only module that walks live Python objects with ``inspect``
and ``typing``. Everything downstream works on ``MemberDescriptor`` and
``ParameterDescriptor`` values.

Mapping:
    - assembly: a module; packages include their public submodules
    - type: a class
    - constructor: the class itself, with the parameters of ``cls(...)``
    - method: public functions, static methods and class methods
    - property: ``property``/``cached_property`` attributes
    - field: dataclass fields, pydantic model fields, annotated
      class attributes, ``__slots__`` entries and attributes assigned on
      an instance
"""

import dataclasses
import datetime
import functools
import importlib
import inspect
import logging
import pkgutil
import types
import typing
import uuid
from collections.abc import Callable, Iterable
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, ClassVar, Union

from pydantic import BaseModel

from idiomguard.models.base import MemberKind
from idiomguard.models.metadata import EMPTY, MemberDescriptor, ParameterDescriptor

logger = logging.getLogger(__name__)

# Types with no representable absence; None is never a boundary for them
VALUE_TYPES: tuple[type, ...] = (
    int,
    float,
    complex,
    Decimal,
    Fraction,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    Enum,
)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


# =============================================================================
# Type helpers
# =============================================================================


def is_value_type(annotation: Any) -> bool:
    """Check whether an annotation denotes a value-like type."""
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return is_value_type(supertype)
    return isinstance(annotation, type) and issubclass(annotation, VALUE_TYPES)


def _is_union(origin: Any) -> bool:
    return origin is Union or origin is types.UnionType


def can_represent_absence(
    parameter: ParameterDescriptor,
    unannotated_is_reference: bool = True,
) -> bool:
    """Decide whether None is a boundary value for a parameter.

    None is a boundary when the parameter is reference-like and None is
    not already part of its accepted domain. ``Optional[...]``, ``Any``,
    ``object`` and a None default all accept None, so they are not probed.

    Args:
        parameter: Parameter to inspect
        unannotated_is_reference: Treat unannotated parameters as reference-like

    Returns:
        True if passing None should be rejected by a guard clause
    """
    if parameter.has_default and parameter.default is None:
        return False
    if not parameter.is_annotated:
        return unannotated_is_reference
    return _annotation_rejects_none(parameter.annotation)


def _annotation_rejects_none(annotation: Any) -> bool:
    if isinstance(annotation, str):
        # Unresolved forward reference, always a class
        return True
    if annotation in (Any, object, None, type(None)):
        return False
    if isinstance(annotation, typing.TypeVar):
        bound = annotation.__bound__
        return True if bound is None else _annotation_rejects_none(bound)
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return _annotation_rejects_none(supertype)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)
    if origin is typing.Annotated:
        return _annotation_rejects_none(args[0])
    if _is_union(origin):
        return all(_annotation_rejects_none(arg) for arg in args)
    if origin is typing.Literal:
        return None not in args and not all(is_value_type(type(arg)) for arg in args)
    if origin is not None:
        return not is_value_type(origin)
    return not is_value_type(annotation)


def annotations_compatible(first: Any, second: Any) -> bool:
    """Loosely check that two annotations can describe the same value.

    Unknown, unresolved or non-class annotations are treated as compatible.
    """
    first, second = _strip_optional(first), _strip_optional(second)
    if first is EMPTY or second is EMPTY or first is Any or second is Any:
        return True
    first = typing.get_origin(first) or first
    second = typing.get_origin(second) or second
    if not (isinstance(first, type) and isinstance(second, type)):
        return True
    return issubclass(first, second) or issubclass(second, first)


def _strip_optional(annotation: Any) -> Any:
    if _is_union(typing.get_origin(annotation)):
        arms = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(arms) == 1:
            return arms[0]
    return annotation


def _type_hints(obj: Any) -> dict[str, Any]:
    """Resolve type hints, falling back to raw annotations."""
    try:
        return typing.get_type_hints(obj, include_extras=True)
    except Exception as e:
        logger.debug("Could not resolve type hints for %r: %s", obj, e)
        return dict(getattr(obj, "__annotations__", {}) or {})


def _signature(obj: Any) -> inspect.Signature | None:
    try:
        return inspect.signature(obj)
    except (TypeError, ValueError):
        return None


def _build_parameters(
    signature: inspect.Signature,
    hints: dict[str, Any],
    skip_first: bool = False,
) -> tuple[ParameterDescriptor, ...]:
    raw = list(signature.parameters.values())
    if skip_first and raw:
        raw = raw[1:]
    parameters = []
    for param in raw:
        if param.kind in _VARIADIC:
            continue
        parameters.append(
            ParameterDescriptor(
                name=param.name,
                annotation=hints.get(param.name, param.annotation),
                position=len(parameters),
                keyword_only=param.kind == inspect.Parameter.KEYWORD_ONLY,
                default=param.default,
            )
        )
    return tuple(parameters)


def _is_public(name: str, include_private: bool = False) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return False
    return include_private or not name.startswith("_")


def is_constructible(cls: type) -> bool:
    """Check that a class can be instantiated at all."""
    return not (inspect.isabstract(cls) or getattr(cls, "_is_protocol", False))


def _own_classes(cls: type) -> list[type]:
    return [klass for klass in cls.__mro__ if klass is not object]


# =============================================================================
# Type decomposition
# =============================================================================


def constructors_of(cls: type) -> list[MemberDescriptor]:
    """Describe the constructor of a class.

    Python has a single constructor per class; its parameters are those
    of ``cls(...)``. Abstract classes and protocols have none.
    """
    if not is_constructible(cls) or issubclass(cls, Enum):
        return []
    signature = _signature(cls)
    if signature is None:
        logger.debug("No constructor signature for %s", cls.__qualname__)
        return []

    hints = dict(_type_hints(cls))
    init = getattr(cls, "__init__", None)
    if init is not None and init is not object.__init__:
        hints.update(_type_hints(init))
    hints.pop("return", None)

    return [
        MemberDescriptor(
            kind=MemberKind.CONSTRUCTOR,
            name="__init__",
            declaring_type=cls,
            declaring_module=cls.__module__,
            parameters=_build_parameters(signature, hints),
            target=cls,
            is_static=True,
        )
    ]


def methods_of(
    cls: type,
    include_private: bool = False,
    include_inherited: bool = False,
) -> list[MemberDescriptor]:
    """Describe the public methods of a class.

    Instance methods exclude ``self``; class methods are bound to ``cls``
    and exclude ``cls``. Dunder methods are never included.

    Args:
        cls: Class to inspect
        include_private: Include single-underscore methods
        include_inherited: Include methods declared on base classes

    Returns:
        Method descriptors in declaration order
    """
    classes = _own_classes(cls) if include_inherited else [cls]
    seen: set[str] = set()
    methods = []
    for klass in classes:
        for name, raw in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if not _is_public(name, include_private):
                continue
            if isinstance(raw, staticmethod):
                func, target, skip_first, static = raw.__func__, raw.__func__, False, True
            elif isinstance(raw, classmethod):
                func, target, skip_first, static = raw.__func__, getattr(cls, name), True, True
            elif inspect.isfunction(raw):
                func, target, skip_first, static = raw, raw, True, False
            else:
                continue
            signature = _signature(func)
            if signature is None:
                continue
            methods.append(
                MemberDescriptor(
                    kind=MemberKind.METHOD,
                    name=name,
                    declaring_type=cls,
                    declaring_module=cls.__module__,
                    parameters=_build_parameters(signature, _type_hints(func), skip_first),
                    target=target,
                    is_static=static,
                )
            )
    return methods


def properties_of(cls: type, include_private: bool = False) -> list[MemberDescriptor]:
    """Describe properties, including inherited ones.

    Writable properties carry a single ``value`` parameter standing for
    the assigned value; read-only ones have no parameters.
    """
    seen: set[str] = set()
    properties = []
    for klass in _own_classes(cls):
        for name, raw in vars(klass).items():
            if name in seen or not _is_public(name, include_private):
                continue
            seen.add(name)
            if isinstance(raw, property):
                getter, writable = raw.fget, raw.fset is not None
            elif isinstance(raw, functools.cached_property):
                getter, writable = raw.func, False
            else:
                continue
            annotation = _type_hints(getter).get("return", EMPTY) if getter else EMPTY
            parameters = (
                (ParameterDescriptor(name="value", annotation=annotation, position=0),)
                if writable
                else ()
            )
            properties.append(
                MemberDescriptor(
                    kind=MemberKind.PROPERTY,
                    name=name,
                    declaring_type=cls,
                    declaring_module=cls.__module__,
                    parameters=parameters,
                    target=raw,
                    annotation=annotation,
                    writable=writable,
                )
            )
    return properties


def _field_annotations(cls: type) -> tuple[dict[str, Any], bool]:
    """Collect field names, their annotations, and whether they are writable."""
    if dataclasses.is_dataclass(cls):
        hints = _type_hints(cls)
        frozen = cls.__dataclass_params__.frozen
        return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(cls)}, not frozen
    if issubclass(cls, BaseModel):
        frozen = bool(cls.model_config.get("frozen", False))
        return {name: info.annotation for name, info in cls.model_fields.items()}, not frozen

    fields = {
        name: hint
        for name, hint in _type_hints(cls).items()
        if typing.get_origin(hint) is not ClassVar and hint is not ClassVar
    }
    for klass in _own_classes(cls):
        slots = vars(klass).get("__slots__", ())
        for name in [slots] if isinstance(slots, str) else slots:
            fields.setdefault(name, EMPTY)
    return fields, True


def fields_of(cls: type, include_private: bool = False) -> list[MemberDescriptor]:
    """Describe data fields of a class."""
    annotations, writable = _field_annotations(cls)
    fields = []
    for name, annotation in annotations.items():
        if not _is_public(name, include_private):
            continue
        if isinstance(inspect.getattr_static(cls, name, None), (property, functools.cached_property)):
            continue
        fields.append(
            MemberDescriptor(
                kind=MemberKind.FIELD,
                name=name,
                declaring_type=cls,
                declaring_module=cls.__module__,
                parameters=(
                    (ParameterDescriptor(name="value", annotation=annotation, position=0),)
                    if writable
                    else ()
                ),
                target=name,
                annotation=annotation,
                writable=writable,
            )
        )
    return fields


def members_of(cls: type, include_private: bool = False) -> list[MemberDescriptor]:
    """Describe constructor, methods, properties and fields of a class."""
    return [
        *constructors_of(cls),
        *methods_of(cls, include_private=include_private),
        *properties_of(cls, include_private=include_private),
        *fields_of(cls, include_private=include_private),
    ]


def readable_members_of(cls: type, include_private: bool = False) -> list[MemberDescriptor]:
    """Properties and fields whose value can be read from an instance."""
    return [
        *properties_of(cls, include_private=include_private),
        *fields_of(cls, include_private=include_private),
    ]


def instance_fields_of(instance: Any, include_private: bool = False) -> list[MemberDescriptor]:
    """Describe attributes assigned on an instance but not declared on its class.

    These are the plain ``self.name = value`` attributes set by ``__init__``.
    Their annotation is unknown.
    """
    cls = type(instance)
    declared = {member.name for member in readable_members_of(cls, include_private=True)}
    fields = []
    for name in getattr(instance, "__dict__", {}):
        if name in declared or not _is_public(name, include_private):
            continue
        fields.append(
            MemberDescriptor(
                kind=MemberKind.FIELD,
                name=name,
                declaring_type=cls,
                declaring_module=cls.__module__,
                parameters=(ParameterDescriptor(name="value", position=0),),
                target=name,
                writable=True,
            )
        )
    return fields


# =============================================================================
# Module decomposition
# =============================================================================


def _public_surface(module: types.ModuleType, include_private: bool) -> list[Any]:
    exported = getattr(module, "__all__", None)
    if exported is not None:
        return [getattr(module, name) for name in exported if hasattr(module, name)]
    return [
        value
        for name, value in vars(module).items()
        if _is_public(name, include_private)
        and getattr(value, "__module__", None) == module.__name__
    ]


def _submodules(module: types.ModuleType, include_private: bool) -> list[types.ModuleType]:
    path = getattr(module, "__path__", None)
    if path is None:
        return []
    modules = []
    for info in pkgutil.walk_packages(path, prefix=f"{module.__name__}."):
        relative = info.name[len(module.__name__) + 1 :].split(".")
        if not include_private and any(part.startswith("_") for part in relative):
            continue
        logger.debug("Importing submodule %s", info.name)
        modules.append(importlib.import_module(info.name))
    return modules


def _unique(items: Iterable[Any]) -> list[Any]:
    seen: set[int] = set()
    unique = []
    for item in items:
        if id(item) not in seen:
            seen.add(id(item))
            unique.append(item)
    return unique


def types_of(module: types.ModuleType, include_private: bool = False) -> list[type]:
    """List the public classes of a module, walking packages recursively.

    ``__all__`` is honoured when present; otherwise every public class
    defined in the module is included.
    """
    candidates = list(_public_surface(module, include_private))
    for submodule in _submodules(module, include_private):
        candidates.extend(_public_surface(submodule, include_private))
    return _unique(value for value in candidates if inspect.isclass(value))


def functions_of(module: types.ModuleType, include_private: bool = False) -> list[MemberDescriptor]:
    """Describe public module-level functions as static methods."""
    candidates = list(_public_surface(module, include_private))
    for submodule in _submodules(module, include_private):
        candidates.extend(_public_surface(submodule, include_private))
    return [
        describe_callable(value)
        for value in _unique(candidates)
        if inspect.isfunction(value)
    ]


def describe_callable(target: Callable[..., Any]) -> MemberDescriptor:
    """Describe an arbitrary callable as a single member.

    Classes become constructors, bound methods become static members of
    their owner's class (the owner is already bound) and plain functions
    become module-level static methods.

    Raises:
        TypeError: If the target is not callable or has no signature
    """
    if inspect.isclass(target):
        constructors = constructors_of(target)
        if not constructors:
            raise TypeError(f"{target.__qualname__} cannot be constructed")
        return constructors[0]
    if not callable(target):
        raise TypeError(f"{target!r} is not callable")
    signature = _signature(target)
    if signature is None:
        raise TypeError(f"{target!r} has no inspectable signature")

    func = getattr(target, "__func__", target)
    owner = getattr(target, "__self__", None)
    declaring_type = None
    if owner is not None and not isinstance(owner, types.ModuleType):
        declaring_type = owner if inspect.isclass(owner) else type(owner)
    return MemberDescriptor(
        kind=MemberKind.METHOD,
        name=getattr(target, "__name__", type(target).__name__),
        declaring_type=declaring_type,
        declaring_module=getattr(func, "__module__", "") or "",
        parameters=_build_parameters(signature, _type_hints(func)),
        target=target,
        is_static=True,
    )
