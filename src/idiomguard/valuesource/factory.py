"""
Default value source.

``SpecimenFactory`` builds anonymous but valid values for builtin scalars,
typing constructs, collections and arbitrary classes. Numbers and strings
come from a shared counter and ``uuid4``, so successive values are
distinct, which the constructor wiring checks rely on.

Usage:
    factory = SpecimenFactory()
    factory.create(int)              # 1, then 2, 3, ...
    factory.create(list[str])        # three unique strings
    factory.create(Order)            # Order(...) with generated arguments
    factory.freeze(Clock, FakeClock())
"""

import collections.abc
import datetime
import inspect
import itertools
import logging
import pathlib
import threading
import types
import typing
import uuid
from collections.abc import Callable
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Union

from idiomguard.config.models import ValueSourceConfig
from idiomguard.errors import ValueGenerationError
from idiomguard.models.metadata import EMPTY
from idiomguard.reflection.introspection import constructors_of, is_constructible
from idiomguard.reflection.invoker import bind_arguments

logger = logging.getLogger(__name__)

_EPOCH = datetime.datetime(2000, 1, 1, 12, 0, 0)

_LIST_ORIGINS = {
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
    collections.abc.Reversible,
}
_ITERATOR_ORIGINS = {collections.abc.Iterator, collections.abc.Generator}
_SET_ORIGINS = {set, collections.abc.Set, collections.abc.MutableSet}
_MAPPING_ORIGINS = {dict, collections.abc.Mapping, collections.abc.MutableMapping}


class SpecimenFactory:
    """Creates arbitrary valid values of requested types.

    Attributes:
        settings: Value source configuration
    """

    def __init__(self, settings: ValueSourceConfig | None = None) -> None:
        """Initialize the factory.

        Args:
            settings: Collection size and string prefix settings
        """
        self._settings = settings or ValueSourceConfig()
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        self._builders: dict[Any, Callable[[], Any]] = {}
        self._local = threading.local()

    @property
    def settings(self) -> ValueSourceConfig:
        return self._settings

    # -------------------------------------------------------------------------
    # Customisation
    # -------------------------------------------------------------------------

    def register(self, tp: Any, builder: Callable[[], Any]) -> None:
        """Use a builder for a type instead of the default strategy."""
        if builder is None:
            raise ValueError("builder must not be None")
        with self._lock:
            self._builders[tp] = builder

    def freeze(self, tp: Any, value: Any = EMPTY) -> Any:
        """Always return the same value for a type.

        Args:
            tp: Type to freeze
            value: Value to return; created once when omitted

        Returns:
            The frozen value
        """
        if value is EMPTY:
            value = self.create(tp)
        self.register(tp, lambda: value)
        return value

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def create(self, tp: Any = object) -> Any:
        """Create a value of the requested type.

        Raises:
            ValueGenerationError: If no value can be manufactured
        """
        builder = self._builder_for(tp)
        if builder is not None:
            return builder()
        if tp is EMPTY or tp is Any or tp is object:
            return object()
        if tp is None or tp is type(None):
            return None
        if isinstance(tp, str):
            raise ValueGenerationError(f"Unresolved forward reference '{tp}'", requested=tp)
        if isinstance(tp, typing.TypeVar):
            return self.create(tp.__bound__ or object)
        supertype = getattr(tp, "__supertype__", None)
        if supertype is not None:
            return self.create(supertype)

        origin = typing.get_origin(tp)
        if origin is not None:
            return self._create_generic(tp, origin, typing.get_args(tp))
        if isinstance(tp, type):
            return self._create_class(tp)
        raise ValueGenerationError(f"Cannot create a value for {tp!r}", requested=tp)

    def _builder_for(self, tp: Any) -> Callable[[], Any] | None:
        try:
            with self._lock:
                return self._builders.get(tp)
        except TypeError:
            # Unhashable annotation
            return None

    def _next(self) -> int:
        with self._lock:
            return next(self._counter)

    def _create_generic(self, tp: Any, origin: Any, args: tuple[Any, ...]) -> Any:
        if origin is typing.Annotated or origin in (typing.ClassVar, typing.Final):
            return self.create(args[0])
        if origin is Union or origin is types.UnionType:
            arms = [arg for arg in args if arg is not type(None)]
            return self.create(arms[0]) if arms else None
        if origin is typing.Literal:
            return args[0]
        if origin is type:
            return args[0] if args and isinstance(args[0], type) else object
        if origin is collections.abc.Callable:
            result = self.create(args[-1] if args else object)
            return lambda *a, **kw: result
        if origin is tuple:
            return self._create_tuple(args)
        element = args[0] if args else object
        if origin in _LIST_ORIGINS:
            return self._many(element)
        if origin in _ITERATOR_ORIGINS:
            return iter(self._many(element))
        if origin in _SET_ORIGINS:
            return set(self._many(element))
        if origin is frozenset:
            return frozenset(self._many(element))
        if origin in _MAPPING_ORIGINS:
            value_type = args[1] if len(args) > 1 else object
            return {self.create(element): self.create(value_type) for _ in self._repeat()}
        if isinstance(origin, type):
            return self._create_class(origin)
        raise ValueGenerationError(f"Cannot create a value for {tp!r}", requested=tp)

    def _repeat(self) -> range:
        return range(self._settings.repeat_count)

    def _many(self, element: Any) -> list[Any]:
        return [self.create(element) for _ in self._repeat()]

    def _create_tuple(self, args: tuple[Any, ...]) -> tuple[Any, ...]:
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(self._many(args[0]))
        if args == ((),):
            return ()
        return tuple(self.create(arg) for arg in args)

    def _create_scalar(self, tp: type) -> Any:
        """Create builtin scalars; returns EMPTY for anything else."""
        if issubclass(tp, bool):
            return self._next() % 2 == 1
        if issubclass(tp, Enum):
            members = list(tp)
            if not members:
                raise ValueGenerationError(f"Enum {tp.__qualname__} has no members", requested=tp)
            return members[self._next() % len(members)]
        if issubclass(tp, str):
            return tp(f"{self._settings.string_prefix}{uuid.uuid4()}")
        if issubclass(tp, (bytes, bytearray)):
            return tp(uuid.uuid4().bytes)
        if issubclass(tp, int):
            return tp(self._next())
        if issubclass(tp, float):
            return tp(self._next() + 0.5)
        if issubclass(tp, complex):
            return tp(self._next(), 1)
        if issubclass(tp, Decimal):
            return tp(self._next()) + Decimal("0.25")
        if issubclass(tp, Fraction):
            return tp(2 * self._next() + 1, 2)
        if issubclass(tp, datetime.datetime):
            return _EPOCH + datetime.timedelta(days=self._next())
        if issubclass(tp, datetime.date):
            return (_EPOCH + datetime.timedelta(days=self._next())).date()
        if issubclass(tp, datetime.time):
            n = self._next()
            return datetime.time(n % 24, n % 60, n % 60)
        if issubclass(tp, datetime.timedelta):
            return datetime.timedelta(seconds=self._next())
        if issubclass(tp, uuid.UUID):
            return uuid.uuid4()
        if issubclass(tp, pathlib.PurePath):
            return tp(str(uuid.uuid4()))
        if tp in (list, set, frozenset, tuple):
            return tp(self._many(object))
        if tp is dict:
            return {self._next(): object() for _ in self._repeat()}
        return EMPTY

    def _create_class(self, tp: type) -> Any:
        value = self._create_scalar(tp)
        if value is not EMPTY:
            return value
        if not is_constructible(tp):
            raise ValueGenerationError(
                f"{tp.__qualname__} is abstract or a protocol; register a builder for it",
                requested=tp,
            )

        building: list[type] = self._building()
        if tp in building:
            chain = " -> ".join(t.__qualname__ for t in [*building, tp])
            raise ValueGenerationError(f"Recursive type graph: {chain}", requested=tp)

        constructors = constructors_of(tp)
        if not constructors:
            raise ValueGenerationError(
                f"{tp.__qualname__} has no inspectable constructor", requested=tp
            )
        constructor = constructors[0]

        building.append(tp)
        try:
            values = [
                self.create(p.annotation if p.is_annotated else object)
                for p in constructor.parameters
            ]
        finally:
            building.pop()

        args, kwargs = bind_arguments(constructor, values)
        try:
            instance = tp(*args, **kwargs)
        except Exception as e:
            raise ValueGenerationError(
                f"Constructing {tp.__qualname__} failed: {type(e).__name__}: {e}",
                requested=tp,
            ) from e
        logger.debug("Created %s", tp.__qualname__)
        return instance

    def _building(self) -> list[type]:
        stack = getattr(self._local, "building", None)
        if stack is None:
            stack = self._local.building = []
        return stack

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(repeat_count={self._settings.repeat_count})"
