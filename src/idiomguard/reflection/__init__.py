"""
Reflection adapter.

Builds member descriptors from live modules and classes, and invokes
members with argument vectors. This is the seam between the assertion
algorithms and Python's introspection facilities.
"""

from idiomguard.reflection.introspection import (
    VALUE_TYPES,
    annotations_compatible,
    can_represent_absence,
    constructors_of,
    describe_callable,
    fields_of,
    functions_of,
    instance_fields_of,
    is_constructible,
    is_value_type,
    members_of,
    methods_of,
    properties_of,
    readable_members_of,
    types_of,
)
from idiomguard.reflection.invoker import (
    bind_arguments,
    classify_exception,
    invoke,
    read_member,
    same_value,
    write_member,
)

__all__ = [
    "VALUE_TYPES",
    "annotations_compatible",
    "bind_arguments",
    "can_represent_absence",
    "classify_exception",
    "constructors_of",
    "describe_callable",
    "fields_of",
    "functions_of",
    "instance_fields_of",
    "invoke",
    "is_constructible",
    "is_value_type",
    "members_of",
    "methods_of",
    "properties_of",
    "read_member",
    "readable_members_of",
    "same_value",
    "types_of",
    "write_member",
]
