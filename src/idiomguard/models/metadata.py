"""
Metadata models describing members and their parameters.

These descriptors are the only view of the program under test that the
assertion algorithms see. They are populated by the reflection adapter
(see ``idiomguard.reflection``) and are never mutated afterwards.
"""

import inspect
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from idiomguard.models.base import MemberKind

EMPTY = inspect.Parameter.empty


def format_annotation(annotation: Any) -> str:
    """Render a type annotation the way it would appear in a signature."""
    if annotation is EMPTY:
        return ""
    if isinstance(annotation, type):
        return annotation.__qualname__
    return str(annotation).replace("typing.", "")


class ParameterDescriptor(BaseModel):
    """A single parameter of a constructor, method or property setter.

    Identity is the owning member plus ``position``. The name is used for
    diagnostics and for name matching only, never for execution order.

    Attributes:
        name: Parameter name as declared
        annotation: Resolved type hint, or ``inspect.Parameter.empty``
        position: Zero-based ordinal among the modelled parameters
        keyword_only: Whether the argument must be passed by keyword
        default: Declared default, or ``inspect.Parameter.empty``
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str = Field(..., min_length=1, description="Parameter name")
    annotation: Any = Field(default=EMPTY, description="Resolved type hint")
    position: int = Field(..., ge=0, description="Zero-based ordinal")
    keyword_only: bool = Field(default=False, description="Passed by keyword")
    default: Any = Field(default=EMPTY, description="Declared default")

    @field_validator("name")
    @classmethod
    def valid_identifier(cls, v: str) -> str:
        """Validate that name is a valid Python identifier."""
        if not v.isidentifier():
            raise ValueError(f"'{v}' is not a valid parameter name")
        return v

    @property
    def is_annotated(self) -> bool:
        return self.annotation is not EMPTY

    @property
    def has_default(self) -> bool:
        return self.default is not EMPTY

    def render(self) -> str:
        """Format as ``name: type`` for signatures."""
        rendered = format_annotation(self.annotation)
        return f"{self.name}: {rendered}" if rendered else self.name


class MemberDescriptor(BaseModel):
    """One constructor, method, property or field of a type.

    Module-level functions are modelled as static methods without a
    declaring type. Properties and fields are pseudo-members: read-only
    ones have no parameters, writable ones have a single parameter that
    stands for the assigned value.

    Attributes:
        kind: Member kind used for dispatch
        name: Member name (``__init__`` for constructors)
        declaring_type: Owning class, or None for module-level functions
        declaring_module: Name of the module the member is defined in
        parameters: Ordered parameter descriptors
        target: Underlying callable, property or field object
        is_static: Whether invocation needs no owner instance
        annotation: Value type for properties and fields
        writable: Whether a property or field accepts assignment
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kind: MemberKind = Field(..., description="Member kind")
    name: str = Field(..., min_length=1, description="Member name")
    declaring_type: Optional[type] = Field(default=None, description="Owning class")
    declaring_module: str = Field(default="", description="Defining module")
    parameters: tuple[ParameterDescriptor, ...] = Field(
        default=(), description="Ordered parameters"
    )
    target: Any = Field(default=None, description="Underlying object")
    is_static: bool = Field(default=False, description="Needs no owner instance")
    annotation: Any = Field(default=EMPTY, description="Property or field type")
    writable: bool = Field(default=False, description="Accepts assignment")

    @field_validator("parameters")
    @classmethod
    def positions_are_ordinal(
        cls, v: tuple[ParameterDescriptor, ...]
    ) -> tuple[ParameterDescriptor, ...]:
        """Ensure parameters are ordered by a contiguous position."""
        for expected, parameter in enumerate(v):
            if parameter.position != expected:
                raise ValueError(
                    f"parameter '{parameter.name}' has position {parameter.position}, "
                    f"expected {expected}"
                )
        return v

    @property
    def owner_name(self) -> str:
        """Qualified name of the declaring type, or the module name."""
        if self.declaring_type is not None:
            return f"{self.declaring_type.__module__}.{self.declaring_type.__qualname__}"
        return self.declaring_module

    @property
    def qualified_name(self) -> str:
        if self.kind == MemberKind.CONSTRUCTOR:
            return self.owner_name
        return f"{self.owner_name}.{self.name}"

    @property
    def signature(self) -> str:
        """Human readable signature used in violation messages."""
        if self.kind in (MemberKind.PROPERTY, MemberKind.FIELD):
            rendered = format_annotation(self.annotation)
            return f"{self.qualified_name}: {rendered}" if rendered else self.qualified_name
        params = ", ".join(p.render() for p in self.parameters)
        return f"{self.qualified_name}({params})"

    @property
    def is_invocable(self) -> bool:
        return self.kind in (MemberKind.CONSTRUCTOR, MemberKind.METHOD)

    def parameter(self, name: str) -> ParameterDescriptor:
        """Look up a parameter by name.

        Raises:
            KeyError: If the member has no parameter with that name
        """
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        raise KeyError(f"{self.signature} has no parameter '{name}'")

    def __str__(self) -> str:
        return self.signature
