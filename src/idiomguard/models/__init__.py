"""
Core data models for the assertion engine.

Metadata descriptors are Pydantic models; invocation outcomes are
frozen dataclasses.
"""

from idiomguard.models.base import FailureClassification, MemberKind
from idiomguard.models.metadata import (
    EMPTY,
    MemberDescriptor,
    ParameterDescriptor,
    format_annotation,
)
from idiomguard.models.outcome import InvocationFailure, InvocationOutcome

__all__ = [
    "EMPTY",
    "FailureClassification",
    "InvocationFailure",
    "InvocationOutcome",
    "MemberDescriptor",
    "MemberKind",
    "ParameterDescriptor",
    "format_annotation",
]
