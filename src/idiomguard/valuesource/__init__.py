"""
Value sources: collaborators that manufacture arbitrary valid values.
"""

from idiomguard.valuesource.base import ValueSource
from idiomguard.valuesource.factory import SpecimenFactory

__all__ = [
    "SpecimenFactory",
    "ValueSource",
]
