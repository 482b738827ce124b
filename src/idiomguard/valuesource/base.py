"""
Value source protocol.

A value source manufactures an arbitrary valid instance of a requested
type. It is the single place where non-determinism enters the engine.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ValueSource(Protocol):
    """Protocol for value sources.

    Implementations must be reentrant and free of side effects visible
    across calls. They may raise when no value can be produced; the
    assertions propagate that failure unchanged.
    """

    def create(self, tp: Any) -> Any:
        """Create an arbitrary valid value of the requested type.

        Args:
            tp: A class or typing annotation

        Returns:
            A value of that type
        """
        ...
