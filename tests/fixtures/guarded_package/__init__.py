"""Package whose public classes and functions all guard their parameters."""

from tests.fixtures.guarded_package.registry import Registry


def register(registry: Registry, name: str) -> None:
    if registry is None:
        raise ValueError("registry must not be None")
    if name is None:
        raise ValueError("name must not be None")
    registry.add(name)


def total(first: int, second: float) -> float:
    return first + second
