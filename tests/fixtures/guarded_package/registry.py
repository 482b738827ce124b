"""Guarded registry class."""


class Registry:
    def __init__(self, owner: str) -> None:
        if owner is None:
            raise ValueError("owner must not be None")
        self._owner = owner
        self._names: list[str] = []

    def add(self, name: str) -> None:
        if name is None:
            raise ValueError("name must not be None")
        self._names.append(name)

    def contains(self, name: str) -> bool:
        if name is None:
            raise TypeError("name must be a string")
        return name in self._names
