"""Abstract repository; only its static helper can be exercised."""

from abc import ABC, abstractmethod


class Repository(ABC):
    def save(self, item: str) -> None:
        if item is None:
            raise ValueError("item must not be None")
        self.store(item)

    @abstractmethod
    def store(self, item: str) -> None: ...

    @abstractmethod
    def load(self, key: str) -> str: ...

    @staticmethod
    def key_for(name: str) -> str:
        if name is None:
            raise ValueError("name must not be None")
        return name.lower()
