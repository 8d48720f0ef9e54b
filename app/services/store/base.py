from abc import ABC, abstractmethod
from typing import Optional


class BaseKeyValueStore(ABC):
    def __init__(self, namespace: str):
        self.namespace = namespace

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError()

    @abstractmethod
    async def set(self, key: str, value: str):
        raise NotImplementedError()

    @abstractmethod
    async def set_if_absent(self, key: str, value: str) -> bool:
        """Stores the value only when the key is unused. Returns whether it was stored."""
        raise NotImplementedError()

    @abstractmethod
    async def delete(self, key: str) -> bool:
        raise NotImplementedError()

    @abstractmethod
    async def pop(self, key: str) -> Optional[str]:
        """Atomically reads and removes the key."""
        raise NotImplementedError()

    @abstractmethod
    async def exists(self, key: str) -> bool:
        raise NotImplementedError()
