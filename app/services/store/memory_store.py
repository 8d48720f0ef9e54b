import asyncio
from typing import Dict, Optional

from app.services.store.base import BaseKeyValueStore


class InMemoryKeyValueStore(BaseKeyValueStore):
    def __init__(self, namespace: str):
        super().__init__(namespace)
        self._data: Dict[str, str] = {}
        self._lock = asyncio.Lock()

    def __len__(self):
        return len(self._data)

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str):
        self._data[key] = value

    async def set_if_absent(self, key: str, value: str) -> bool:
        async with self._lock:
            if key in self._data:
                return False
            self._data[key] = value
            return True

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._data.pop(key, None) is not None

    async def pop(self, key: str) -> Optional[str]:
        async with self._lock:
            return self._data.pop(key, None)

    async def exists(self, key: str) -> bool:
        return key in self._data
