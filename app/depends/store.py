from typing import Dict

from app.models.config import StoreBackend
from app.services.store.base import BaseKeyValueStore
from app.services.store.memory_store import InMemoryKeyValueStore
from app.services.store.redis_store import RedisKeyValueStore
from app.settings import settings

_stores: Dict[str, BaseKeyValueStore] = {}


def get_store(namespace: str) -> BaseKeyValueStore:
    if namespace not in _stores:
        if settings.store_backend == StoreBackend.REDIS:
            _stores[namespace] = RedisKeyValueStore(namespace)
        else:
            _stores[namespace] = InMemoryKeyValueStore(namespace)
    return _stores[namespace]


def reset_stores():
    _stores.clear()
