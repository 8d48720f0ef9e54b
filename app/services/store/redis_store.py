from typing import Optional

import redis.asyncio as redis
import structlog

from app.services.store.base import BaseKeyValueStore
from app.settings import settings
from app.utils.singleton import Singleton

logger = structlog.getLogger(__name__)


class RedisConnectionService(metaclass=Singleton):
    def __init__(self, host: Optional[str] = None, port: Optional[int] = None):
        self.host = host or settings.redis_host
        self.port = port or settings.redis_port
        self.redis: redis.Redis | None = None

    async def connect(self) -> redis.Redis:
        if self.redis is None:
            pool = redis.ConnectionPool(host=self.host, port=self.port, decode_responses=True)
            self.redis = redis.Redis(connection_pool=pool)
            logger.info("Connected to redis", host=self.host, port=self.port)
        return self.redis

    async def disconnect(self):
        if self.redis:
            await self.redis.aclose()
            self.redis = None


class RedisKeyValueStore(BaseKeyValueStore):
    def __init__(self, namespace: str, connection: Optional[RedisConnectionService] = None):
        super().__init__(namespace)
        self.connection = connection or RedisConnectionService()

    @property
    def redis(self) -> redis.Redis:
        if not self.connection.redis:
            raise RuntimeError("Redis connection not established")
        return self.connection.redis

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get(self, key: str) -> Optional[str]:
        return await self.redis.get(self._key(key))

    async def set(self, key: str, value: str):
        await self.redis.set(self._key(key), value)

    async def set_if_absent(self, key: str, value: str) -> bool:
        return bool(await self.redis.set(self._key(key), value, nx=True))

    async def delete(self, key: str) -> bool:
        deleted_count = await self.redis.delete(self._key(key))
        return deleted_count > 0

    async def pop(self, key: str) -> Optional[str]:
        return await self.redis.getdel(self._key(key))

    async def exists(self, key: str) -> bool:
        return bool(await self.redis.exists(self._key(key)))
