from typing import Optional

from app.models.orders import PendingOrder
from app.services.store.base import BaseKeyValueStore


class OrdersRepository:
    namespace = "pending_orders"

    def __init__(self, store: BaseKeyValueStore):
        self.store = store

    @staticmethod
    def _load(raw: Optional[str]) -> Optional[PendingOrder]:
        if raw is None:
            return None
        return PendingOrder.model_validate_json(raw)

    async def save(self, key: str, order: PendingOrder) -> PendingOrder:
        await self.store.set(key, order.model_dump_json())
        return order

    async def get(self, key: str) -> Optional[PendingOrder]:
        return self._load(await self.store.get(key))

    async def pop(self, key: str) -> Optional[PendingOrder]:
        return self._load(await self.store.pop(key))

    async def delete(self, key: str) -> bool:
        return await self.store.delete(key)

    async def exists(self, key: str) -> bool:
        return await self.store.exists(key)
