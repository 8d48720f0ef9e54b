from typing import Optional

import structlog

from app.models.activation import ActivationKey
from app.services.store.base import BaseKeyValueStore

logger = structlog.getLogger(__name__)


class ActivationKeysRepository:
    namespace = "activation_keys"

    def __init__(self, store: BaseKeyValueStore):
        self.store = store

    async def create(self, key: ActivationKey) -> bool:
        created = await self.store.set_if_absent(key.code, key.model_dump_json())
        if not created:
            logger.warning("Activation key already exists", chat_id=key.chat_id, key_prefix=key.code[:4])
        return created

    async def get(self, code: str) -> Optional[ActivationKey]:
        raw = await self.store.get(code)
        return ActivationKey.model_validate_json(raw) if raw is not None else None

    async def consume(self, code: str) -> Optional[ActivationKey]:
        raw = await self.store.pop(code)
        return ActivationKey.model_validate_json(raw) if raw is not None else None
