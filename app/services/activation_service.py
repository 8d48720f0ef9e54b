from typing import Optional

import structlog

from app.exceptions import KeyNotFound, OwnerMismatch, ValidationError
from app.models.activation import ActivationKey
from app.repository.activation_keys_repository import ActivationKeysRepository
from app.services.keys_service import normalize_activation_key

logger = structlog.getLogger(__name__)


class KeyVerificationService:
    def __init__(self, keys: ActivationKeysRepository):
        self._keys = keys

    async def verify(self, chat_id: Optional[str], activation_key: Optional[str]) -> ActivationKey:
        """
        Validates and consumes an activation key.

        Used and never-issued keys both raise ``KeyNotFound``. A key presented from the
        wrong chat raises ``OwnerMismatch`` and stays redeemable by its owner.
        """
        if not chat_id or not activation_key:
            raise ValidationError("chatId and activationKey are required")
        code = normalize_activation_key(activation_key)

        key = await self._keys.get(code)
        if key is None:
            logger.info("Unknown activation key presented", chat_id=chat_id)
            raise KeyNotFound()
        if key.chat_id != str(chat_id):
            logger.warning("Activation key owner mismatch", chat_id=chat_id, owner_chat_id=key.chat_id)
            raise OwnerMismatch()

        consumed = await self._keys.consume(code)
        if consumed is None:
            # redeemed concurrently
            raise KeyNotFound()
        logger.info("Activation key redeemed", chat_id=chat_id, package_id=consumed.package_id)
        return consumed
