from fastapi import Depends

from app.depends.store import get_store
from app.repository.activation_keys_repository import ActivationKeysRepository
from app.repository.orders_repository import OrdersRepository
from app.services.activation_service import KeyVerificationService
from app.services.notifications_service import TelegramNotificationService
from app.services.orders_service import OrderService
from app.services.oxapay_service import OxaPayService
from app.services.signature_service import SignatureVerifier
from app.settings import settings

_notification_service: TelegramNotificationService | None = None


def get_notification_service() -> TelegramNotificationService:
    global _notification_service
    if _notification_service is None:
        _notification_service = TelegramNotificationService.from_settings()
    return _notification_service


async def close_notification_service():
    global _notification_service
    if _notification_service is not None:
        await _notification_service.close()
        _notification_service = None


def get_orders_repository() -> OrdersRepository:
    return OrdersRepository(get_store(OrdersRepository.namespace))


def get_activation_keys_repository() -> ActivationKeysRepository:
    return ActivationKeysRepository(get_store(ActivationKeysRepository.namespace))


def get_oxapay_service() -> OxaPayService:
    return OxaPayService()


def get_signature_verifier() -> SignatureVerifier:
    return SignatureVerifier(settings.oxapay_callback_secret)


def get_order_service(
        orders: OrdersRepository = Depends(get_orders_repository),
        keys: ActivationKeysRepository = Depends(get_activation_keys_repository),
        oxapay: OxaPayService = Depends(get_oxapay_service),
        notifier: TelegramNotificationService = Depends(get_notification_service),
        verifier: SignatureVerifier = Depends(get_signature_verifier),
) -> OrderService:
    return OrderService(orders=orders, keys=keys, oxapay=oxapay, notifier=notifier, verifier=verifier)


def get_key_verification_service(
        keys: ActivationKeysRepository = Depends(get_activation_keys_repository),
) -> KeyVerificationService:
    return KeyVerificationService(keys)
