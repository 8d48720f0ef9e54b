import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

import structlog

from app.exceptions import (
    InvalidSignature,
    KeyGenerationFailed,
    NotRegistered,
    OrderNotFound,
    ValidationError,
)
from app.models.activation import ActivationKey
from app.models.orders import PendingOrder
from app.models.oxapay.invoice import Invoice, InvoiceCustomData, InvoiceRequest
from app.models.oxapay.webhooks import WebhookPayload, WebhookResult
from app.repository.activation_keys_repository import ActivationKeysRepository
from app.repository.orders_repository import OrdersRepository
from app.services.keys_service import generate_activation_key
from app.services.notifications_service import TelegramNotificationService
from app.services.oxapay_service import OxaPayService
from app.services.signature_service import SignatureVerifier
from app.settings import settings

logger = structlog.getLogger(__name__)


class OrderService:
    """
    Registers buyers, opens OxaPay invoices and turns completed payments into activation keys.

    Pending orders live under two keys: the chat id (written on registration) and the
    invoice id (written once OxaPay has issued the invoice). A webhook may surface either
    one, so both are tried and both are removed once the payment is resolved.
    """
    max_key_attempts = 5

    def __init__(
            self,
            orders: OrdersRepository,
            keys: ActivationKeysRepository,
            oxapay: OxaPayService,
            notifier: TelegramNotificationService,
            verifier: SignatureVerifier,
    ):
        self._orders = orders
        self._keys = keys
        self._oxapay = oxapay
        self._notifier = notifier
        self._verifier = verifier

    async def register(self, chat_id: Optional[str], username: Optional[str] = None,
                       display_name: Optional[str] = None) -> PendingOrder:
        if not chat_id:
            raise ValidationError("chatId is required")
        order = PendingOrder(
            chat_id=str(chat_id),
            username=username,
            display_name=display_name,
            registered_at=datetime.now(timezone.utc),
        )
        await self._orders.save(order.chat_id, order)
        logger.info("Telegram user registered", chat_id=order.chat_id, username=username)
        return order

    async def create_invoice(self, chat_id: Optional[str], package_id: Optional[str],
                             amount: Optional[float], currency: Optional[str]) -> Invoice:
        if not (chat_id and package_id and amount and currency):
            raise ValidationError("chatId, packageId, amount and currency are required")
        chat_id = str(chat_id)
        registration = await self._orders.get(chat_id)
        if registration is None:
            logger.warning("Invoice requested by unregistered chat", chat_id=chat_id)
            raise NotRegistered()

        request = InvoiceRequest(
            price_amount=amount,
            price_currency=currency,
            pay_currency=currency,
            order_id=f"{package_id}-{int(time.time() * 1000)}",
            callback_url=settings.callback_url,
            description=f"Activation for package {package_id}",
            cancel_url=settings.cancel_url,
            success_url=settings.success_url,
            custom=InvoiceCustomData(chatId=chat_id, packageId=package_id),
        )
        invoice = await self._oxapay.create_invoice(request)

        await self._orders.save(invoice.invoice_id, PendingOrder(
            chat_id=chat_id,
            username=registration.username,
            display_name=registration.display_name,
            package_id=package_id,
            amount=amount,
            currency=currency,
            invoice_id=invoice.invoice_id,
            registered_at=registration.registered_at,
        ))
        logger.info("Invoice created", chat_id=chat_id, package_id=package_id, invoice_id=invoice.invoice_id)
        return invoice

    async def _issue_key(self, chat_id: str, package_id: Optional[str]) -> ActivationKey:
        for _ in range(self.max_key_attempts):
            key = ActivationKey(
                code=generate_activation_key(),
                chat_id=chat_id,
                package_id=package_id,
                created_at=datetime.now(timezone.utc),
            )
            if await self._keys.create(key):
                return key
        logger.error("Exhausted activation key attempts", chat_id=chat_id)
        raise KeyGenerationFailed()

    async def _claim_order(self, data: WebhookPayload) -> Tuple[Optional[str], Optional[PendingOrder]]:
        if data.invoice_id:
            order = await self._orders.pop(data.invoice_id)
            if order is not None:
                return data.invoice_id, order
        if data.custom and data.custom.chatId:
            logger.debug("Falling back to chat id from custom data", chat_id=data.custom.chatId)
            order = await self._orders.pop(data.custom.chatId)
            if order is not None:
                return data.custom.chatId, order
        return None, None

    async def handle_payment_webhook(self, payload: Dict[str, Any], signature: Optional[str]) -> WebhookResult:
        if not self._verifier.verify(payload, signature):
            raise InvalidSignature()

        data = WebhookPayload.model_validate(payload)
        if not data.is_completed:
            logger.info("Ignoring non-terminal payment status", status=data.status, invoice_id=data.invoice_id)
            return WebhookResult(status="ignored", reason="payment not completed")

        claimed_key, order = await self._claim_order(data)
        if order is None:
            logger.warning("Order not found for invoice", invoice_id=data.invoice_id)
            raise OrderNotFound()

        package_id = order.package_id or (data.custom.packageId if data.custom else None)
        try:
            key = await self._issue_key(order.chat_id, package_id)
        except Exception:
            # put the claimed order back for the retried callback
            await self._orders.save(claimed_key, order)
            raise
        logger.info("Activation key issued", chat_id=order.chat_id, package_id=package_id, invoice_id=data.invoice_id)

        await self._notifier.send_activation_key(order.chat_id, package_id, key.code)
        await self._notifier.notify_admin_payment(order.chat_id, package_id, data.invoice_id)

        if data.invoice_id:
            await self._orders.delete(data.invoice_id)
        await self._orders.delete(order.chat_id)

        return WebhookResult(
            status="ok",
            activation_key=key.code,
            chat_id=order.chat_id,
            package_id=package_id,
        )
