"""Pytest configuration and fixtures"""
import os
from typing import List, Optional
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables before the settings module is imported
os.environ.setdefault("PUBLIC_BASE_URL", "https://shop.test")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("DEBUG", "true")
os.environ["TELEGRAM_BOT_TOKEN"] = ""
os.environ["OXAPAY_CALLBACK_SECRET"] = ""

from app.exceptions import InvoiceCreationFailed  # noqa: E402
from app.models.oxapay.invoice import Invoice, InvoiceRequest  # noqa: E402
from app.repository.activation_keys_repository import ActivationKeysRepository  # noqa: E402
from app.repository.orders_repository import OrdersRepository  # noqa: E402
from app.services.notifications_service import TelegramNotificationService  # noqa: E402
from app.services.orders_service import OrderService  # noqa: E402
from app.services.signature_service import SignatureVerifier  # noqa: E402
from app.services.store.memory_store import InMemoryKeyValueStore  # noqa: E402

CALLBACK_SECRET = "test-secret"


class FakeOxaPayService:
    """Stands in for OxaPay: hands out invoice ids in order, or fails on demand."""

    def __init__(self, invoice_ids: Optional[List[str]] = None, fail: bool = False):
        self.invoice_ids = list(invoice_ids or ["INV1"])
        self.fail = fail
        self.requests: List[InvoiceRequest] = []

    async def create_invoice(self, request: InvoiceRequest) -> Invoice:
        self.requests.append(request)
        if self.fail:
            raise InvoiceCreationFailed()
        invoice_id = self.invoice_ids.pop(0)
        return Invoice(invoice_id=invoice_id, invoice_url=f"https://pay.oxapay.test/{invoice_id}")


@pytest.fixture
def orders_store():
    return InMemoryKeyValueStore(OrdersRepository.namespace)


@pytest.fixture
def keys_store():
    return InMemoryKeyValueStore(ActivationKeysRepository.namespace)


@pytest.fixture
def orders_repository(orders_store):
    return OrdersRepository(orders_store)


@pytest.fixture
def keys_repository(keys_store):
    return ActivationKeysRepository(keys_store)


@pytest.fixture
def oxapay():
    return FakeOxaPayService()


@pytest.fixture
def mock_bot():
    bot = Mock()
    bot.send_message = AsyncMock()
    bot.session = Mock()
    bot.session.close = AsyncMock()
    return bot


@pytest.fixture
def notifier(mock_bot):
    return TelegramNotificationService(bot=mock_bot, admin_chat_id=None)


@pytest.fixture
def verifier():
    return SignatureVerifier(CALLBACK_SECRET)


@pytest.fixture
def order_service(orders_repository, keys_repository, oxapay, notifier, verifier):
    return OrderService(
        orders=orders_repository,
        keys=keys_repository,
        oxapay=oxapay,
        notifier=notifier,
        verifier=verifier,
    )
