from typing import Optional

import httpx
import sentry_sdk
import structlog

from app.exceptions import InvoiceCreationFailed
from app.models.oxapay.invoice import Invoice, InvoiceRequest
from app.settings import settings

logger = structlog.getLogger(__name__)


class OxaPayService:
    invoice_path = "/merchant/invoice"

    def __init__(
            self,
            api_key: Optional[str] = None,
            merchant_id: Optional[str] = None,
            base_url: Optional[str] = None,
            timeout: Optional[float] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.oxapay_api_key
        self.merchant_id = merchant_id if merchant_id is not None else settings.oxapay_merchant_id
        self.base_url = (base_url or settings.oxapay_base_url).rstrip("/")
        self.timeout = timeout or settings.oxapay_invoice_timeout
        self._transport = transport

    def get_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
            timeout=self.timeout,
            transport=self._transport,
        )

    async def create_invoice(self, request: InvoiceRequest) -> Invoice:
        if request.merchant is None:
            request = request.model_copy(update={"merchant": self.merchant_id})
        async with self.get_http_client() as client:
            try:
                response = await client.post(
                    f"{self.base_url}{self.invoice_path}",
                    json=request.model_dump(mode="json"),
                )
                response.raise_for_status()
                return Invoice.model_validate(response.json())
            except httpx.HTTPStatusError as e:
                logger.error(
                    "OxaPay rejected invoice request",
                    status_code=e.response.status_code,
                    content=e.response.text,
                    order_id=request.order_id,
                )
                sentry_sdk.capture_exception(e)
                raise InvoiceCreationFailed() from e
            except httpx.HTTPError as e:
                logger.error("Failed to reach OxaPay", error=repr(e), order_id=request.order_id)
                sentry_sdk.capture_exception(e)
                raise InvoiceCreationFailed() from e
            except ValueError as e:  # malformed JSON or missing invoice fields
                logger.error("Unexpected OxaPay invoice response", error=str(e), order_id=request.order_id)
                sentry_sdk.capture_exception(e)
                raise InvoiceCreationFailed() from e
