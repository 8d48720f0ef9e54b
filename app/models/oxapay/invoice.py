from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class InvoiceCustomData(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    chatId: Optional[str] = None
    packageId: Optional[str] = None


class InvoiceRequest(BaseModel):
    merchant: Optional[str] = None
    price_amount: float
    price_currency: str
    pay_currency: str
    order_id: str
    callback_url: str
    description: str
    cancel_url: str
    success_url: str
    custom: InvoiceCustomData


class Invoice(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    invoice_id: str
    invoice_url: str
    meta: Optional[Dict[str, Any]] = None
