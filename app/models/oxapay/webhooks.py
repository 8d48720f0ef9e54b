from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from app.models.oxapay.invoice import InvoiceCustomData


class PaymentStatus(str, Enum):
    COMPLETED = "completed"


class WebhookPayload(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    status: Optional[str] = None
    invoice_id: Optional[str] = None
    custom: Optional[InvoiceCustomData] = None

    @field_validator("custom", mode="before")
    @classmethod
    def _ignore_non_object_custom(cls, value):
        return value if isinstance(value, dict) else None

    @property
    def is_completed(self) -> bool:
        return self.status == PaymentStatus.COMPLETED.value


class WebhookResult(BaseModel):
    status: str
    reason: Optional[str] = None
    activation_key: Optional[str] = None
    chat_id: Optional[str] = None
    package_id: Optional[str] = None
