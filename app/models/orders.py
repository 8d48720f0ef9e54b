from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class RegisterDTO(CamelModel):
    chat_id: Optional[str] = Field(default=None, alias="chatId")
    username: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="displayName")


class RegisterResDTO(BaseModel):
    status: str = "registered"


class CreatePaymentDTO(CamelModel):
    chat_id: Optional[str] = Field(default=None, alias="chatId")
    package_id: Optional[str] = Field(default=None, alias="packageId")
    amount: Optional[float] = None
    currency: Optional[str] = None


class CreatePaymentResDTO(CamelModel):
    payment_url: str = Field(alias="paymentUrl")
    invoice_id: str = Field(alias="invoiceId")


class PendingOrder(BaseModel):
    """
    A buyer's registration (keyed by chat id) or an in-flight purchase (keyed by invoice id).
    Registration entries carry no package details.
    """
    chat_id: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    package_id: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    invoice_id: Optional[str] = None
    registered_at: datetime
