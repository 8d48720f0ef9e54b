from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.orders import CamelModel


class ActivationKey(BaseModel):
    code: str
    chat_id: str
    package_id: Optional[str] = None
    created_at: datetime


class VerifyKeyDTO(CamelModel):
    chat_id: Optional[str] = Field(default=None, alias="chatId")
    activation_key: Optional[str] = Field(default=None, alias="activationKey")


class VerifyKeyResDTO(CamelModel):
    status: str = "valid"
    package_id: Optional[str] = Field(default=None, alias="packageId")
