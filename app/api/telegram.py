from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.exceptions import KeyNotFound, OwnerMismatch, RelayError
from app.depends.services import get_key_verification_service, get_order_service
from app.models.activation import VerifyKeyDTO, VerifyKeyResDTO
from app.models.orders import RegisterDTO, RegisterResDTO
from app.services.activation_service import KeyVerificationService
from app.services.orders_service import OrderService

router = APIRouter(prefix="/api/telegram", tags=["telegram"])


@router.post("/register")
async def register(
        data: Optional[RegisterDTO] = None,
        service: OrderService = Depends(get_order_service),
) -> RegisterResDTO:
    """
    Called by the bot on /start. Re-registering overwrites the previous entry.
    """
    data = data or RegisterDTO()
    try:
        await service.register(data.chat_id, data.username, data.display_name)
    except RelayError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    return RegisterResDTO()


@router.post("/verify-key", response_model=VerifyKeyResDTO, response_model_by_alias=True)
async def verify_key(
        data: Optional[VerifyKeyDTO] = None,
        service: KeyVerificationService = Depends(get_key_verification_service),
):
    data = data or VerifyKeyDTO()
    try:
        key = await service.verify(data.chat_id, data.activation_key)
    except KeyNotFound:
        return JSONResponse(status_code=404, content={"status": "invalid"})
    except OwnerMismatch:
        return JSONResponse(status_code=403, content={"status": "mismatch"})
    except RelayError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    return VerifyKeyResDTO(package_id=key.package_id)
