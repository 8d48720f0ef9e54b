from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.depends.services import get_order_service
from app.exceptions import RelayError
from app.models.orders import CreatePaymentDTO, CreatePaymentResDTO
from app.services.orders_service import OrderService

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("/create", response_model=CreatePaymentResDTO, response_model_by_alias=True)
async def create_payment(
        data: Optional[CreatePaymentDTO] = None,
        service: OrderService = Depends(get_order_service),
):
    data = data or CreatePaymentDTO()
    try:
        invoice = await service.create_invoice(data.chat_id, data.package_id, data.amount, data.currency)
    except RelayError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    return CreatePaymentResDTO(payment_url=invoice.invoice_url, invoice_id=invoice.invoice_id)
