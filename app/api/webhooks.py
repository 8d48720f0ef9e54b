from typing import Any, Dict

import structlog
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sentry_sdk import capture_exception, capture_message, set_context
from starlette.requests import Request

from app.depends.services import get_order_service
from app.exceptions import InvalidSignature, RelayError
from app.services.orders_service import OrderService

router = APIRouter(prefix="/api/oxapay", tags=["webhooks"])

logger = structlog.getLogger(__name__)

SIGNATURE_HEADER = "X-OxaPay-Signature"


@router.post("/webhook")
async def oxapay_webhook(
        data: Dict[str, Any],
        req: Request,
        service: OrderService = Depends(get_order_service),
):
    signature = req.headers.get(SIGNATURE_HEADER)
    try:
        result = await service.handle_payment_webhook(data, signature)
    except InvalidSignature as e:
        set_context("oxapay_webhook", {"signature": signature, "data": data})
        capture_message("Invalid signature")
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    except RelayError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    except Exception as e:
        logger.error("Failed to process webhook", error=str(e))
        capture_exception(e)
        raise HTTPException(status_code=500, detail="Failed to process webhook")

    if result.status == "ignored":
        return JSONResponse(status_code=202, content={"status": "ignored", "reason": result.reason})
    return {"status": "ok"}
