from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import health_router, payments_router, telegram_router, webhooks_router
from app.depends.services import close_notification_service
from app.models.config import SignatureCheck, StoreBackend
from app.services.store.redis_store import RedisConnectionService
from app.settings import settings

logger = structlog.getLogger(__name__)

if not settings.debug and settings.sentry_dsn:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        traces_sample_rate=1.0,
        profiles_sample_rate=1.0,
    )


def log_configuration_warnings():
    if not settings.telegram_bot_token:
        logger.warning("TELEGRAM_BOT_TOKEN not set. Telegram messaging will be disabled.")
    if not settings.public_base_url:
        logger.warning("PUBLIC_BASE_URL not set. Webhooks will fail unless the server is reachable from OxaPay.")
    if settings.signature_check == SignatureCheck.DISABLED and not settings.debug:
        logger.warning("OXAPAY_CALLBACK_SECRET not set. Webhook signatures are not checked.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_configuration_warnings()
    try:
        if settings.store_backend == StoreBackend.REDIS:
            await RedisConnectionService().connect()
        yield
    finally:
        await close_notification_service()
        if settings.store_backend == StoreBackend.REDIS:
            await RedisConnectionService().disconnect()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed request", path=request.url.path, errors=str(exc.errors()))
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


app.include_router(telegram_router)
app.include_router(payments_router)
app.include_router(webhooks_router)
app.include_router(health_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
