from app.api.health import router as health_router
from app.api.payments import router as payments_router
from app.api.telegram import router as telegram_router
from app.api.webhooks import router as webhooks_router

__all__ = ["health_router", "payments_router", "telegram_router", "webhooks_router"]
