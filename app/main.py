from fastapi import FastAPI

from app.api.admin import router as admin_router
from app.api.chat import router as chat_router
from app.core.config import settings
from app.core.logging_setup import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking Assistant", version="1.0.0")

app.include_router(chat_router, tags=["chat"])
app.include_router(admin_router, tags=["admin"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
