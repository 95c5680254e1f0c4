import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from yandex_ocr.api.routes.health import router as health_router
from yandex_ocr.api.routes.ocr import router as ocr_router
from yandex_ocr.core.config import settings
from yandex_ocr.services.ocr.yandex import YandexOcrClient
from yandex_ocr.state import global_state

from yandex_ocr.core.logging import setup_logging

# 在 app 创建之前初始化日志
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Yandex OCR Service...")

    if settings.has_credentials:
        global_state.ocr_client = YandexOcrClient.from_settings(settings)
    else:
        logger.warning("No Yandex credentials configured, OCR endpoints will answer 503")

    logger.info("System ready!")
    yield

    if global_state.ocr_client is not None:
        await global_state.ocr_client.aclose()
        global_state.ocr_client = None
    logger.info("Shutting down service...")


app = FastAPI(title="Yandex OCR Service", lifespan=lifespan)

app.include_router(health_router, prefix="/api")
app.include_router(ocr_router, prefix="/api")
