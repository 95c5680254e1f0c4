from typing import Annotated
from fastapi import Depends, HTTPException
from yandex_ocr.services.ocr.yandex import YandexOcrClient
from yandex_ocr.state import global_state


async def get_ocr_client() -> YandexOcrClient:
    if not global_state.ocr_client:
        raise HTTPException(status_code=503, detail="OCR Service not initialized")
    return global_state.ocr_client


OCRClientDep = Annotated[YandexOcrClient, Depends(get_ocr_client)]
