from typing import Literal

from pydantic import BaseModel, Field

from yandex_ocr.schemas.ocr import OcrResult


class HealthResponse(BaseModel):
    status: Literal["ok"]
    auth_mode: str | None = Field(default=None, description="Auth mode of the OCR client, null when not configured")


class RecognizeResponse(BaseModel):
    full_text: str
    markdown: str | None = None
    result: OcrResult = Field(..., description="Raw recognition payload")
