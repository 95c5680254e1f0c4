from typing import Protocol, runtime_checkable

from yandex_ocr.schemas.ocr import OcrResult


@runtime_checkable
class BaseOcrClient(Protocol):
    async def extract(
        self,
        source: str | bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> OcrResult:
        """Recognize the provided document and return the raw recognition result."""
        ...
