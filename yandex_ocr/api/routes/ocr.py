import logging
from typing import Final

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from yandex_ocr.api.deps import OCRClientDep
from yandex_ocr.schemas.common import RecognizeResponse
from yandex_ocr.services.ocr.yandex import (
    PollExhaustedError,
    ProviderError,
    TokenRefreshError,
    TransportError,
    UnexpectedShapeError,
    ValidationError,
)

router = APIRouter(prefix="/ocr", tags=["ocr"])

logger = logging.getLogger(__name__)
ALLOWED_CONTENT_TYPES: Final[set[str]] = {
    "image/png",
    "image/jpeg",
    "image/jpg",
    "application/pdf",
}


def _parse_languages(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    codes = [code.strip() for code in raw.split(",") if code.strip()]
    return codes or None


@router.post(
    "/recognize",
    summary="Recognize text in a document",
    response_model=RecognizeResponse,
)
async def recognize(
    ocr_client: OCRClientDep,
    file: UploadFile = File(..., description="Image or PDF"),
    model: str | None = Form(default=None, description="Recognition model, e.g. page"),
    languages: str | None = Form(default=None, description="Comma separated language codes"),
) -> RecognizeResponse:
    """Submit an uploaded file to Yandex OCR and wait for the recognition result."""

    content_type = (file.content_type or "").lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported file type: {file.content_type}",
        )

    payload = await file.read()
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty.",
        )

    # image/jpg is not a registered type
    mime_type = "image/jpeg" if content_type == "image/jpg" else content_type
    message = ocr_client.message_from_bytes(payload, mime_type)

    try:
        result = await ocr_client.complete(
            message,
            model=model,
            languages=_parse_languages(languages),
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except TokenRefreshError as exc:
        logger.error("Token refresh failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except PollExhaustedError as exc:
        logger.warning("Recognition timed out after %d attempts", exc.attempts)
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(exc)) from exc
    except (TransportError, ProviderError, UnexpectedShapeError) as exc:
        logger.error("Recognition failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return RecognizeResponse(
        full_text=result.full_text,
        markdown=result.text_annotation.markdown,
        result=result,
    )
