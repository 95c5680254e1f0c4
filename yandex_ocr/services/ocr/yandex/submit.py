from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError as PydanticValidationError

from yandex_ocr.schemas.messages import DocumentContent, ImageContent, UserMessage
from yandex_ocr.schemas.ocr import AsyncOperation, RecognizeRequest
from yandex_ocr.services.ocr.yandex.exceptions import (
    ProviderError,
    TransportError,
    UnexpectedShapeError,
    ValidationError,
)
from yandex_ocr.services.ocr.yandex.request_builder import RequestBuilder

logger = logging.getLogger(__name__)

SUBMIT_PATH = "/recognizeTextAsync"


@dataclass(frozen=True)
class DocumentPayload:
    content: str
    mime_type: str


def extract_content(message: UserMessage) -> DocumentPayload:
    """Pick the single base64 document or image out of a user message."""

    parts = [part for part in message.content if isinstance(part, (DocumentContent, ImageContent))]
    if not parts:
        raise ValidationError("message must contain a document or an image")
    if len(parts) > 1:
        raise ValidationError(f"can only send one document at a time, got {len(parts)}")

    part = parts[0]
    if part.encoding != "base64":
        raise ValidationError(f"{part.type} content should be base64 encoded, got {part.encoding}")
    if not part.data:
        raise ValidationError(f"{part.type} content is empty")
    if not part.media_type:
        raise ValidationError(f"{part.type} content has no media type")
    return DocumentPayload(content=part.data, mime_type=part.media_type)


class JobSubmitter:
    def __init__(self, builder: RequestBuilder, http_client: httpx.AsyncClient) -> None:
        self.builder = builder
        self._client = http_client

    async def submit(
        self,
        message: UserMessage,
        *,
        languages: list[str],
        model: str,
    ) -> AsyncOperation:
        """Send the document in ``message`` for recognition and return the accepted job."""

        document = extract_content(message)
        payload = RecognizeRequest(
            mime_type=document.mime_type,
            language_codes=list(languages),
            model=model,
            content=document.content,
        ).to_payload()
        logger.debug(
            "Submitting %s document (%d base64 chars), model=%s languages=%s",
            document.mime_type,
            len(document.content),
            model,
            languages,
        )

        request = await self.builder.build("POST", SUBMIT_PATH, json=payload)
        try:
            response = await self._client.send(request)
        except httpx.TransportError as exc:
            raise TransportError(f"could not submit document: {exc}", stage="submit") from exc

        if not response.is_success:
            body = response.text or "unknown error"
            logger.warning("Submission rejected with HTTP %s: %s", response.status_code, body)
            raise ProviderError(body, stage="submit", status_code=response.status_code)

        try:
            operation = AsyncOperation.model_validate_json(response.content)
        except PydanticValidationError as exc:
            raise UnexpectedShapeError(
                f"submission response is not an operation: {exc.error_count()} validation error(s)",
                stage="submit",
                body=response.text,
            ) from exc

        logger.info("Recognition job accepted: id=%s done=%s", operation.id, operation.done)
        return operation
