from __future__ import annotations

import base64
import json
import logging
import mimetypes
from datetime import timedelta
from pathlib import Path

import httpx

from yandex_ocr.core.config import Settings
from yandex_ocr.schemas.messages import DocumentContent, ImageContent, UserMessage
from yandex_ocr.schemas.ocr import OcrResult
from yandex_ocr.services.ocr.base import BaseOcrClient
from yandex_ocr.services.ocr.yandex.credentials import AuthMode, CredentialStore
from yandex_ocr.services.ocr.yandex.exceptions import ConstructionError, ValidationError
from yandex_ocr.services.ocr.yandex.polling import MAX_ATTEMPTS, POLL_DELAY_SECONDS, ResultPoller
from yandex_ocr.services.ocr.yandex.request_builder import RequestBuilder
from yandex_ocr.services.ocr.yandex.submit import JobSubmitter
from yandex_ocr.services.ocr.yandex.token import TOKEN_VALIDITY, CommandTokenIssuer, TokenIssuer, TokenRefresher

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "page"


class YandexOcrClient(BaseOcrClient):
    """Yandex Cloud OCR: submit a document, then poll until it is recognized."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        token: str | None = None,
        folder_id: str | None = None,
        token_pattern: str | None = None,
        languages: list[str] | None = None,
        model: str | None = None,
        issuer: TokenIssuer | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 120.0,
        max_attempts: int = MAX_ATTEMPTS,
        poll_delay: float = POLL_DELAY_SECONDS,
        poll_timeout: float | None = None,
        token_validity: timedelta = TOKEN_VALIDITY,
    ) -> None:
        store_kwargs = {
            "api_key": api_key,
            "token": token,
            "folder_id": folder_id,
            "languages": list(languages or []),
        }
        if base_url:
            store_kwargs["base_url"] = base_url
        if token_pattern:
            store_kwargs["token_pattern"] = token_pattern

        self.store = CredentialStore(**store_kwargs)
        self.model = model or DEFAULT_MODEL
        self.max_attempts = max_attempts
        self.poll_delay = poll_delay
        self.poll_timeout = poll_timeout

        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self.refresher = TokenRefresher(self.store, issuer=issuer, validity=token_validity)
        self.builder = RequestBuilder(self.store, self.refresher, self._client)
        self.submitter = JobSubmitter(self.builder, self._client)

        logger.info(
            "Yandex OCR client initialized: base_url=%s mode=%s model=%s",
            self.store.base_url,
            self.store.mode.value,
            self.model,
        )

    @classmethod
    def from_settings(cls, config: Settings, **kwargs) -> YandexOcrClient:
        options = {
            "base_url": config.yandex_ocr_base_url,
            "api_key": config.yandex_api_key,
            "token": config.yandex_iam_token,
            "folder_id": config.yandex_folder_id,
            "token_pattern": config.yandex_token_pattern,
            "languages": config.yandex_ocr_languages,
            "model": config.yandex_ocr_model,
            "issuer": CommandTokenIssuer(config.yandex_token_command),
            "timeout": config.http_timeout_seconds,
            "max_attempts": config.yandex_poll_max_attempts,
            "poll_delay": config.yandex_poll_delay_seconds,
            "poll_timeout": config.yandex_poll_timeout_seconds,
            "token_validity": timedelta(seconds=config.yandex_token_validity_seconds),
        }
        options.update(kwargs)
        return cls(**options)

    @classmethod
    def from_env(cls, **kwargs) -> YandexOcrClient:
        """Build an API-key client from ``YANDEX_API_KEY``."""

        config = Settings()
        if not config.yandex_api_key:
            raise ConstructionError("YANDEX_API_KEY not set")
        return cls.from_settings(config, folder_id=None, **kwargs)

    async def __aenter__(self) -> YandexOcrClient:
        return self

    async def __aexit__(self, *_exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def verify(self, *, force: bool = False) -> None:
        """Make sure a usable token is held; in API-key mode there is nothing to do."""

        if self.store.mode is AuthMode.BEARER_TOKEN:
            await self.refresher.refresh(force=force)

    async def complete(
        self,
        message: UserMessage,
        *,
        model: str | None = None,
        languages: list[str] | None = None,
        timeout: float | None = None,
    ) -> OcrResult:
        """Submit the document in ``message`` and wait for its recognition result."""

        operation = await self.submitter.submit(
            message,
            languages=languages or self.store.languages,
            model=model or self.model,
        )
        poller = ResultPoller(
            self.builder,
            self._client,
            max_attempts=self.max_attempts,
            delay=self.poll_delay,
        )
        return await poller.poll(operation.id, timeout=timeout if timeout is not None else self.poll_timeout)

    async def extract(
        self,
        source: str | bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> OcrResult:
        if isinstance(source, bytes):
            data = source
        else:
            path = Path(source)
            data = path.read_bytes()
            filename = filename or path.name

        if not data:
            raise ValidationError("document is empty")

        mime_type = self._resolve_mime_type(filename, content_type)
        message = self.message_from_bytes(data, mime_type)

        logger.info("Recognizing %s (%s, %d bytes)", filename or "bytes", mime_type, len(data))
        return await self.complete(message)

    @staticmethod
    def message_from_bytes(data: bytes, mime_type: str) -> UserMessage:
        encoded = base64.b64encode(data).decode("ascii")
        part_cls = ImageContent if mime_type.startswith("image/") else DocumentContent
        return UserMessage(content=[part_cls(data=encoded, media_type=mime_type)])

    def _resolve_mime_type(self, filename: str | None, content_type: str | None) -> str:
        if content_type:
            return content_type.split(";")[0].strip().lower()
        if filename:
            guessed, _ = mimetypes.guess_type(filename)
            if guessed:
                return guessed
        raise ValidationError(f"cannot determine mime type of {filename or 'bytes'}")


def render_completion_text(result: OcrResult) -> str:
    """Flatten a result into the text block handed to completion-style consumers."""

    annotation = result.text_annotation
    entities = [entity.model_dump() for entity in annotation.entities] if annotation.entities is not None else None
    return (
        f"ENTITIES:{json.dumps(entities, ensure_ascii=False)}\n\n"
        f"MARKDOWN:{json.dumps(annotation.markdown, ensure_ascii=False)}\n\n"
        f"FULL_TEXT:{json.dumps(annotation.full_text, ensure_ascii=False)}"
    )
