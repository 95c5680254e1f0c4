from __future__ import annotations

import asyncio
import enum
import logging

import httpx

from yandex_ocr.schemas.ocr import OcrResult
from yandex_ocr.services.ocr.yandex.classify import classify, resolve
from yandex_ocr.services.ocr.yandex.exceptions import PollExhaustedError, PollTimeoutError
from yandex_ocr.services.ocr.yandex.request_builder import RequestBuilder

logger = logging.getLogger(__name__)

RESULT_PATH = "/getRecognition"
MAX_ATTEMPTS = 30
POLL_DELAY_SECONDS = 0.6


class PollState(str, enum.Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


class ResultPoller:
    """Polls ``getRecognition`` with a fixed attempt budget and a fixed delay."""

    def __init__(
        self,
        builder: RequestBuilder,
        http_client: httpx.AsyncClient,
        *,
        max_attempts: int = MAX_ATTEMPTS,
        delay: float = POLL_DELAY_SECONDS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.builder = builder
        self._client = http_client
        self.max_attempts = max_attempts
        self.delay = delay
        self.state = PollState.PENDING
        self.attempts = 0

    async def poll(self, operation_id: str, *, timeout: float | None = None) -> OcrResult:
        if timeout is None:
            return await self._poll(operation_id)
        try:
            return await asyncio.wait_for(self._poll(operation_id), timeout)
        except asyncio.TimeoutError as exc:
            self.state = PollState.EXHAUSTED
            raise PollTimeoutError(
                f"could not retrieve result within {timeout}s",
                attempts=self.attempts,
            ) from exc

    async def _poll(self, operation_id: str) -> OcrResult:
        self.state = PollState.PENDING
        self.attempts = 0
        last_status: int | None = None
        last_error: httpx.TransportError | None = None

        while self.attempts < self.max_attempts:
            self.attempts += 1
            logger.debug("Attempt %d/%d to get result of %s", self.attempts, self.max_attempts, operation_id)

            request = await self.builder.build("GET", RESULT_PATH, params={"operationId": operation_id})
            try:
                response = await self._client.send(request)
            except httpx.TransportError as exc:
                last_error = exc
                logger.warning("Result request for %s failed: %s", operation_id, exc)
            else:
                if response.is_success:
                    self.state = PollState.SUCCEEDED
                    logger.info("Result of %s received after %d attempt(s)", operation_id, self.attempts)
                    return resolve(classify(response.content), stage="poll")
                last_status = response.status_code
                last_error = None
                logger.debug("Result of %s not ready: HTTP %s %s", operation_id, response.status_code, response.text)

            if self.attempts < self.max_attempts:
                await asyncio.sleep(self.delay)

        self.state = PollState.EXHAUSTED
        logger.error("Giving up on %s after %d attempts", operation_id, self.attempts)
        if last_error is not None:
            cause = f"last attempt failed: {last_error!r}"
        else:
            cause = f"last status: HTTP {last_status}"
        raise PollExhaustedError(
            f"could not retrieve result of {operation_id} ({cause})",
            attempts=self.attempts,
            last_status=last_status,
            last_error=last_error,
        ) from last_error
