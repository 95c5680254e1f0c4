"""Classification of ``getRecognition`` bodies.

A body is tagged explicitly as a success, a provider error or an
unrecognized shape; the last arm is never folded into the other two.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Union

from pydantic import ValidationError as PydanticValidationError

from yandex_ocr.schemas.ocr import ApiErrorBody, OcrResult, RecognitionResponse
from yandex_ocr.services.ocr.yandex.exceptions import ProviderError, UnexpectedShapeError


@dataclass(frozen=True)
class RecognitionSucceeded:
    result: OcrResult


@dataclass(frozen=True)
class ProviderFailure:
    message: str


@dataclass(frozen=True)
class UnrecognizedBody:
    reason: str
    body: str


ClassifiedResponse = Union[RecognitionSucceeded, ProviderFailure, UnrecognizedBody]


def classify(body: str | bytes) -> ClassifiedResponse:
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return UnrecognizedBody(reason=f"body is not JSON: {exc.msg}", body=text)

    if not isinstance(data, dict):
        return UnrecognizedBody(reason=f"expected a JSON object, got {type(data).__name__}", body=text)

    if "result" in data:
        try:
            return RecognitionSucceeded(RecognitionResponse.model_validate(data).result)
        except PydanticValidationError as exc:
            return UnrecognizedBody(reason=f"malformed result: {exc.error_count()} validation error(s)", body=text)

    if isinstance(data.get("message"), str):
        return ProviderFailure(ApiErrorBody.model_validate(data).message)

    return UnrecognizedBody(reason=f"unknown keys: {sorted(data)}", body=text)


def resolve(classified: ClassifiedResponse, *, stage: str = "poll") -> OcrResult:
    """Return the result or raise the error matching the classification."""

    if isinstance(classified, RecognitionSucceeded):
        return classified.result
    if isinstance(classified, ProviderFailure):
        raise ProviderError(classified.message, stage=stage)
    raise UnexpectedShapeError(
        f"unexpected response shape: {classified.reason}",
        stage=stage,
        body=classified.body,
    )
